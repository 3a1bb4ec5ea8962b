# smartspend/main.py
from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from datetime import datetime, timezone

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode
from aiogram.types import BotCommand
from aiogram.webhook.aiohttp_server import SimpleRequestHandler, setup_application
from aiohttp import web

from smartspend import __version__
from smartspend.core.config import Settings
from smartspend.core.db import Database
from smartspend.core.logging import setup_logging
from smartspend.services.ai import OpenAIClassifier
from smartspend.services.categorizer import CategoryResolver

log = logging.getLogger(__name__)


async def _set_bot_commands(bot: Bot) -> None:
    commands = [
        BotCommand(command="start", description="Welcome and category list"),
        BotCommand(command="help", description="What I can do"),
    ]
    await bot.set_my_commands(commands)


def _register_handlers(dp: Dispatcher) -> None:
    from smartspend.handlers import FAILED_HANDLERS, setup as setup_handlers
    setup_handlers(dp)
    if FAILED_HANDLERS:
        log.warning("Some handlers failed to load: %s", ", ".join(FAILED_HANDLERS))


def build_resolver(settings: Settings) -> CategoryResolver:
    if not settings.ai_enabled:
        log.warning("OPENAI_API_KEY is not set, keyword categorization only")
        return CategoryResolver()
    return CategoryResolver(OpenAIClassifier(api_key=settings.openai_api_key, model=settings.openai_model))


def build_dispatcher(db: Database, resolver: CategoryResolver, settings: Settings) -> Dispatcher:
    # workflow data: every handler can ask for db / resolver / settings by name
    dp = Dispatcher(db=db, resolver=resolver, settings=settings)
    _register_handlers(dp)
    return dp


async def _health(request: web.Request) -> web.Response:
    return web.json_response({"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()})


async def _root(request: web.Request) -> web.Response:
    return web.json_response({"message": "SmartSpend Telegram Bot", "status": "Running", "version": __version__})


def build_web_app(bot: Bot, dp: Dispatcher, settings: Settings) -> web.Application:
    app = web.Application()
    app.router.add_get("/health", _health)
    app.router.add_get("/", _root)
    SimpleRequestHandler(dispatcher=dp, bot=bot).register(app, path=settings.webhook_path)
    setup_application(app, dp, bot=bot)
    return app


async def _run_webhook(bot: Bot, dp: Dispatcher, settings: Settings) -> None:
    app = build_web_app(bot, dp, settings)
    await bot.set_webhook(f"{settings.webhook_url}{settings.webhook_path}")
    log.info("Webhook set: %s%s", settings.webhook_url, settings.webhook_path)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.host, settings.port)
    await site.start()
    log.info("Server running on %s:%s", settings.host, settings.port)
    try:
        await asyncio.Event().wait()
    finally:
        with suppress(Exception):
            await bot.delete_webhook()
        await runner.cleanup()


async def _run_polling(bot: Bot, dp: Dispatcher) -> None:
    await bot.delete_webhook()
    log.info("Bot starting polling…")
    await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())


async def main() -> None:
    settings = Settings.load()
    setup_logging(settings.log_level)

    db = Database(settings.database_url)
    await db.init_db()

    resolver = build_resolver(settings)
    bot = Bot(
        token=settings.bot_token,
        default=DefaultBotProperties(parse_mode=ParseMode.HTML),
    )
    dp = build_dispatcher(db, resolver, settings)
    await _set_bot_commands(bot)

    try:
        if settings.use_webhook:
            await _run_webhook(bot, dp, settings)
        else:
            await _run_polling(bot, dp)
    finally:
        with suppress(Exception):
            await bot.session.close()
        await db.dispose()
        logging.info("Bot stopped.")


def run() -> None:
    with suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
