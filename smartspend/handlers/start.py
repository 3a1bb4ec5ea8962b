# smartspend/handlers/start.py
# Onboarding (start) and help

from __future__ import annotations

from aiogram import Router
from aiogram.types import Message

from smartspend.core.db import Database
from smartspend.handlers.common import IntentFilter, current_user
from smartspend.repo.categories import get_categories
from smartspend.services.commands import Help, Start
from smartspend.ui import messages as ui

router = Router(name=__name__)


@router.message(IntentFilter(Start))
async def cmd_start(m: Message, db: Database) -> None:
    async with db.session() as s:
        user = await current_user(s, m)
        categories = await get_categories(s, user.id)
    await m.answer(ui.welcome(user.first_name, categories), parse_mode="HTML")


@router.message(IntentFilter(Help))
async def cmd_help(m: Message) -> None:
    await m.answer(ui.HELP_TEXT, parse_mode="HTML")
