# smartspend/handlers/fallback.py
from __future__ import annotations

from aiogram import Router
from aiogram.types import Message

from smartspend.handlers.common import IntentFilter
from smartspend.services.commands import Unknown
from smartspend.ui.messages import UNKNOWN_TEXT

router = Router(name=__name__)


@router.message(IntentFilter(Unknown))
async def unknown(m: Message) -> None:
    await m.answer(UNKNOWN_TEXT, parse_mode="HTML")
