# smartspend/handlers/reports.py
from __future__ import annotations

from aiogram import Router
from aiogram.types import Message

from smartspend.core.config import Settings
from smartspend.core.db import Database
from smartspend.handlers.common import IntentFilter, current_user
from smartspend.services.commands import SummaryCurrentMonth, SummaryLastNMonths
from smartspend.services.periods import today
from smartspend.services.tracker import month_summary
from smartspend.ui import messages as ui

router = Router(name=__name__)


@router.message(IntentFilter(SummaryCurrentMonth, SummaryLastNMonths))
async def summary(
    m: Message,
    command: SummaryCurrentMonth | SummaryLastNMonths,
    db: Database,
    settings: Settings,
) -> None:
    months = command.n if isinstance(command, SummaryLastNMonths) else None
    ref = today(settings.tz)
    async with db.session() as s:
        user = await current_user(s, m)
        report = await month_summary(s, user.id, ref, months or 1)
    await m.answer(ui.summary(report, ui.summary_title(ref, months)), parse_mode="HTML")
