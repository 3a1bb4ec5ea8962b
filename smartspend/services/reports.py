# smartspend/services/reports.py
# Aggregations for the summary replies

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from smartspend.models.records import CategoryTotal
from smartspend.repo.expenses import summarize_by_category


@dataclass(frozen=True)
class SummaryLine:
    name: str
    emoji: str
    total: Decimal
    share: int  # whole percent


@dataclass(frozen=True)
class Summary:
    start: date
    end: date
    total: Decimal
    lines: list[SummaryLine]

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def biggest(self) -> Optional[SummaryLine]:
        return self.lines[0] if self.lines else None


def build_summary(start: date, end: date, totals: Sequence[CategoryTotal]) -> Summary:
    """Totals come sorted by amount desc from the store; the order is kept."""
    grand = sum((t.total_amount for t in totals), Decimal("0.00"))
    lines: list[SummaryLine] = []
    for t in totals:
        share = 0
        if grand > 0:
            share = int((t.total_amount / grand * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        lines.append(SummaryLine(
            name=t.category_name or "Uncategorized",
            emoji=t.category_emoji or "📝",
            total=t.total_amount,
            share=share,
        ))
    return Summary(start=start, end=end, total=grand, lines=lines)


async def report_summary(
    session: AsyncSession,
    user_db_id: int,
    start: date,
    end: date,
) -> Summary:
    totals = await summarize_by_category(session, user_db_id, start, end)
    return build_summary(start, end, totals)
