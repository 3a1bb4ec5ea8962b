# -*- coding: utf-8 -*-
# smartspend/services/periods.py
from __future__ import annotations
import calendar
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo


def today(tz: Optional[str] = None) -> date:
    if tz:
        return datetime.now(ZoneInfo(tz)).date()
    return datetime.now().date()


def month_start(d: date) -> date:
    return d.replace(day=1)


def month_end(d: date) -> date:
    return d.replace(day=calendar.monthrange(d.year, d.month)[1])


def shift_months(d: date, months: int) -> date:
    """First day of the month `months` away from d (negative = back in time)."""
    idx = d.year * 12 + (d.month - 1) + months
    return date(idx // 12, idx % 12 + 1, 1)


def current_month(ref: date) -> tuple[date, date]:
    return month_start(ref), month_end(ref)


def last_n_months(ref: date, n: int) -> tuple[date, date]:
    """
    N calendar months ending with the current one.
      n=1, ref=2024-03-15 -> 2024-03-01 .. 2024-03-31
      n=3, ref=2024-03-15 -> 2024-01-01 .. 2024-03-31
    """
    if n < 1:
        raise ValueError("n must be >= 1")
    return shift_months(ref, -(n - 1)), month_end(ref)


def month_title(ref: date) -> str:
    return ref.strftime("%B %Y")


def short_day(d: date) -> str:
    return d.strftime("%b %d")
