# smartspend/models/records.py
# Typed records handed out by the repositories. The core never sees ORM rows.

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from smartspend.models.category import DEFAULT_EMOJI

CENT = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Whatever the driver returns (Decimal, float, str) -> Decimal with 2 places."""
    if isinstance(value, Decimal):
        return value.quantize(CENT)
    return Decimal(str(value)).quantize(CENT)


@dataclass(frozen=True)
class Category:
    id: int
    name: str
    emoji: str = DEFAULT_EMOJI
    is_default: bool = False
    owner_user_id: Optional[int] = None

    @property
    def label(self) -> str:
        return f"{self.name} {self.emoji}"

    @classmethod
    def from_row(cls, row: Any) -> "Category":
        return cls(
            id=int(row.id),
            name=str(row.name),
            emoji=row.emoji or DEFAULT_EMOJI,
            is_default=bool(row.is_default),
            owner_user_id=row.user_id,
        )


@dataclass(frozen=True)
class Expense:
    id: int
    unique_key: str
    name: str
    amount: Decimal
    category_id: Optional[int]
    user_id: int
    date: date
    created_at: datetime
    category_name: Optional[str] = None
    category_emoji: Optional[str] = None

    @classmethod
    def from_row(cls, row: Any, category: Any = None) -> "Expense":
        return cls(
            id=int(row.id),
            unique_key=str(row.unique_key),
            name=str(row.name),
            amount=to_money(row.amount),
            category_id=row.category_id,
            user_id=int(row.user_id),
            date=row.date,
            created_at=row.created_at,
            category_name=category.name if category is not None else None,
            category_emoji=category.emoji if category is not None else None,
        )


@dataclass(frozen=True)
class CategoryTotal:
    category_name: Optional[str]
    category_emoji: Optional[str]
    total_amount: Decimal
    expense_count: int
