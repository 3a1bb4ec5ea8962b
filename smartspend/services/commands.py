# smartspend/services/commands.py
# What one incoming message means. Built fresh per message, never mutated.

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class AddExpense:
    name: str
    amount: Decimal


@dataclass(frozen=True)
class EditCategory:
    expense_id: str
    new_category_name: str


@dataclass(frozen=True)
class Delete:
    expense_id: str


@dataclass(frozen=True)
class AddCategory:
    name: str


@dataclass(frozen=True)
class ShowCategories:
    pass


@dataclass(frozen=True)
class SummaryCurrentMonth:
    pass


@dataclass(frozen=True)
class SummaryLastNMonths:
    n: int


@dataclass(frozen=True)
class ShowAllExpenses:
    pass


@dataclass(frozen=True)
class Unknown:
    pass


Command = Union[
    Start,
    Help,
    AddExpense,
    EditCategory,
    Delete,
    AddCategory,
    ShowCategories,
    SummaryCurrentMonth,
    SummaryLastNMonths,
    ShowAllExpenses,
    Unknown,
]
