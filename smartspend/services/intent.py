# smartspend/services/intent.py
"""
Text -> Command.

Two ordered tables: command rules first, then expense rules. The first rule
that matches the WHOLE trimmed message wins, so the order of each table is
the tie-break and must not be shuffled.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from smartspend.services.amount import parse_amount
from smartspend.services.commands import (
    AddCategory,
    AddExpense,
    Command,
    Delete,
    EditCategory,
    Help,
    ShowAllExpenses,
    ShowCategories,
    Start,
    SummaryCurrentMonth,
    SummaryLastNMonths,
    Unknown,
)

_AMOUNT = r"([0-9]+(?:\.[0-9]{1,2})?)"
_LEADING_ON = re.compile(r"^(?:on\s+)?", re.IGNORECASE)


def title_case(text: str) -> str:
    """«taxi ride» -> «Taxi Ride», «iPHONE case» -> «Iphone Case»."""
    return " ".join(w[:1].upper() + w[1:] for w in text.lower().split(" "))


def _rx(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


@dataclass(frozen=True)
class CommandRule:
    name: str
    pattern: re.Pattern[str]
    # None from build = "not really this command", try the next rule
    build: Callable[[re.Match[str]], Optional[Command]]


def _summary_months(m: re.Match[str]) -> Optional[Command]:
    n = int(m.group(1))
    return SummaryLastNMonths(n=n) if n >= 1 else None


COMMAND_RULES: tuple[CommandRule, ...] = (
    CommandRule(
        "edit_category",
        _rx(r"change\s+([0-9]{4})\s+to\s+(.+)"),
        lambda m: EditCategory(expense_id=m.group(1), new_category_name=title_case(m.group(2).strip())),
    ),
    CommandRule("delete", _rx(r"delete\s+([0-9]{4})"), lambda m: Delete(expense_id=m.group(1))),
    CommandRule(
        "add_category",
        _rx(r"add\s+category\s+(.+)"),
        lambda m: AddCategory(name=title_case(m.group(1).strip())),
    ),
    CommandRule("show_categories", _rx(r"show\s+(?:all\s+)?categor(?:y|ies)"), lambda m: ShowCategories()),
    CommandRule("summary_current", _rx(r"summary(?:\s+please)?"), lambda m: SummaryCurrentMonth()),
    CommandRule("summary_months", _rx(r"summary\s+for\s+last\s+([0-9]+)\s+months?"), _summary_months),
    CommandRule("show_all", _rx(r"show\s+all(?:\s+of\s+my)?\s+expenses?"), lambda m: ShowAllExpenses()),
    CommandRule("help", _rx(r"help|/help"), lambda m: Help()),
    CommandRule("start", _rx(r"/start|start"), lambda m: Start()),
)


@dataclass(frozen=True)
class ExpenseRule:
    name: str
    pattern: re.Pattern[str]
    name_group: int
    amount_group: int


EXPENSE_RULES: tuple[ExpenseRule, ...] = (
    # "Coffee $5.50" / "Coffee 5.50"
    ExpenseRule("name_amount", _rx(rf"(.+?)\s+\$?{_AMOUNT}"), 1, 2),
    # "Coffee 5$"
    ExpenseRule("name_amount_dollar", _rx(rf"(.+?)\s+{_AMOUNT}\$"), 1, 2),
    # "$5.50 Coffee" / "5.50 Coffee"
    ExpenseRule("amount_name", _rx(rf"\$?{_AMOUNT}\s+(.+)"), 2, 1),
    # "Coffee for $5.50"
    ExpenseRule("name_for_amount", _rx(rf"(.+?)\s+for\s+\$?{_AMOUNT}"), 1, 2),
    # "Spent $5.50 on Coffee"
    ExpenseRule("spent_on", _rx(rf"spent\s+\$?{_AMOUNT}\s+on\s+(.+)"), 2, 1),
)


def _clean_name(raw: str) -> str:
    return title_case(_LEADING_ON.sub("", raw.strip(), count=1).strip())


def parse_command(text: str) -> Optional[Command]:
    for rule in COMMAND_RULES:
        m = rule.pattern.fullmatch(text)
        if not m:
            continue
        cmd = rule.build(m)
        if cmd is not None:
            return cmd
    return None


def parse_expense(text: str) -> Optional[AddExpense]:
    """
    Try each expense shape in order. A bad amount or an empty name only
    discards that candidate, the next shape still gets its chance.
    Examples:
      "Coffee $5"                -> AddExpense("Coffee", 5.00)
      "spent $12.5 on taxi ride" -> AddExpense("Taxi Ride", 12.50)
      "Coffee 0"                 -> None
    """
    for rule in EXPENSE_RULES:
        m = rule.pattern.fullmatch(text)
        if not m:
            continue
        amount = parse_amount(m.group(rule.amount_group))
        if amount is None:
            continue
        name = _clean_name(m.group(rule.name_group))
        if not name:
            continue
        return AddExpense(name=name, amount=amount)
    return None


def classify(text: object) -> Command:
    if not isinstance(text, str):
        return Unknown()
    clean = text.strip()
    if not clean:
        return Unknown()
    return parse_command(clean) or parse_expense(clean) or Unknown()
