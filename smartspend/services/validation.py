# smartspend/services/validation.py
from __future__ import annotations

from typing import Any

from smartspend.services.amount import MAX_AMOUNT, coerce_amount

MAX_NAME_LENGTH = 255

NAME_REQUIRED = "Expense name is required"
AMOUNT_REQUIRED = "Valid expense amount is required"
NAME_TOO_LONG = f"Expense name is too long (max {MAX_NAME_LENGTH} characters)"
AMOUNT_TOO_LARGE = "Expense amount is too large"


def validate_expense(name: Any, amount: Any) -> list[str]:
    """
    All problems at once, in a fixed order. Empty list = valid.
    Never raises: the caller decides how to show the violations.
    """
    errors: list[str] = []
    text = name if isinstance(name, str) else ("" if name is None else str(name))
    value = coerce_amount(amount)

    if not text.strip():
        errors.append(NAME_REQUIRED)
    if value is None or value <= 0:
        errors.append(AMOUNT_REQUIRED)
    if len(text) > MAX_NAME_LENGTH:
        errors.append(NAME_TOO_LONG)
    if value is not None and value > MAX_AMOUNT:
        errors.append(AMOUNT_TOO_LARGE)
    return errors
