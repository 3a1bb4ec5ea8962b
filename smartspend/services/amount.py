# smartspend/services/amount.py
# Amount parsing and display.

from __future__ import annotations
import re
from decimal import Context, Decimal, InvalidOperation
from typing import Any, Optional

# ASCII digits only, no sign, at most two fraction digits. No thousands separators.
_RX_AMOUNT = re.compile(r"[0-9]+(?:\.[0-9]{1,2})?")

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999.99")


def parse_amount(raw: str) -> Optional[Decimal]:
    """
    Returns the amount as Decimal with 2 places, or None when it is not
    a positive number with at most 2 decimals.
    Examples:
      "5.5"   -> Decimal("5.50")
      "0"     -> None
      "-3"    -> None
      "1.999" -> None
    """
    if raw is None:
        return None
    s = raw.strip()
    if not _RX_AMOUNT.fullmatch(s):
        return None
    value = Decimal(s)
    if value <= 0:
        return None
    # default precision (28) is too narrow for very long inputs; size it to the input
    return value.quantize(CENT, context=Context(prec=len(s) + 3))


def coerce_amount(value: Any) -> Optional[Decimal]:
    """Loose conversion for validation: numbers and numeric strings, anything else -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return d if d.is_finite() else None


def format_amount(amount: Any) -> str:
    return f"{Decimal(str(amount)).quantize(CENT)}"
