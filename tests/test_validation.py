from decimal import Decimal

from smartspend.services.validation import (
    AMOUNT_REQUIRED, AMOUNT_TOO_LARGE, NAME_REQUIRED, NAME_TOO_LONG, validate_expense,
)


def test_valid_expense():
    assert validate_expense("Coffee", Decimal("5.50")) == []


def test_limits_are_inclusive():
    assert validate_expense("x" * 255, Decimal("999999.99")) == []


def test_missing_everything():
    assert validate_expense("", None) == [NAME_REQUIRED, AMOUNT_REQUIRED]
    assert validate_expense(None, None) == [NAME_REQUIRED, AMOUNT_REQUIRED]


def test_blank_name():
    assert validate_expense("   ", 5) == [NAME_REQUIRED]


def test_bad_amounts():
    for amount in (0, -5, "abc", Decimal("0.00"), float("nan")):
        assert validate_expense("Coffee", amount) == [AMOUNT_REQUIRED], amount


def test_numeric_strings_are_accepted():
    assert validate_expense("Coffee", "12.5") == []


def test_too_long_and_too_large_together():
    assert validate_expense("x" * 256, Decimal("1000000")) == [NAME_TOO_LONG, AMOUNT_TOO_LARGE]


def test_messages():
    assert NAME_REQUIRED == "Expense name is required"
    assert NAME_TOO_LONG == "Expense name is too long (max 255 characters)"
