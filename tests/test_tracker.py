from datetime import date
from decimal import Decimal

import pytest

from fakes import FakeClassifier, SequenceRng
from smartspend.repo import expenses as exp_repo
from smartspend.services import tracker
from smartspend.services.categorizer import CategoryResolver
from smartspend.services.commands import AddCategory, AddExpense, Delete, EditCategory
from smartspend.services.errors import (
    CategoryExists, CategoryNotFound, ExpenseNotFound, ExpenseRejected,
)
from smartspend.services.intent import classify
from smartspend.services.validation import AMOUNT_TOO_LARGE


async def _add(db, user_id, text, resolver=None, rng=None, on_date=None):
    command = classify(text)
    assert isinstance(command, AddExpense)
    async with db.session() as s:
        return await tracker.record_expense(
            s, user_id, command, resolver or CategoryResolver(), on_date=on_date, rng=rng,
        )


@pytest.mark.asyncio
async def test_record_expense_with_keywords(db, user_id):
    recorded = await _add(db, user_id, "Uber 15", rng=SequenceRng(42))
    assert recorded.category.name == "Transportation"
    assert recorded.expense.unique_key == "0042"
    assert recorded.expense.name == "Uber"
    assert recorded.expense.amount == Decimal("15.00")


@pytest.mark.asyncio
async def test_record_expense_with_classifier(db, user_id):
    resolver = CategoryResolver(FakeClassifier(answer="Shopping"))
    recorded = await _add(db, user_id, "spent $12.5 on taxi ride", resolver=resolver)
    assert recorded.category.name == "Shopping"
    assert recorded.expense.name == "Taxi Ride"
    assert len(recorded.expense.unique_key) == 4


@pytest.mark.asyncio
async def test_rejected_expense_writes_nothing(db, user_id):
    with pytest.raises(ExpenseRejected) as exc:
        async with db.session() as s:
            await tracker.record_expense(s, user_id, AddExpense("x" * 300, Decimal("2000000")), CategoryResolver())
    assert len(exc.value.violations) == 2
    async with db.session() as s:
        assert await exp_repo.get_expenses(s, user_id) == []


@pytest.mark.asyncio
async def test_delete_missing_key(db, user_id):
    await _add(db, user_id, "Coffee 5", rng=SequenceRng(1))
    with pytest.raises(ExpenseNotFound):
        async with db.session() as s:
            await tracker.remove_expense(s, user_id, Delete("0042"))
    async with db.session() as s:
        assert len(await exp_repo.get_expenses(s, user_id)) == 1


@pytest.mark.asyncio
async def test_delete(db, user_id):
    await _add(db, user_id, "Coffee 5", rng=SequenceRng(42))
    async with db.session() as s:
        deleted = await tracker.remove_expense(s, user_id, classify("delete 0042"))
    assert deleted.name == "Coffee"
    async with db.session() as s:
        assert await exp_repo.get_expenses(s, user_id) == []


@pytest.mark.asyncio
async def test_change_category_by_partial_name(db, user_id):
    await _add(db, user_id, "Coffee 5", rng=SequenceRng(42))
    async with db.session() as s:
        changed = await tracker.change_category(s, user_id, classify("change 0042 to health"))
    assert changed.category.name == "Health & Medical"
    async with db.session() as s:
        assert (await exp_repo.get_expense(s, "0042", user_id)).category_name == "Health & Medical"


@pytest.mark.asyncio
async def test_change_category_errors(db, user_id, other_user_id):
    await _add(db, user_id, "Coffee 5", rng=SequenceRng(42))
    with pytest.raises(CategoryNotFound):
        async with db.session() as s:
            await tracker.change_category(s, user_id, EditCategory("0042", "Zzz"))
    with pytest.raises(ExpenseNotFound):
        async with db.session() as s:
            await tracker.change_category(s, other_user_id, EditCategory("0042", "Travel"))
    async with db.session() as s:
        assert (await exp_repo.get_expense(s, "0042", user_id)).category_name == "Food & Dining"


@pytest.mark.asyncio
async def test_create_category(db, user_id):
    resolver = CategoryResolver(FakeClassifier(emoji="📈"))
    async with db.session() as s:
        cat = await tracker.create_category(s, user_id, classify("add category investments"), resolver)
    assert (cat.name, cat.emoji, cat.is_default) == ("Investments", "📈", False)

    # the new category is usable right away
    await _add(db, user_id, "Stocks 100", rng=SequenceRng(3))
    async with db.session() as s:
        changed = await tracker.change_category(s, user_id, EditCategory("0003", "Investments"))
    assert changed.category.id == cat.id


@pytest.mark.asyncio
async def test_create_duplicate_category(db, user_id):
    with pytest.raises(CategoryExists):
        async with db.session() as s:
            await tracker.create_category(s, user_id, AddCategory("Food & Dining"), CategoryResolver())


@pytest.mark.asyncio
async def test_month_summary_and_listing(db, user_id):
    await _add(db, user_id, "Coffee 5", rng=SequenceRng(1), on_date=date(2024, 3, 2))
    await _add(db, user_id, "Uber 15", rng=SequenceRng(2), on_date=date(2024, 3, 3))
    await _add(db, user_id, "Hotel 100", rng=SequenceRng(3), on_date=date(2024, 1, 20))

    async with db.session() as s:
        march = await tracker.month_summary(s, user_id, date(2024, 3, 15))
        quarter = await tracker.month_summary(s, user_id, date(2024, 3, 15), months=3)
        listed = await tracker.month_expenses(s, user_id, date(2024, 3, 15))

    assert march.total == Decimal("20.00")
    assert march.biggest.name == "Transportation"
    assert quarter.total == Decimal("120.00")
    assert quarter.biggest.name == "Travel"
    assert [e.name for e in listed] == ["Uber", "Coffee"]


@pytest.mark.asyncio
async def test_very_long_amount_is_rejected_as_too_large(db, user_id):
    command = classify("Coffee " + "9" * 30)
    with pytest.raises(ExpenseRejected) as exc:
        async with db.session() as s:
            await tracker.record_expense(s, user_id, command, CategoryResolver())
    assert exc.value.violations == [AMOUNT_TOO_LARGE]
    async with db.session() as s:
        assert await exp_repo.get_expenses(s, user_id) == []
