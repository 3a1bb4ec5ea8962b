# smartspend/repo/expenses.py
from __future__ import annotations

import logging
import random
from datetime import datetime, date
from decimal import Decimal
from typing import Optional

from sqlalchemy import select, and_, desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from smartspend.models.category import CategoryRow
from smartspend.models.expense import ExpenseRow
from smartspend.models.records import CategoryTotal, Expense, to_money
from smartspend.services.keys import allocate_key

log = logging.getLogger(__name__)

# insert attempts when a concurrent request grabbed the same key first
KEY_INSERT_ATTEMPTS = 3


async def existing_keys(session: AsyncSession) -> set[str]:
    """Every key in use, across ALL users."""
    q = await session.execute(select(ExpenseRow.unique_key))
    return set(q.scalars().all())


async def key_exists(session: AsyncSession, key: str) -> bool:
    q = await session.execute(select(ExpenseRow.id).where(ExpenseRow.unique_key == key).limit(1))
    return q.first() is not None


async def _with_category(session: AsyncSession, row: ExpenseRow) -> Expense:
    cat = None
    if row.category_id is not None:
        cat = await session.get(CategoryRow, row.category_id)
    return Expense.from_row(row, cat)


async def add_expense(
    session: AsyncSession,
    name: str,
    amount: Decimal,
    category_id: int,
    user_id: int,
    expense_date: date | None = None,
    rng: Optional[random.Random] = None,
) -> Expense:
    """
    Allocate a fresh key and insert. The insert runs in a SAVEPOINT so a
    unique-key collision with a concurrent insert only costs a re-draw.
    """
    last_error: IntegrityError | None = None
    for attempt in range(1, KEY_INSERT_ATTEMPTS + 1):
        taken = await existing_keys(session)
        key = allocate_key(taken, rng=rng)
        row = ExpenseRow(
            unique_key=key,
            name=name,
            amount=amount,
            category_id=category_id,
            user_id=user_id,
            date=expense_date or date.today(),
            created_at=datetime.utcnow(),
        )
        try:
            async with session.begin_nested():
                session.add(row)
                await session.flush()
        except IntegrityError as e:
            last_error = e
            log.warning("expense_key_collision key=%s attempt=%s", key, attempt)
            continue
        return await _with_category(session, row)

    assert last_error is not None
    raise last_error


async def _get_row(session: AsyncSession, key: str, user_id: int) -> ExpenseRow | None:
    q = await session.execute(select(ExpenseRow).where(
        and_(ExpenseRow.unique_key == key, ExpenseRow.user_id == user_id)
    ))
    return q.scalar_one_or_none()


async def get_expense(session: AsyncSession, key: str, user_id: int) -> Expense | None:
    row = await _get_row(session, key, user_id)
    return await _with_category(session, row) if row else None


async def update_expense(
    session: AsyncSession,
    key: str,
    user_id: int,
    *,
    name: str | None = None,
    amount: Decimal | None = None,
    category_id: int | None = None,
    expense_date: date | None = None,
) -> Expense | None:
    """Only the expense owner can touch it. None = no such key for this user."""
    row = await _get_row(session, key, user_id)
    if not row:
        return None
    if name:
        row.name = name
    if amount:
        row.amount = amount
    if category_id:
        row.category_id = category_id
    if expense_date:
        row.date = expense_date
    await session.flush()
    return await _with_category(session, row)


async def delete_expense(session: AsyncSession, key: str, user_id: int) -> Expense | None:
    row = await _get_row(session, key, user_id)
    if not row:
        return None
    deleted = await _with_category(session, row)
    await session.delete(row)
    await session.flush()
    return deleted


async def get_expenses(
    session: AsyncSession,
    user_id: int,
    start: date | None = None,
    end: date | None = None,
) -> list[Expense]:
    """Newest first."""
    conds = [ExpenseRow.user_id == user_id]
    if start:
        conds.append(ExpenseRow.date >= start)
    if end:
        conds.append(ExpenseRow.date <= end)
    q = await session.execute(
        select(ExpenseRow, CategoryRow)
        .outerjoin(CategoryRow, ExpenseRow.category_id == CategoryRow.id)
        .where(and_(*conds))
        .order_by(desc(ExpenseRow.date), desc(ExpenseRow.created_at), desc(ExpenseRow.id))
    )
    return [Expense.from_row(e, c) for e, c in q.all()]


async def summarize_by_category(
    session: AsyncSession,
    user_id: int,
    start: date,
    end: date,
) -> list[CategoryTotal]:
    """Per-category totals over [start, end], biggest first."""
    total = func.sum(ExpenseRow.amount).label("total_amount")
    q = await session.execute(
        select(
            CategoryRow.name,
            CategoryRow.emoji,
            total,
            func.count(ExpenseRow.id).label("expense_count"),
        )
        .select_from(ExpenseRow)
        .outerjoin(CategoryRow, ExpenseRow.category_id == CategoryRow.id)
        .where(and_(
            ExpenseRow.user_id == user_id,
            ExpenseRow.date >= start,
            ExpenseRow.date <= end,
        ))
        .group_by(CategoryRow.id, CategoryRow.name, CategoryRow.emoji)
        .order_by(desc(total))
    )
    return [
        CategoryTotal(
            category_name=name,
            category_emoji=emoji,
            total_amount=to_money(amount or 0),
            expense_count=int(count or 0),
        )
        for name, emoji, amount, count in q.all()
    ]
