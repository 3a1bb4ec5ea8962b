# smartspend/services/tracker.py
"""
Per-message flows on top of the repositories. Every function works inside
the caller's session; a raised TrackerError means nothing was written.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from smartspend.models.records import Category, Expense
from smartspend.repo import categories as cat_repo
from smartspend.repo import expenses as exp_repo
from smartspend.services.categorizer import CategoryResolver
from smartspend.services.commands import AddCategory, AddExpense, Delete, EditCategory
from smartspend.services.errors import CategoryExists, CategoryNotFound, ExpenseNotFound, ExpenseRejected
from smartspend.services.matcher import match_category
from smartspend.services.periods import current_month, last_n_months
from smartspend.services.reports import Summary, report_summary
from smartspend.services.validation import validate_expense

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordedExpense:
    expense: Expense
    category: Category


async def record_expense(
    session: AsyncSession,
    user_id: int,
    command: AddExpense,
    resolver: CategoryResolver,
    *,
    on_date: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> RecordedExpense:
    """validate -> categorize -> allocate key + insert"""
    violations = validate_expense(command.name, command.amount)
    if violations:
        raise ExpenseRejected(violations)

    categories = await cat_repo.get_categories(session, user_id)
    category = await resolver.resolve(command.name, categories)
    expense = await exp_repo.add_expense(
        session,
        name=command.name,
        amount=command.amount,
        category_id=category.id,
        user_id=user_id,
        expense_date=on_date,
        rng=rng,
    )
    log.info('expense_added user=%s key=%s category="%s"', user_id, expense.unique_key, category.name)
    return RecordedExpense(expense=expense, category=category)


async def change_category(session: AsyncSession, user_id: int, command: EditCategory) -> RecordedExpense:
    categories = await cat_repo.get_categories(session, user_id)
    target = match_category(command.new_category_name, categories)
    if target is None:
        raise CategoryNotFound(command.new_category_name)

    updated = await exp_repo.update_expense(session, command.expense_id, user_id, category_id=target.id)
    if updated is None:
        raise ExpenseNotFound(command.expense_id)
    return RecordedExpense(expense=updated, category=target)


async def remove_expense(session: AsyncSession, user_id: int, command: Delete) -> Expense:
    deleted = await exp_repo.delete_expense(session, command.expense_id, user_id)
    if deleted is None:
        raise ExpenseNotFound(command.expense_id)
    log.info("expense_deleted user=%s key=%s", user_id, command.expense_id)
    return deleted


async def create_category(
    session: AsyncSession,
    user_id: int,
    command: AddCategory,
    resolver: CategoryResolver,
) -> Category:
    if await cat_repo.find_category(session, user_id, command.name):
        raise CategoryExists(command.name)
    emoji = await resolver.suggest_emoji(command.name)
    return await cat_repo.add_category(session, command.name, user_id, emoji=emoji)


async def month_summary(session: AsyncSession, user_id: int, ref: date, months: int = 1) -> Summary:
    start, end = current_month(ref) if months == 1 else last_n_months(ref, months)
    return await report_summary(session, user_id, start, end)


async def month_expenses(session: AsyncSession, user_id: int, ref: date) -> list[Expense]:
    start, end = current_month(ref)
    return await exp_repo.get_expenses(session, user_id, start, end)
