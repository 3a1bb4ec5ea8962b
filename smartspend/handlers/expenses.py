# -*- coding: utf-8 -*-
# smartspend/handlers/expenses.py
from __future__ import annotations

from aiogram import Router
from aiogram.types import Message

from smartspend.core.config import Settings
from smartspend.core.db import Database
from smartspend.handlers.common import IntentFilter, answer_long, current_user
from smartspend.services.categorizer import CategoryResolver
from smartspend.services.commands import AddExpense, Delete, EditCategory, ShowAllExpenses
from smartspend.services.errors import CategoryNotFound, ExpenseNotFound, ExpenseRejected
from smartspend.services.periods import today
from smartspend.services.tracker import change_category, month_expenses, record_expense, remove_expense
from smartspend.ui import messages as ui

router = Router(name=__name__)


@router.message(IntentFilter(AddExpense))
async def add_expense(
    m: Message,
    command: AddExpense,
    db: Database,
    resolver: CategoryResolver,
    settings: Settings,
) -> None:
    try:
        async with db.session() as s:
            user = await current_user(s, m)
            added = await record_expense(s, user.id, command, resolver, on_date=today(settings.tz))
    except ExpenseRejected as e:
        await m.answer(ui.rejected(e.violations))
        return
    await m.answer(ui.expense_added(added.expense, added.category), parse_mode="HTML")


@router.message(IntentFilter(EditCategory))
async def edit_category(m: Message, command: EditCategory, db: Database) -> None:
    try:
        async with db.session() as s:
            user = await current_user(s, m)
            changed = await change_category(s, user.id, command)
    except CategoryNotFound as e:
        await m.answer(ui.category_not_found(e.name), parse_mode="HTML")
        return
    except ExpenseNotFound as e:
        await m.answer(ui.expense_not_found(e.key), parse_mode="HTML")
        return
    await m.answer(ui.category_changed(changed.expense, changed.category), parse_mode="HTML")


@router.message(IntentFilter(Delete))
async def delete_expense(m: Message, command: Delete, db: Database) -> None:
    try:
        async with db.session() as s:
            user = await current_user(s, m)
            deleted = await remove_expense(s, user.id, command)
    except ExpenseNotFound as e:
        await m.answer(ui.expense_not_found(e.key), parse_mode="HTML")
        return
    await m.answer(ui.expense_deleted(deleted), parse_mode="HTML")


@router.message(IntentFilter(ShowAllExpenses))
async def show_all(m: Message, db: Database, settings: Settings) -> None:
    ref = today(settings.tz)
    async with db.session() as s:
        user = await current_user(s, m)
        expenses = await month_expenses(s, user.id, ref)
    await answer_long(m, ui.expenses_list(expenses, ref))
