# smartspend/handlers/categories.py
from __future__ import annotations

from aiogram import Router
from aiogram.types import Message

from smartspend.core.db import Database
from smartspend.handlers.common import IntentFilter, current_user
from smartspend.repo.categories import get_categories
from smartspend.services.categorizer import CategoryResolver
from smartspend.services.commands import AddCategory, ShowCategories
from smartspend.services.errors import CategoryExists
from smartspend.services.tracker import create_category
from smartspend.ui import messages as ui

router = Router(name=__name__)


@router.message(IntentFilter(AddCategory))
async def add_category(m: Message, command: AddCategory, db: Database, resolver: CategoryResolver) -> None:
    try:
        async with db.session() as s:
            user = await current_user(s, m)
            category = await create_category(s, user.id, command, resolver)
    except CategoryExists as e:
        await m.answer(ui.category_exists(e.name), parse_mode="HTML")
        return
    await m.answer(ui.category_added(category), parse_mode="HTML")


@router.message(IntentFilter(ShowCategories))
async def show_categories(m: Message, db: Database) -> None:
    async with db.session() as s:
        user = await current_user(s, m)
        categories = await get_categories(s, user.id)
    await m.answer(ui.categories_list(categories), parse_mode="HTML")
