# smartspend/repo/categories.py
from __future__ import annotations

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from smartspend.models.category import CategoryRow, DEFAULT_EMOJI
from smartspend.models.records import Category

# Seeded once, owned by nobody, visible to everybody
DEFAULT_CATEGORIES: tuple[tuple[str, str], ...] = (
    ("Food & Dining", "🍔"),
    ("Transportation", "🚗"),
    ("Shopping", "🛍️"),
    ("Entertainment", "🎬"),
    ("Health & Medical", "🏥"),
    ("Utilities", "💡"),
    ("Groceries", "🛒"),
    ("Travel", "✈️"),
)


async def seed_default_categories(session: AsyncSession) -> int:
    """Insert missing defaults. Safe to run on every start."""
    q = await session.execute(select(CategoryRow.name).where(CategoryRow.user_id.is_(None)))
    present = set(q.scalars().all())
    added = 0
    for name, emoji in DEFAULT_CATEGORIES:
        if name in present:
            continue
        session.add(CategoryRow(name=name, emoji=emoji, is_default=True, user_id=None))
        added += 1
    await session.flush()
    return added


async def get_categories(session: AsyncSession, user_id: int | None) -> list[Category]:
    """Defaults first, then the user's own, alphabetically by name."""
    visible = CategoryRow.user_id.is_(None)
    if user_id is not None:
        visible = or_(visible, CategoryRow.user_id == user_id)
    q = await session.execute(
        select(CategoryRow)
        .where(visible)
        .order_by(CategoryRow.is_default.desc(), CategoryRow.name.asc())
    )
    return [Category.from_row(r) for r in q.scalars().all()]


async def find_category(session: AsyncSession, user_id: int, name: str) -> Category | None:
    """Case-insensitive lookup among the categories the user can see."""
    want = (name or "").strip().lower()
    for cat in await get_categories(session, user_id):
        if cat.name.lower() == want:
            return cat
    return None


async def add_category(
    session: AsyncSession,
    name: str,
    user_id: int,
    emoji: str = DEFAULT_EMOJI,
) -> Category:
    row = CategoryRow(name=name, emoji=emoji or DEFAULT_EMOJI, is_default=False, user_id=user_id)
    session.add(row)
    await session.flush()
    return Category.from_row(row)

