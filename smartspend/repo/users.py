# smartspend/repo/users.py
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from smartspend.models.user import User


async def get_user(session: AsyncSession, tg_id: int) -> User | None:
    q = await session.execute(select(User).where(User.telegram_id == tg_id))
    return q.scalar_one_or_none()


async def get_or_create_user(
    session: AsyncSession,
    tg_id: int,
    username: str | None = None,
    first_name: str | None = None,
) -> User:
    user = await get_user(session, tg_id)
    if user:
        # keep profile fields fresh, Telegram lets people rename
        if username and user.username != username:
            user.username = username
        if first_name and user.first_name != first_name:
            user.first_name = first_name
        return user
    user = User(telegram_id=tg_id, username=username, first_name=first_name)
    session.add(user)
    await session.flush()
    return user

