# smartspend/handlers/common.py
from __future__ import annotations

from typing import Any, Union

from aiogram.filters import BaseFilter
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from smartspend.models.user import User
from smartspend.repo.users import get_or_create_user
from smartspend.services.intent import classify
from smartspend.ui.messages import split_message


class IntentFilter(BaseFilter):
    """
    Classifies the message text and lets it through when the command is one
    of `kinds`. The parsed command reaches the handler as `command`.
    """

    def __init__(self, *kinds: type) -> None:
        self.kinds = kinds

    async def __call__(self, message: Message) -> Union[bool, dict[str, Any]]:
        if not message.text:
            return False
        command = classify(message.text)
        if isinstance(command, self.kinds):
            return {"command": command}
        return False


async def current_user(session: AsyncSession, m: Message) -> User:
    u = m.from_user
    return await get_or_create_user(session, u.id, u.username, u.first_name)


async def answer_long(m: Message, text: str) -> None:
    for chunk in split_message(text):
        await m.answer(chunk, parse_mode="HTML")
