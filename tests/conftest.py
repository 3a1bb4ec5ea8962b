import pytest
import pytest_asyncio

from fakes import make_categories
from smartspend.core.db import Database
from smartspend.repo.users import get_or_create_user


@pytest.fixture
def categories():
    return make_categories()


@pytest_asyncio.fixture
async def db(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'smartspend.db'}")
    await database.init_db()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def user_id(db):
    async with db.session() as s:
        user = await get_or_create_user(s, 1001, "alice", "Alice")
    return user.id


@pytest_asyncio.fixture
async def other_user_id(db):
    async with db.session() as s:
        user = await get_or_create_user(s, 2002, "bob", "Bob")
    return user.id
