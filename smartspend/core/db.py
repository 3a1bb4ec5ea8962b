# smartspend/core/db.py
# Async SQLAlchemy: one engine + session factory per Database handle, schema bootstrap

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

log = logging.getLogger(__name__)


def _sqlite_real_transactions(engine: AsyncEngine) -> None:
    # the sqlite driver defers BEGIN until the first DML, which breaks SAVEPOINT;
    # take over transaction control so begin_nested() behaves like on Postgres
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class Database:
    """
    Explicit store handle. Built once in main() and handed to handlers
    through the dispatcher, never imported as a module-level global.

    >>> db = Database("sqlite+aiosqlite:///smartspend.db")
    >>> await db.init_db()
    >>> async with db.session() as s:
    ...     await s.execute(...)
    """

    def __init__(self, url: str, **engine_kwargs: Any) -> None:
        engine_kwargs.setdefault("echo", False)
        if not url.startswith("sqlite"):
            engine_kwargs.setdefault("pool_pre_ping", True)
        self.engine: AsyncEngine = create_async_engine(url, **engine_kwargs)
        if url.startswith("sqlite"):
            _sqlite_real_transactions(self.engine)
        self._sessions: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Commit on success, roll back and re-raise on any error."""
        session: AsyncSession = self._sessions()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def init_db(self) -> None:
        """
        Create tables without Alembic and seed the default categories.
        All models share Base from smartspend.models.user.
        """
        from smartspend.models import category, expense  # noqa: F401  register tables
        from smartspend.models.user import Base
        from smartspend.repo.categories import seed_default_categories

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        async with self.session() as s:
            added = await seed_default_categories(s)
        log.info("db_ready seeded_defaults=%s", added)

    async def dispose(self) -> None:
        await self.engine.dispose()
