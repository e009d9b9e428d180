"""Async session factory, schema creation and the publishing session scope."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from jobprep_infra.db.models import Base

if TYPE_CHECKING:
    from jobprep_core.interfaces.change_feed import ChangeEvent, ChangeFeed

PENDING_CHANGES_KEY = "pending_changes"


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def pending_changes(session: AsyncSession) -> list[ChangeEvent]:
    """Change events recorded on this session and not yet published."""
    events: list[ChangeEvent] = session.info.setdefault(PENDING_CHANGES_KEY, [])
    return events


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
    feed: ChangeFeed | None = None,
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a session, commit on success, then publish recorded changes.

    Changes are only published once committed, so subscribers reading
    through their own session see the new rows. On error the transaction
    is rolled back and nothing is published.
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        events = list(pending_changes(session))
        pending_changes(session).clear()

    if feed is not None:
        for event in events:
            await feed.publish(event)
