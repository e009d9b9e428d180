"""Shared repository plumbing for change recording."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from jobprep_core.interfaces.change_feed import ChangeEvent, ChangeType
from jobprep_infra.db.models import Base
from jobprep_infra.db.session import pending_changes


class BaseRepository:
    """Holds the session and records a change event for each write."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize with an async session."""
        self._session = session

    async def _add(self, model: Base) -> None:
        self._session.add(model)
        await self._session.flush()
        self._record(model, "INSERT")

    async def _touch(self, model: Base) -> None:
        await self._session.flush()
        self._record(model, "UPDATE")

    def _record(self, model: Base, event: ChangeType) -> None:
        pending_changes(self._session).append(
            ChangeEvent(table=model.__tablename__, event=event, record=model.to_record())
        )
