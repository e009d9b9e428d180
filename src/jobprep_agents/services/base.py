"""Shared wiring for services: settings, session scope and identity."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobprep_agents.observability.cost_tracker import CostTracker
from jobprep_core.exceptions import NotAuthenticatedError
from jobprep_infra.db.session import session_scope

if TYPE_CHECKING:
    from jobprep_core.config.settings import Settings
    from jobprep_core.interfaces.change_feed import ChangeFeed

logger = structlog.get_logger()


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class BaseService:
    """Holds settings, the session factory and the optional change feed."""

    def __init__(
        self,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        feed: ChangeFeed | None = None,
        cost_tracker: CostTracker | None = None,
    ) -> None:
        """Initialize with settings, a session factory and a change feed.

        Agents the service builds share ``cost_tracker``.
        """
        self.settings = settings
        self._session_factory = session_factory
        self._feed = feed
        self.cost_tracker = cost_tracker or CostTracker.from_settings(settings)

    @property
    def user_id(self) -> str | None:
        """Currently bound user, if any."""
        return self.settings.user_id

    def _require_user(self) -> str:
        """Return the bound user id or refuse the write."""
        if not self.settings.user_id:
            logger.warning("write_refused_not_authenticated", service=type(self).__name__)
            raise NotAuthenticatedError()
        return self.settings.user_id

    def _scope(self) -> AbstractAsyncContextManager[AsyncSession]:
        """Transactional session that publishes its changes after commit."""
        return session_scope(self._session_factory, self._feed)
