"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import AsyncIterator
from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from jobprep_infra.db.engine import create_engine
from jobprep_infra.db.models import InterviewModel, JobModel
from jobprep_infra.db.session import create_session_factory, init_db, session_scope
from jobprep_infra.realtime.change_feed import InMemoryChangeFeed
from tests.mocks.mock_factories import make_interview_model, make_job_model
from tests.mocks.mock_settings import make_settings


@pytest.fixture
def mock_settings() -> MagicMock:
    """Return a MagicMock Settings with an authenticated user."""
    return make_settings()


@pytest.fixture
async def engine() -> AsyncIterator[AsyncEngine]:
    """In-memory SQLite engine with all tables created."""
    engine = create_engine(make_settings())
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the in-memory engine."""
    return create_session_factory(engine)


@pytest.fixture
async def session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """A single session for repository tests."""
    async with session_factory() as sess:
        yield sess


@pytest.fixture
def feed() -> InMemoryChangeFeed:
    """Fresh change feed with no subscribers."""
    return InMemoryChangeFeed()


@pytest.fixture
async def saved_job(session_factory: async_sessionmaker[AsyncSession]) -> JobModel:
    """A committed job row owned by user-1."""
    job = make_job_model()
    async with session_scope(session_factory) as sess:
        sess.add(job)
    return job


@pytest.fixture
async def saved_interview(
    session_factory: async_sessionmaker[AsyncSession], saved_job: JobModel
) -> InterviewModel:
    """A committed interview for saved_job with four open tasks."""
    interview = make_interview_model(saved_job.id)
    async with session_scope(session_factory) as sess:
        sess.add(interview)
    return interview
