"""Tests for MockInterviewService."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobprep_agents.agents.mock_interview_generator import MockInterviewGeneratorAgent
from jobprep_agents.services.mock_interview_service import MockInterviewService
from jobprep_core.exceptions import JobPrepError, NotAuthenticatedError, RecordNotFoundError
from jobprep_infra.db.models import JobModel
from tests.mocks.mock_factories import STAR_ANSWER
from tests.mocks.mock_llm import FakeInstructorClient
from tests.mocks.mock_settings import make_settings


def _service(
    settings: MagicMock, session_factory: async_sessionmaker[AsyncSession]
) -> MockInterviewService:
    generator = MockInterviewGeneratorAgent(settings)
    generator._instructor = FakeInstructorClient()
    return MockInterviewService(settings, session_factory, generator=generator)


@pytest.mark.unit
class TestGenerate:
    """Test session generation."""

    @pytest.mark.asyncio
    async def test_opens_session(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """Generated questions are stored on an in-progress session."""
        service = _service(mock_settings, session_factory)
        model = await service.generate(saved_job.id, "technical", question_count=2)

        stored = await service.get(model.id)
        assert stored.status == "in_progress"
        assert stored.session_name == "Acme Corp technical practice"
        assert stored.interview_format == "technical"
        assert [q["order"] for q in stored.questions] == [1, 2]
        assert all(q["response"] == "" for q in stored.questions)

    @pytest.mark.asyncio
    async def test_unknown_job(
        self, mock_settings: MagicMock, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """A missing job raises RecordNotFoundError."""
        with pytest.raises(RecordNotFoundError):
            await _service(mock_settings, session_factory).generate("missing")

    @pytest.mark.asyncio
    async def test_requires_user(
        self, session_factory: async_sessionmaker[AsyncSession], saved_job: JobModel
    ) -> None:
        """Writes without a bound user are refused."""
        service = _service(make_settings(user_id=None), session_factory)
        with pytest.raises(NotAuthenticatedError):
            await service.generate(saved_job.id)


@pytest.mark.unit
class TestResponsesAndGrading:
    """Test saving responses and completing a session."""

    @pytest.mark.asyncio
    async def test_save_and_complete(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """Saved answers are graded and the session is closed."""
        service = _service(mock_settings, session_factory)
        model = await service.generate(saved_job.id, question_count=2)
        await service.save_response(model.id, 0, STAR_ANSWER)

        completed, result = await service.complete(model.id)

        assert result.summary.completion_rate == 50
        assert result.overall_score == 44
        stored = await service.get(model.id)
        assert stored.status == "completed"
        assert stored.completed_at is not None
        assert stored.overall_score == 44
        assert stored.performance_summary is not None
        assert stored.performance_summary["completion_rate"] == 50
        assert stored.questions[0]["response"] == STAR_ANSWER
        assert stored.duration_minutes == result.summary.total_time_minutes
        assert completed.id == model.id

    @pytest.mark.asyncio
    async def test_completed_session_is_closed(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """A completed session accepts no more answers or grading."""
        service = _service(mock_settings, session_factory)
        model = await service.generate(saved_job.id, question_count=2)
        await service.complete(model.id)

        with pytest.raises(JobPrepError, match="already completed"):
            await service.save_response(model.id, 0, "late answer")
        with pytest.raises(JobPrepError, match="already completed"):
            await service.complete(model.id)

    @pytest.mark.asyncio
    async def test_question_index_checked(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """Answers to non-existent questions are rejected."""
        service = _service(mock_settings, session_factory)
        model = await service.generate(saved_job.id, question_count=2)
        with pytest.raises(RecordNotFoundError):
            await service.save_response(model.id, 5, STAR_ANSWER)
