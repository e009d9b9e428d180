"""Mock interview sessions: generation, progress saves and grading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobprep_agents.agents.mock_interview_generator import MockInterviewGeneratorAgent
from jobprep_agents.scoring.mock_grader import grade_session
from jobprep_agents.services.base import BaseService, as_utc
from jobprep_core.exceptions import JobPrepError, RecordNotFoundError
from jobprep_core.models.mock_interview import GradeResult, InterviewFormat, MockQuestion
from jobprep_infra.db.models import MockInterviewSessionModel, utcnow
from jobprep_infra.db.repositories.job_repo import JobRepository
from jobprep_infra.db.repositories.mock_session_repo import MockSessionRepository

if TYPE_CHECKING:
    from jobprep_agents.observability.cost_tracker import CostTracker
    from jobprep_core.config.settings import Settings
    from jobprep_core.interfaces.change_feed import ChangeFeed

logger = structlog.get_logger()


class MockInterviewService(BaseService):
    """Run a mock interview from generated questions to a graded summary."""

    def __init__(
        self,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        feed: ChangeFeed | None = None,
        generator: MockInterviewGeneratorAgent | None = None,
        cost_tracker: CostTracker | None = None,
    ) -> None:
        """Initialize with an optional question generator."""
        super().__init__(settings, session_factory, feed, cost_tracker)
        self._generator = generator or MockInterviewGeneratorAgent(settings, self.cost_tracker)

    async def generate(
        self,
        job_id: str,
        interview_format: InterviewFormat = "mixed",
        question_count: int = 8,
        interview_id: str | None = None,
        session_name: str | None = None,
    ) -> MockInterviewSessionModel:
        """Generate questions for a job and open an in-progress session."""
        user_id = self._require_user()
        async with self._session_factory() as session:
            job = await JobRepository(session).get_by_id(job_id)
        if job is None:
            raise RecordNotFoundError(f"Job {job_id} not found")

        plan = await self._generator.run(
            job_title=job.job_title,
            company_name=job.company_name,
            interview_format=interview_format,
            question_count=question_count,
            industry=job.industry,
        )

        model = MockInterviewSessionModel(
            user_id=user_id,
            job_id=job_id,
            interview_id=interview_id,
            session_name=session_name or f"{job.company_name} {interview_format} practice",
            interview_format=interview_format,
            questions=[q.model_dump() for q in plan.questions],
            status="in_progress",
            started_at=utcnow(),
        )
        async with self._scope() as session:
            await MockSessionRepository(session).create(model)

        logger.info(
            "mock_session_created",
            session_id=model.id,
            questions=len(plan.questions),
            format=interview_format,
        )
        return model

    async def get(self, session_id: str) -> MockInterviewSessionModel:
        """Load a session or raise RecordNotFoundError."""
        async with self._session_factory() as session:
            model = await MockSessionRepository(session).get_by_id(session_id)
        if model is None:
            raise RecordNotFoundError(f"Mock session {session_id} not found")
        return model

    async def save_response(
        self, session_id: str, index: int, response: str
    ) -> MockInterviewSessionModel:
        """Store the answer to one question while the session is in progress."""
        self._require_user()
        async with self._scope() as session:
            repo = MockSessionRepository(session)
            model = await self._load_open(repo, session_id)
            questions = [MockQuestion.model_validate(q) for q in model.questions]
            if not 0 <= index < len(questions):
                raise RecordNotFoundError(f"Question {index} not found in session {session_id}")
            questions[index].response = response
            await repo.save_questions(model, [q.model_dump() for q in questions])
        return model

    async def complete(
        self, session_id: str
    ) -> tuple[MockInterviewSessionModel, GradeResult]:
        """Grade the responses and close the session."""
        self._require_user()
        async with self._scope() as session:
            repo = MockSessionRepository(session)
            model = await self._load_open(repo, session_id)
            questions = [MockQuestion.model_validate(q) for q in model.questions]
            completed_at = utcnow()
            result = grade_session(questions, as_utc(model.started_at), completed_at)
            await repo.complete(
                model,
                questions=[q.model_dump() for q in questions],
                completed_at=completed_at,
                duration_minutes=result.summary.total_time_minutes,
                performance_summary=result.summary.model_dump(),
                overall_score=result.overall_score,
            )

        logger.info(
            "mock_session_completed",
            session_id=session_id,
            overall_score=result.overall_score,
            completion_rate=result.summary.completion_rate,
        )
        return model, result

    @staticmethod
    async def _load_open(
        repo: MockSessionRepository, session_id: str
    ) -> MockInterviewSessionModel:
        model = await repo.get_by_id(session_id)
        if model is None:
            raise RecordNotFoundError(f"Mock session {session_id} not found")
        if model.status == "completed":
            raise JobPrepError(f"Mock session {session_id} is already completed")
        return model
