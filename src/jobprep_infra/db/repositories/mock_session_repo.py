"""Mock interview session repository."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select

from jobprep_infra.db.models import MockInterviewSessionModel
from jobprep_infra.db.repositories.base import BaseRepository


class MockSessionRepository(BaseRepository):
    """CRUD operations for mock interview sessions."""

    async def get_by_id(self, session_id: str) -> MockInterviewSessionModel | None:
        """Retrieve a session by ID."""
        return await self._session.get(MockInterviewSessionModel, session_id)

    async def create(self, model: MockInterviewSessionModel) -> MockInterviewSessionModel:
        """Create a new session."""
        await self._add(model)
        return model

    async def save_questions(
        self, model: MockInterviewSessionModel, questions: list[dict[str, Any]]
    ) -> MockInterviewSessionModel:
        """Persist questions with their in-progress responses."""
        model.questions = [dict(q) for q in questions]
        await self._touch(model)
        return model

    async def complete(
        self,
        model: MockInterviewSessionModel,
        questions: list[dict[str, Any]],
        completed_at: datetime,
        duration_minutes: int,
        performance_summary: dict[str, Any],
        overall_score: int,
    ) -> MockInterviewSessionModel:
        """Mark a session completed and store its grading."""
        model.questions = [dict(q) for q in questions]
        model.status = "completed"
        model.completed_at = completed_at
        model.duration_minutes = duration_minutes
        model.performance_summary = performance_summary
        model.overall_score = overall_score
        await self._touch(model)
        return model

    async def list_for_interview(self, interview_id: str) -> list[MockInterviewSessionModel]:
        """Sessions linked to an interview."""
        stmt = select(MockInterviewSessionModel).where(
            MockInterviewSessionModel.interview_id == interview_id
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
