"""Interview question response repository."""

from __future__ import annotations

from sqlalchemy import func, select

from jobprep_infra.db.models import InterviewQuestionResponseModel
from jobprep_infra.db.repositories.base import BaseRepository


class QuestionResponseRepository(BaseRepository):
    """Practiced answers attached to an interview."""

    async def create(
        self, model: InterviewQuestionResponseModel
    ) -> InterviewQuestionResponseModel:
        """Store a practiced answer."""
        await self._add(model)
        return model

    async def count_for_interview(self, interview_id: str) -> int:
        """Number of practiced answers for an interview."""
        stmt = select(func.count()).where(
            InterviewQuestionResponseModel.interview_id == interview_id
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())
