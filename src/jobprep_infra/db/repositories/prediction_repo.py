"""Interview success prediction repository (insert-only snapshots)."""

from __future__ import annotations

from sqlalchemy import select

from jobprep_infra.db.models import InterviewSuccessPredictionModel
from jobprep_infra.db.repositories.base import BaseRepository


class PredictionRepository(BaseRepository):
    """Snapshots are never updated; the newest row is the current prediction."""

    async def create(
        self, model: InterviewSuccessPredictionModel
    ) -> InterviewSuccessPredictionModel:
        """Insert a new prediction snapshot."""
        await self._add(model)
        return model

    async def latest_for_interview(
        self, interview_id: str
    ) -> InterviewSuccessPredictionModel | None:
        """Most recent snapshot for an interview."""
        stmt = (
            select(InterviewSuccessPredictionModel)
            .where(InterviewSuccessPredictionModel.interview_id == interview_id)
            .order_by(InterviewSuccessPredictionModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_for_interview(
        self, interview_id: str
    ) -> list[InterviewSuccessPredictionModel]:
        """Every snapshot for an interview, oldest first."""
        stmt = (
            select(InterviewSuccessPredictionModel)
            .where(InterviewSuccessPredictionModel.interview_id == interview_id)
            .order_by(InterviewSuccessPredictionModel.created_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
