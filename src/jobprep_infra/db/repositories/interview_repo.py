"""Interview repository for database operations."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select

from jobprep_infra.db.models import InterviewModel, utcnow
from jobprep_infra.db.repositories.base import BaseRepository


class InterviewRepository(BaseRepository):
    """CRUD operations for interviews and their preparation checklist."""

    async def get_by_id(self, interview_id: str) -> InterviewModel | None:
        """Retrieve an interview by ID."""
        return await self._session.get(InterviewModel, interview_id)

    async def create(self, model: InterviewModel) -> InterviewModel:
        """Create a new interview."""
        await self._add(model)
        return model

    async def set_preparation_tasks(
        self, model: InterviewModel, tasks: list[dict[str, Any]]
    ) -> InterviewModel:
        """Replace the checklist; a new list is assigned so the JSON change is tracked."""
        model.preparation_tasks = [dict(t) for t in tasks]
        model.updated_at = utcnow()
        await self._touch(model)
        return model

    async def update_fields(self, model: InterviewModel, **fields: Any) -> InterviewModel:
        """Set status, outcome or other scalar columns."""
        for key, value in fields.items():
            setattr(model, key, value)
        model.updated_at = utcnow()
        await self._touch(model)
        return model

    async def list_for_user(self, user_id: str) -> list[InterviewModel]:
        """All interviews of a user, soonest first."""
        stmt = (
            select(InterviewModel)
            .where(InterviewModel.user_id == user_id)
            .order_by(InterviewModel.interview_date)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def list_outcomes(self, user_id: str) -> list[str]:
        """Outcomes of all the user's interviews, pending included, oldest first."""
        stmt = (
            select(InterviewModel.outcome)
            .where(
                InterviewModel.user_id == user_id,
                InterviewModel.outcome.is_not(None),
            )
            .order_by(InterviewModel.interview_date, InterviewModel.created_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
