"""Interview follow-up repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from jobprep_infra.db.models import InterviewFollowUpModel
from jobprep_infra.db.repositories.base import BaseRepository


class FollowUpRepository(BaseRepository):
    """CRUD operations for saved follow-up messages."""

    async def get_by_id(self, follow_up_id: str) -> InterviewFollowUpModel | None:
        """Retrieve a follow-up by ID."""
        return await self._session.get(InterviewFollowUpModel, follow_up_id)

    async def create(self, model: InterviewFollowUpModel) -> InterviewFollowUpModel:
        """Save a follow-up."""
        await self._add(model)
        return model

    async def mark_sent(
        self, model: InterviewFollowUpModel, sent_at: datetime
    ) -> InterviewFollowUpModel:
        """Record when the user sent the message."""
        model.sent_at = sent_at
        await self._touch(model)
        return model

    async def mark_response(
        self, model: InterviewFollowUpModel, response_date: datetime
    ) -> InterviewFollowUpModel:
        """Record that the recipient replied."""
        model.response_received = True
        model.response_date = response_date
        await self._touch(model)
        return model

    async def list_for_interview(self, interview_id: str) -> list[InterviewFollowUpModel]:
        """Follow-ups for an interview, newest first."""
        stmt = (
            select(InterviewFollowUpModel)
            .where(InterviewFollowUpModel.interview_id == interview_id)
            .order_by(InterviewFollowUpModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
