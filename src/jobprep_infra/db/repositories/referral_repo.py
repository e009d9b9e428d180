"""Referral request repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from jobprep_infra.db.models import ReferralRequestModel
from jobprep_infra.db.repositories.base import BaseRepository


class ReferralRepository(BaseRepository):
    """CRUD operations for referral requests."""

    async def get_by_id(self, request_id: str) -> ReferralRequestModel | None:
        """Retrieve a referral request by ID."""
        return await self._session.get(ReferralRequestModel, request_id)

    async def create(self, model: ReferralRequestModel) -> ReferralRequestModel:
        """Save a referral request."""
        await self._add(model)
        return model

    async def set_status(
        self,
        model: ReferralRequestModel,
        status: str,
        changed_at: datetime,
        requested_at: datetime | None = None,
        response_received_at: datetime | None = None,
    ) -> ReferralRequestModel:
        """Store a new status; timestamps are only written when given."""
        model.status = status
        model.updated_at = changed_at
        if requested_at is not None:
            model.requested_at = requested_at
        if response_received_at is not None:
            model.response_received_at = response_received_at
        await self._touch(model)
        return model

    async def list_for_user(
        self, user_id: str, job_id: str | None = None
    ) -> list[ReferralRequestModel]:
        """The user's referral requests, newest first, optionally for one job."""
        stmt = select(ReferralRequestModel).where(ReferralRequestModel.user_id == user_id)
        if job_id is not None:
            stmt = stmt.where(ReferralRequestModel.job_id == job_id)
        stmt = stmt.order_by(ReferralRequestModel.created_at.desc())
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
