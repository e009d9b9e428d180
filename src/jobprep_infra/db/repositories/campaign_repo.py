"""Networking campaign and outreach repositories."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select

from jobprep_infra.db.models import CampaignOutreachModel, NetworkingCampaignModel
from jobprep_infra.db.repositories.base import BaseRepository


class CampaignRepository(BaseRepository):
    """CRUD operations for networking campaigns."""

    async def get_by_id(self, campaign_id: str) -> NetworkingCampaignModel | None:
        """Retrieve a campaign by ID."""
        return await self._session.get(NetworkingCampaignModel, campaign_id)

    async def create(self, model: NetworkingCampaignModel) -> NetworkingCampaignModel:
        """Create a new campaign."""
        await self._add(model)
        return model

    async def list_for_user(self, user_id: str) -> list[NetworkingCampaignModel]:
        """Campaigns of a user, newest first."""
        stmt = (
            select(NetworkingCampaignModel)
            .where(NetworkingCampaignModel.user_id == user_id)
            .order_by(NetworkingCampaignModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())


class OutreachRepository(BaseRepository):
    """CRUD operations for campaign outreach rows."""

    async def get_by_id(self, outreach_id: str) -> CampaignOutreachModel | None:
        """Retrieve an outreach row by ID."""
        return await self._session.get(CampaignOutreachModel, outreach_id)

    async def create(self, model: CampaignOutreachModel) -> CampaignOutreachModel:
        """Log an outreach attempt."""
        await self._add(model)
        return model

    async def update_response(
        self,
        model: CampaignOutreachModel,
        response_received: bool,
        response_date: datetime | None,
        outcome: str | None,
    ) -> CampaignOutreachModel:
        """Record whether and how a contact responded."""
        model.response_received = response_received
        model.response_date = response_date
        model.outcome = outcome
        await self._touch(model)
        return model

    async def list_for_campaign(self, campaign_id: str) -> list[CampaignOutreachModel]:
        """Outreach rows of a campaign, most recently sent first."""
        stmt = (
            select(CampaignOutreachModel)
            .where(CampaignOutreachModel.campaign_id == campaign_id)
            .order_by(CampaignOutreachModel.sent_at.desc())
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())
