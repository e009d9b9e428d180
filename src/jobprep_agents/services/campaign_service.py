"""Networking campaigns: goals, outreach logging and response metrics."""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from datetime import datetime

import structlog

from jobprep_agents.scoring.rounding import round_half_up, safe_percent
from jobprep_agents.services.base import BaseService
from jobprep_core.exceptions import RecordNotFoundError
from jobprep_core.models.networking import CampaignGoals, CampaignMetrics, VariantStats
from jobprep_infra.db.models import CampaignOutreachModel, NetworkingCampaignModel, utcnow
from jobprep_infra.db.repositories.campaign_repo import CampaignRepository, OutreachRepository

logger = structlog.get_logger()

CONNECTED_OUTCOME = "connected"


def _progress(value: int, target: int) -> float:
    if target <= 0:
        return 0.0
    return min(value / target * 100, 100.0)


def compute_campaign_metrics(
    goals: CampaignGoals, outreach: Sequence[CampaignOutreachModel]
) -> CampaignMetrics:
    """Aggregate outreach rows into rates and goal progress."""
    sent = len(outreach)
    responses = sum(1 for o in outreach if o.response_received)
    connections = sum(1 for o in outreach if o.outcome == CONNECTED_OUTCOME)

    by_variant: dict[str, VariantStats] = {}
    for variant in sorted({o.message_variant for o in outreach if o.message_variant}):
        rows = [o for o in outreach if o.message_variant == variant]
        responded = sum(1 for o in rows if o.response_received)
        by_variant[variant] = VariantStats(
            sent=len(rows),
            responded=responded,
            response_rate=round_half_up(safe_percent(responded, len(rows))),
        )

    return CampaignMetrics(
        outreach_sent=sent,
        responses=responses,
        pending=sent - responses,
        connections=connections,
        response_rate=round(safe_percent(responses, sent), 1),
        outreach_progress=_progress(sent, goals.outreach_target),
        response_progress=_progress(responses, goals.response_target),
        connection_progress=_progress(connections, goals.connection_target),
        by_variant=by_variant,
        by_type=dict(Counter(o.outreach_type for o in outreach)),
    )


class CampaignService(BaseService):
    """Create campaigns and track the outreach logged against them."""

    async def create_campaign(
        self,
        campaign_name: str,
        goals: Mapping[str, object] | None = None,
        description: str | None = None,
        target_companies: list[str] | None = None,
        target_industries: list[str] | None = None,
        target_roles: list[str] | None = None,
    ) -> NetworkingCampaignModel:
        """Create a campaign; malformed goal numbers are stored as 0."""
        user_id = self._require_user()
        parsed = CampaignGoals.model_validate(dict(goals or {}))
        model = NetworkingCampaignModel(
            user_id=user_id,
            campaign_name=campaign_name,
            description=description,
            target_companies=target_companies or [],
            target_industries=target_industries or [],
            target_roles=target_roles or [],
            goals=parsed.model_dump(),
            status="active",
        )
        async with self._scope() as session:
            await CampaignRepository(session).create(model)
        logger.info("campaign_created", campaign_id=model.id, goals=model.goals)
        return model

    async def log_outreach(
        self,
        campaign_id: str,
        contact_name: str,
        outreach_type: str = "email",
        contact_company: str | None = None,
        contact_title: str | None = None,
        message_variant: str | None = None,
        message_content: str | None = None,
        notes: str | None = None,
        sent_at: datetime | None = None,
    ) -> CampaignOutreachModel:
        """Record an outreach attempt sent outside the system."""
        user_id = self._require_user()
        model = CampaignOutreachModel(
            campaign_id=campaign_id,
            user_id=user_id,
            contact_name=contact_name,
            contact_company=contact_company,
            contact_title=contact_title,
            outreach_type=outreach_type,
            message_variant=message_variant,
            message_content=message_content,
            notes=notes,
            sent_at=sent_at or utcnow(),
        )
        async with self._scope() as session:
            if await CampaignRepository(session).get_by_id(campaign_id) is None:
                raise RecordNotFoundError(f"Campaign {campaign_id} not found")
            await OutreachRepository(session).create(model)
        logger.info(
            "outreach_logged",
            campaign_id=campaign_id,
            outreach_type=outreach_type,
            variant=message_variant,
        )
        return model

    async def update_response(
        self,
        outreach_id: str,
        response_received: bool,
        outcome: str | None = None,
        response_date: datetime | None = None,
    ) -> CampaignOutreachModel:
        """Record whether a contact replied and what came of it."""
        self._require_user()
        async with self._scope() as session:
            repo = OutreachRepository(session)
            model = await repo.get_by_id(outreach_id)
            if model is None:
                raise RecordNotFoundError(f"Outreach {outreach_id} not found")
            when = (response_date or utcnow()) if response_received else None
            await repo.update_response(model, response_received, when, outcome)
        return model

    async def metrics(self, campaign_id: str) -> CampaignMetrics:
        """Response rate, per-variant rates and goal progress for a campaign."""
        async with self._session_factory() as session:
            campaign = await CampaignRepository(session).get_by_id(campaign_id)
            if campaign is None:
                raise RecordNotFoundError(f"Campaign {campaign_id} not found")
            outreach = await OutreachRepository(session).list_for_campaign(campaign_id)
        return compute_campaign_metrics(
            CampaignGoals.model_validate(campaign.goals or {}), outreach
        )
