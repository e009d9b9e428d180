"""Referral requests: AI drafts, saved requests and their status lifecycle."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobprep_agents.agents.referral_writer import ReferralRequestAgent
from jobprep_agents.services.base import BaseService
from jobprep_core.exceptions import (
    InvalidStatusTransitionError,
    JobPrepError,
    RecordNotFoundError,
)
from jobprep_core.models.follow_up import (
    REFERRAL_TRANSITIONS,
    ReferralRequestTemplate,
    ReferralStatus,
)
from jobprep_infra.db.models import ReferralRequestModel, utcnow
from jobprep_infra.db.repositories.job_repo import JobRepository
from jobprep_infra.db.repositories.referral_repo import ReferralRepository

if TYPE_CHECKING:
    from jobprep_agents.observability.cost_tracker import CostTracker
    from jobprep_core.config.settings import Settings
    from jobprep_core.interfaces.change_feed import ChangeFeed

logger = structlog.get_logger()

RESPONSE_STATUSES = frozenset({"accepted", "declined"})


class ReferralService(BaseService):
    """Draft referral requests and move them from draft to a final answer."""

    def __init__(
        self,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        feed: ChangeFeed | None = None,
        writer: ReferralRequestAgent | None = None,
        cost_tracker: CostTracker | None = None,
    ) -> None:
        """Initialize with an optional referral writer agent."""
        super().__init__(settings, session_factory, feed, cost_tracker)
        self._writer = writer or ReferralRequestAgent(settings, self.cost_tracker)

    async def generate(
        self,
        job_id: str,
        contact_name: str,
        contact_company: str | None = None,
        relationship: str | None = None,
        tone: str = "professional",
        notes: str | None = None,
    ) -> ReferralRequestTemplate:
        """Draft a referral message for a saved job without storing it."""
        self._require_user()
        async with self._session_factory() as session:
            job = await JobRepository(session).get_by_id(job_id)
        if job is None:
            raise RecordNotFoundError(f"Job {job_id} not found")

        return await self._writer.run(
            contact_name=contact_name,
            job_title=job.job_title,
            company_name=job.company_name,
            contact_company=contact_company,
            relationship=relationship,
            tone=tone,
            notes=notes,
        )

    async def create_request(
        self,
        job_id: str,
        contact_name: str,
        request_message: str,
        contact_company: str | None = None,
        template_type: str = "professional",
    ) -> ReferralRequestModel:
        """Save a request in draft status."""
        user_id = self._require_user()
        if not request_message.strip():
            raise JobPrepError("Referral request message is empty")

        model = ReferralRequestModel(
            user_id=user_id,
            job_id=job_id,
            contact_name=contact_name,
            contact_company=contact_company,
            request_message=request_message,
            request_template_type=template_type,
            status="draft",
        )
        async with self._scope() as session:
            if await JobRepository(session).get_by_id(job_id) is None:
                raise RecordNotFoundError(f"Job {job_id} not found")
            await ReferralRepository(session).create(model)

        logger.info("referral_request_created", request_id=model.id, job_id=job_id)
        return model

    async def draft(
        self,
        job_id: str,
        contact_name: str,
        contact_company: str | None = None,
        relationship: str | None = None,
        tone: str = "professional",
    ) -> ReferralRequestModel:
        """Generate a message and save it as a draft request."""
        template = await self.generate(
            job_id, contact_name, contact_company, relationship=relationship, tone=tone
        )
        return await self.create_request(
            job_id,
            contact_name,
            template.full_message,
            contact_company=contact_company,
            template_type=tone,
        )

    async def update_status(self, request_id: str, status: ReferralStatus) -> ReferralRequestModel:
        """Move a request along its lifecycle.

        Sending stamps ``requested_at``; an accept or decline stamps
        ``response_received_at``. Anything not in REFERRAL_TRANSITIONS raises
        InvalidStatusTransitionError.
        """
        self._require_user()
        async with self._scope() as session:
            repo = ReferralRepository(session)
            model = await repo.get_by_id(request_id)
            if model is None:
                raise RecordNotFoundError(f"Referral request {request_id} not found")
            previous = model.status
            if status not in REFERRAL_TRANSITIONS.get(previous, frozenset()):
                raise InvalidStatusTransitionError(
                    f"Referral request {request_id} cannot go from {previous} to {status}"
                )
            now = utcnow()
            await repo.set_status(
                model,
                status,
                changed_at=now,
                requested_at=now if status == "sent" else None,
                response_received_at=now if status in RESPONSE_STATUSES else None,
            )

        logger.info(
            "referral_status_updated", request_id=request_id, previous=previous, status=status
        )
        return model

    async def list_requests(self, job_id: str | None = None) -> list[ReferralRequestModel]:
        """The bound user's requests, newest first."""
        user_id = self._require_user()
        async with self._session_factory() as session:
            return await ReferralRepository(session).list_for_user(user_id, job_id)
