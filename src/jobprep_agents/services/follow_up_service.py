"""Interview follow-ups: AI templates, placeholder finalize and tracking."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobprep_agents.agents.follow_up_writer import FollowUpWriterAgent
from jobprep_agents.services.base import BaseService
from jobprep_agents.templating.placeholders import extract_placeholders, finalize_message
from jobprep_core.exceptions import RecordNotFoundError
from jobprep_core.models.follow_up import (
    FollowUpContext,
    FollowUpTemplate,
    FollowUpType,
    Placeholder,
    PolishedMessage,
)
from jobprep_infra.db.models import InterviewFollowUpModel, utcnow
from jobprep_infra.db.repositories.follow_up_repo import FollowUpRepository
from jobprep_infra.db.repositories.interview_repo import InterviewRepository
from jobprep_infra.db.repositories.job_repo import JobRepository

if TYPE_CHECKING:
    from jobprep_agents.observability.cost_tracker import CostTracker
    from jobprep_core.config.settings import Settings
    from jobprep_core.interfaces.change_feed import ChangeFeed

logger = structlog.get_logger()


class FollowUpService(BaseService):
    """Draft, finalize and track follow-up messages for an interview."""

    def __init__(
        self,
        settings: Settings,
        session_factory: async_sessionmaker[AsyncSession],
        feed: ChangeFeed | None = None,
        writer: FollowUpWriterAgent | None = None,
        cost_tracker: CostTracker | None = None,
    ) -> None:
        """Initialize with an optional writer agent."""
        super().__init__(settings, session_factory, feed, cost_tracker)
        self._writer = writer or FollowUpWriterAgent(settings, self.cost_tracker)

    async def generate(
        self,
        interview_id: str,
        follow_up_type: FollowUpType,
        custom_context: str | None = None,
    ) -> tuple[FollowUpTemplate, list[Placeholder]]:
        """Draft a template and list the placeholders the user should fill."""
        self._require_user()
        async with self._session_factory() as session:
            interview = await InterviewRepository(session).get_by_id(interview_id)
            if interview is None:
                raise RecordNotFoundError(f"Interview {interview_id} not found")
            job = await JobRepository(session).get_by_id(interview.job_id)

        context = FollowUpContext(
            interview_type=interview.interview_type,
            interview_date=interview.interview_date.strftime("%B %d, %Y"),
            company_name=job.company_name if job else "the company",
            job_title=job.job_title if job else "the role",
            interviewer_name=interview.interviewer_name,
            outcome=interview.outcome,
            notes=interview.notes,
            custom_context=custom_context,
        )
        template = await self._writer.run(follow_up_type, context)
        placeholders = extract_placeholders(template.subject, template.content)
        logger.info(
            "follow_up_template_generated",
            interview_id=interview_id,
            follow_up_type=follow_up_type,
            placeholders=len(placeholders),
        )
        return template, placeholders

    async def finalize(
        self,
        template: FollowUpTemplate | PolishedMessage,
        values: Mapping[str, str],
        follow_up_type: FollowUpType,
        polish: bool = True,
    ) -> PolishedMessage:
        """Fill placeholders and, when asked, polish through the writer."""
        return await finalize_message(
            template.subject,
            template.content,
            values,
            follow_up_type,
            polisher=self._writer if polish else None,
        )

    async def save(
        self,
        interview_id: str,
        follow_up_type: FollowUpType,
        message: PolishedMessage,
    ) -> InterviewFollowUpModel:
        """Persist a finalized follow-up."""
        user_id = self._require_user()
        model = InterviewFollowUpModel(
            user_id=user_id,
            interview_id=interview_id,
            follow_up_type=follow_up_type,
            subject=message.subject,
            content=message.content,
        )
        async with self._scope() as session:
            if await InterviewRepository(session).get_by_id(interview_id) is None:
                raise RecordNotFoundError(f"Interview {interview_id} not found")
            await FollowUpRepository(session).create(model)
        logger.info("follow_up_saved", follow_up_id=model.id, follow_up_type=follow_up_type)
        return model

    async def mark_sent(
        self, follow_up_id: str, sent_at: datetime | None = None
    ) -> InterviewFollowUpModel:
        """Record that the user sent the message themselves."""
        self._require_user()
        async with self._scope() as session:
            repo = FollowUpRepository(session)
            model = await self._load(repo, follow_up_id)
            await repo.mark_sent(model, sent_at or utcnow())
        return model

    async def mark_response(
        self, follow_up_id: str, response_date: datetime | None = None
    ) -> InterviewFollowUpModel:
        """Record that the recipient replied."""
        self._require_user()
        async with self._scope() as session:
            repo = FollowUpRepository(session)
            model = await self._load(repo, follow_up_id)
            await repo.mark_response(model, response_date or utcnow())
        return model

    async def list_for_interview(self, interview_id: str) -> list[InterviewFollowUpModel]:
        """Saved follow-ups for an interview, newest first."""
        async with self._session_factory() as session:
            return await FollowUpRepository(session).list_for_interview(interview_id)

    @staticmethod
    async def _load(repo: FollowUpRepository, follow_up_id: str) -> InterviewFollowUpModel:
        model = await repo.get_by_id(follow_up_id)
        if model is None:
            raise RecordNotFoundError(f"Follow-up {follow_up_id} not found")
        return model
