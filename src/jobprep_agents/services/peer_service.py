"""Peer support: discussions, challenges and group sessions."""

from __future__ import annotations

from datetime import datetime

import structlog

from jobprep_agents.services.base import BaseService
from jobprep_infra.db.models import (
    PeerChallengeModel,
    PeerDiscussionModel,
    PeerGroupSessionModel,
)
from jobprep_infra.db.repositories.peer_repo import PeerRepository

logger = structlog.get_logger()


class PeerService(BaseService):
    """Community features; counters are maintained by the storage layer."""

    async def post_discussion(self, title: str, content: str) -> PeerDiscussionModel:
        """Create a discussion post."""
        user_id = self._require_user()
        model = PeerDiscussionModel(user_id=user_id, title=title, content=content)
        async with self._scope() as session:
            await PeerRepository(session).create_discussion(model)
        return model

    async def like_discussion(self, discussion_id: str) -> int:
        """Add a like and return the new count."""
        self._require_user()
        async with self._scope() as session:
            likes = await PeerRepository(session).increment_likes(discussion_id)
        logger.info("discussion_liked", discussion_id=discussion_id, likes=likes)
        return likes

    async def create_challenge(
        self, title: str, description: str | None = None
    ) -> PeerChallengeModel:
        """Create a challenge with no participants."""
        self._require_user()
        model = PeerChallengeModel(title=title, description=description)
        async with self._scope() as session:
            await PeerRepository(session).create_challenge(model)
        return model

    async def join_challenge(self, challenge_id: str) -> int:
        """Join a challenge once and return the new participant count.

        A second join by the same user raises ChallengeAlreadyJoinedError.
        """
        user_id = self._require_user()
        async with self._scope() as session:
            count = await PeerRepository(session).add_participant(challenge_id, user_id)
        logger.info("challenge_joined", challenge_id=challenge_id, participants=count)
        return count

    async def schedule_session(
        self,
        group_id: str,
        session_title: str,
        scheduled_at: datetime,
        duration_minutes: int = 60,
        max_participants: int | None = None,
        session_type: str = "workshop",
        facilitator_name: str | None = None,
        meeting_link: str | None = None,
    ) -> PeerGroupSessionModel:
        """Schedule a group session with nobody registered yet.

        ``max_participants`` of None means unlimited places.
        """
        self._require_user()
        model = PeerGroupSessionModel(
            group_id=group_id,
            session_title=session_title,
            scheduled_at=scheduled_at,
            duration_minutes=duration_minutes,
            max_participants=max_participants,
            session_type=session_type,
            facilitator_name=facilitator_name,
            meeting_link=meeting_link,
        )
        async with self._scope() as session:
            await PeerRepository(session).create_group_session(model)
        logger.info("group_session_scheduled", session_id=model.id, group_id=group_id)
        return model

    async def list_sessions(self, group_id: str) -> list[PeerGroupSessionModel]:
        """Sessions of a group, soonest first."""
        async with self._session_factory() as session:
            return await PeerRepository(session).list_group_sessions(group_id)

    async def register_for_session(self, session_id: str) -> int:
        """Register once for a session and return the new registered count.

        Raises SessionFullError when no places are left and
        SessionAlreadyRegisteredError on a second registration.
        """
        user_id = self._require_user()
        async with self._scope() as session:
            count = await PeerRepository(session).register_for_session(session_id, user_id)
        logger.info("group_session_registered", session_id=session_id, registered=count)
        return count

    async def reconcile_counters(self) -> int:
        """Repair participant and registration counters from the membership rows."""
        async with self._scope() as session:
            corrected = await PeerRepository(session).reconcile_counters()
        logger.info("counters_reconciled", corrected=corrected)
        return corrected
