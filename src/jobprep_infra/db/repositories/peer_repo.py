"""Peer discussions, challenges and group sessions with storage-owned counters."""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError

from jobprep_core.exceptions import (
    ChallengeAlreadyJoinedError,
    RecordNotFoundError,
    SessionAlreadyRegisteredError,
    SessionFullError,
)
from jobprep_infra.db.models import (
    PeerChallengeModel,
    PeerChallengeParticipantModel,
    PeerDiscussionModel,
    PeerGroupSessionModel,
    PeerSessionRegistrationModel,
)
from jobprep_infra.db.repositories.base import BaseRepository

logger = structlog.get_logger()


class PeerRepository(BaseRepository):
    """Counters change only through single UPDATE ... SET n = n + 1 statements."""

    async def create_discussion(self, model: PeerDiscussionModel) -> PeerDiscussionModel:
        """Create a discussion post."""
        await self._add(model)
        return model

    async def create_challenge(self, model: PeerChallengeModel) -> PeerChallengeModel:
        """Create a challenge."""
        await self._add(model)
        return model

    async def get_discussion(self, discussion_id: str) -> PeerDiscussionModel | None:
        """Retrieve a discussion by ID."""
        return await self._session.get(PeerDiscussionModel, discussion_id)

    async def get_challenge(self, challenge_id: str) -> PeerChallengeModel | None:
        """Retrieve a challenge by ID."""
        return await self._session.get(PeerChallengeModel, challenge_id)

    async def increment_likes(self, discussion_id: str) -> int:
        """Atomically add one like and return the new count."""
        stmt = (
            update(PeerDiscussionModel)
            .where(PeerDiscussionModel.id == discussion_id)
            .values(likes_count=PeerDiscussionModel.likes_count + 1)
        )
        result = await self._session.execute(stmt)
        if result.rowcount == 0:
            raise RecordNotFoundError(f"Discussion {discussion_id} not found")
        model = await self._session.get(
            PeerDiscussionModel, discussion_id, populate_existing=True
        )
        if model is None:
            raise RecordNotFoundError(f"Discussion {discussion_id} not found")
        self._record(model, "UPDATE")
        return model.likes_count

    async def add_participant(self, challenge_id: str, user_id: str) -> int:
        """Insert a participant and bump the challenge counter in one transaction.

        Returns the new participant count.
        """
        if await self.get_challenge(challenge_id) is None:
            raise RecordNotFoundError(f"Challenge {challenge_id} not found")

        msg = f"User {user_id} already joined challenge {challenge_id}"
        if await self._has_participant(challenge_id, user_id):
            raise ChallengeAlreadyJoinedError(msg)

        participant = PeerChallengeParticipantModel(challenge_id=challenge_id, user_id=user_id)
        self._session.add(participant)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise ChallengeAlreadyJoinedError(msg) from e
        self._record(participant, "INSERT")

        await self._session.execute(
            update(PeerChallengeModel)
            .where(PeerChallengeModel.id == challenge_id)
            .values(participants_count=PeerChallengeModel.participants_count + 1)
        )
        challenge = await self._session.get(
            PeerChallengeModel, challenge_id, populate_existing=True
        )
        if challenge is None:
            raise RecordNotFoundError(f"Challenge {challenge_id} not found")
        self._record(challenge, "UPDATE")
        return challenge.participants_count

    async def _has_participant(self, challenge_id: str, user_id: str) -> bool:
        stmt = select(PeerChallengeParticipantModel.id).where(
            PeerChallengeParticipantModel.challenge_id == challenge_id,
            PeerChallengeParticipantModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def create_group_session(self, model: PeerGroupSessionModel) -> PeerGroupSessionModel:
        """Schedule a group session."""
        await self._add(model)
        return model

    async def get_group_session(self, session_id: str) -> PeerGroupSessionModel | None:
        """Retrieve a group session by ID."""
        return await self._session.get(PeerGroupSessionModel, session_id)

    async def list_group_sessions(self, group_id: str) -> list[PeerGroupSessionModel]:
        """Sessions of a group, soonest first."""
        stmt = (
            select(PeerGroupSessionModel)
            .where(PeerGroupSessionModel.group_id == group_id)
            .order_by(PeerGroupSessionModel.scheduled_at)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def register_for_session(self, session_id: str, user_id: str) -> int:
        """Take a place in a group session and return the new registered count.

        The counter only moves while the session has room, checked in the
        same UPDATE that increments it.
        """
        if await self.get_group_session(session_id) is None:
            raise RecordNotFoundError(f"Group session {session_id} not found")

        msg = f"User {user_id} already registered for session {session_id}"
        if await self._has_registration(session_id, user_id):
            raise SessionAlreadyRegisteredError(msg)

        result = await self._session.execute(
            update(PeerGroupSessionModel)
            .where(
                PeerGroupSessionModel.id == session_id,
                or_(
                    PeerGroupSessionModel.max_participants.is_(None),
                    PeerGroupSessionModel.registered_count
                    < PeerGroupSessionModel.max_participants,
                ),
            )
            .values(registered_count=PeerGroupSessionModel.registered_count + 1)
        )
        if result.rowcount == 0:
            raise SessionFullError(f"Group session {session_id} is full")

        registration = PeerSessionRegistrationModel(session_id=session_id, user_id=user_id)
        self._session.add(registration)
        try:
            await self._session.flush()
        except IntegrityError as e:
            raise SessionAlreadyRegisteredError(msg) from e
        self._record(registration, "INSERT")

        group_session = await self._session.get(
            PeerGroupSessionModel, session_id, populate_existing=True
        )
        if group_session is None:
            raise RecordNotFoundError(f"Group session {session_id} not found")
        self._record(group_session, "UPDATE")
        return group_session.registered_count

    async def _has_registration(self, session_id: str, user_id: str) -> bool:
        stmt = select(PeerSessionRegistrationModel.id).where(
            PeerSessionRegistrationModel.session_id == session_id,
            PeerSessionRegistrationModel.user_id == user_id,
        )
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def reconcile_counters(self) -> int:
        """Reset participants_count and registered_count from the membership rows.

        Returns how many challenges and sessions were corrected.
        """
        challenges = await self._reconcile(
            PeerChallengeModel,
            "participants_count",
            select(func.count(PeerChallengeParticipantModel.id))
            .where(PeerChallengeParticipantModel.challenge_id == PeerChallengeModel.id)
            .scalar_subquery(),
        )
        sessions = await self._reconcile(
            PeerGroupSessionModel,
            "registered_count",
            select(func.count(PeerSessionRegistrationModel.id))
            .where(PeerSessionRegistrationModel.session_id == PeerGroupSessionModel.id)
            .scalar_subquery(),
        )
        return challenges + sessions

    async def _reconcile(
        self, table: type[PeerChallengeModel | PeerGroupSessionModel], counter: str, actual: Any
    ) -> int:
        stmt = select(table.id, getattr(table, counter), actual)
        rows = (await self._session.execute(stmt)).all()

        corrected = 0
        for row_id, stored, counted in rows:
            if stored == counted:
                continue
            await self._session.execute(
                update(table).where(table.id == row_id).values({counter: counted})
            )
            logger.info(
                "counter_reconciled",
                table=table.__tablename__,
                row_id=row_id,
                counter=counter,
                stored=stored,
                actual=counted,
            )
            corrected += 1
        return corrected
