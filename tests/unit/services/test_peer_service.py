"""Tests for PeerService."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobprep_agents.services.peer_service import PeerService
from jobprep_core.exceptions import (
    ChallengeAlreadyJoinedError,
    NotAuthenticatedError,
    SessionAlreadyRegisteredError,
    SessionFullError,
)
from jobprep_core.interfaces.change_feed import ChangeEvent
from jobprep_infra.realtime.change_feed import InMemoryChangeFeed
from tests.mocks.mock_settings import make_settings

WHEN = datetime(2026, 11, 3, 17, 0, tzinfo=UTC)


@pytest.mark.unit
class TestPeerService:
    """Test discussions, likes and challenges."""

    @pytest.mark.asyncio
    async def test_likes_accumulate(
        self, mock_settings: MagicMock, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Each like returns the new total."""
        service = PeerService(mock_settings, session_factory)
        post = await service.post_discussion("Salary negotiation", "Any tips?")
        assert await service.like_discussion(post.id) == 1
        assert await service.like_discussion(post.id) == 2

    @pytest.mark.asyncio
    async def test_join_once(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        feed: InMemoryChangeFeed,
    ) -> None:
        """A user joins once; the counter change is published."""
        events: list[ChangeEvent] = []

        async def record(event: ChangeEvent) -> None:
            events.append(event)

        service = PeerService(mock_settings, session_factory, feed)
        challenge = await service.create_challenge("Daily mock", "One mock a day")
        feed.subscribe("peer_challenges", record, {"id": challenge.id})

        assert await service.join_challenge(challenge.id) == 1
        with pytest.raises(ChallengeAlreadyJoinedError):
            await service.join_challenge(challenge.id)

        other = PeerService(make_settings(user_id="user-2"), session_factory, feed)
        assert await other.join_challenge(challenge.id) == 2
        assert [e.record["participants_count"] for e in events] == [1, 2]
        assert await service.reconcile_counters() == 0

    @pytest.mark.asyncio
    async def test_requires_user(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Anonymous users cannot post."""
        service = PeerService(make_settings(user_id=None), session_factory)
        with pytest.raises(NotAuthenticatedError):
            await service.post_discussion("t", "c")


@pytest.mark.unit
class TestGroupSessions:
    """Test scheduling and registering for group sessions."""

    @pytest.mark.asyncio
    async def test_capacity_enforced(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        feed: InMemoryChangeFeed,
    ) -> None:
        """Places run out at max_participants; each registration is published."""
        events: list[ChangeEvent] = []

        async def record(event: ChangeEvent) -> None:
            events.append(event)

        service = PeerService(mock_settings, session_factory, feed)
        group_session = await service.schedule_session(
            "group-1", "Mock panel", WHEN, max_participants=2
        )
        feed.subscribe("peer_group_sessions", record, {"id": group_session.id})

        assert await service.register_for_session(group_session.id) == 1
        with pytest.raises(SessionAlreadyRegisteredError):
            await service.register_for_session(group_session.id)
        second = PeerService(make_settings(user_id="user-2"), session_factory, feed)
        assert await second.register_for_session(group_session.id) == 2
        third = PeerService(make_settings(user_id="user-3"), session_factory, feed)
        with pytest.raises(SessionFullError):
            await third.register_for_session(group_session.id)

        assert [e.record["registered_count"] for e in events] == [1, 2]
        [stored] = await service.list_sessions("group-1")
        assert stored.registered_count == 2
        assert await service.reconcile_counters() == 0

    @pytest.mark.asyncio
    async def test_unlimited_when_no_maximum(
        self, mock_settings: MagicMock, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Sessions without max_participants accept every user."""
        service = PeerService(mock_settings, session_factory)
        group_session = await service.schedule_session("group-1", "Open office hours", WHEN)
        for i in range(1, 4):
            other = PeerService(make_settings(user_id=f"user-{i}"), session_factory)
            assert await other.register_for_session(group_session.id) == i

    @pytest.mark.asyncio
    async def test_registration_requires_user(
        self, mock_settings: MagicMock, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Anonymous users cannot register."""
        group_session = await PeerService(mock_settings, session_factory).schedule_session(
            "group-1", "Resume review", WHEN
        )
        anonymous = PeerService(make_settings(user_id=None), session_factory)
        with pytest.raises(NotAuthenticatedError):
            await anonymous.register_for_session(group_session.id)
