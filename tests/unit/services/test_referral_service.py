"""Tests for ReferralService."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jobprep_agents.agents.referral_writer import ReferralRequestAgent
from jobprep_agents.services.base import as_utc
from jobprep_agents.services.referral_service import ReferralService
from jobprep_core.exceptions import (
    InvalidStatusTransitionError,
    JobPrepError,
    NotAuthenticatedError,
    RecordNotFoundError,
)
from jobprep_core.interfaces.change_feed import ChangeEvent
from jobprep_infra.db.models import JobModel
from jobprep_infra.realtime.change_feed import InMemoryChangeFeed
from tests.mocks.mock_llm import FakeInstructorClient
from tests.mocks.mock_settings import make_settings


def _service(
    settings: MagicMock,
    session_factory: async_sessionmaker[AsyncSession],
    feed: InMemoryChangeFeed | None = None,
) -> tuple[ReferralService, FakeInstructorClient]:
    writer = ReferralRequestAgent(settings)
    client = FakeInstructorClient()
    writer._instructor = client
    return ReferralService(settings, session_factory, feed, writer=writer), client


@pytest.mark.unit
class TestCreate:
    """Test drafting and saving referral requests."""

    @pytest.mark.asyncio
    async def test_draft_saves_generated_message(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """The assembled message is stored as a draft with no timestamps."""
        service, client = _service(mock_settings, session_factory)
        request = await service.draft(saved_job.id, "Sam", contact_company="Acme")

        assert request.status == "draft"
        assert request.user_id == "user-1"
        assert request.contact_company == "Acme"
        assert request.request_message == (
            "Hi Sam,\n\nWould you be open to referring me?\n\nThanks, Alex"
        )
        assert request.requested_at is None
        assert request.response_received_at is None
        assert len(client.messages.calls) == 1

    @pytest.mark.asyncio
    async def test_unknown_job(
        self, mock_settings: MagicMock, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Requests must reference a saved job."""
        service, client = _service(mock_settings, session_factory)
        with pytest.raises(RecordNotFoundError):
            await service.create_request("missing", "Sam", "Hi Sam")
        with pytest.raises(RecordNotFoundError):
            await service.draft("missing", "Sam")
        assert client.messages.calls == []

    @pytest.mark.asyncio
    async def test_empty_message_rejected(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """A blank message is not saved."""
        service, _ = _service(mock_settings, session_factory)
        with pytest.raises(JobPrepError, match="empty"):
            await service.create_request(saved_job.id, "Sam", "   ")
        assert await service.list_requests() == []

    @pytest.mark.asyncio
    async def test_requires_user(
        self, session_factory: async_sessionmaker[AsyncSession], saved_job: JobModel
    ) -> None:
        """Anonymous users cannot save requests."""
        service, _ = _service(make_settings(user_id=None), session_factory)
        with pytest.raises(NotAuthenticatedError):
            await service.create_request(saved_job.id, "Sam", "Hi Sam")

    @pytest.mark.asyncio
    async def test_list_filters_by_job(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """Listing can be narrowed to one job."""
        service, _ = _service(mock_settings, session_factory)
        await service.create_request(saved_job.id, "Sam", "Hi Sam")
        await service.create_request(saved_job.id, "Kim", "Hi Kim")

        assert len(await service.list_requests()) == 2
        assert len(await service.list_requests(saved_job.id)) == 2
        assert await service.list_requests("other-job") == []


@pytest.mark.unit
class TestStatusLifecycle:
    """Test ReferralService.update_status."""

    @pytest.mark.asyncio
    async def test_sent_then_accepted_then_successful(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """Sending stamps requested_at and a reply stamps response_received_at."""
        service, _ = _service(mock_settings, session_factory)
        request = await service.create_request(saved_job.id, "Sam", "Hi Sam")

        sent = await service.update_status(request.id, "sent")
        assert sent.requested_at is not None
        assert sent.response_received_at is None

        accepted = await service.update_status(request.id, "accepted")
        assert accepted.response_received_at is not None
        assert accepted.requested_at is not None
        assert as_utc(accepted.requested_at) == as_utc(sent.requested_at)

        successful = await service.update_status(request.id, "successful")
        assert successful.status == "successful"
        assert successful.response_received_at is not None
        assert as_utc(successful.response_received_at) == as_utc(accepted.response_received_at)

    @pytest.mark.asyncio
    async def test_declined_after_no_response(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
    ) -> None:
        """A late decline still records when the answer arrived."""
        service, _ = _service(mock_settings, session_factory)
        request = await service.create_request(saved_job.id, "Sam", "Hi Sam")
        await service.update_status(request.id, "sent")

        silent = await service.update_status(request.id, "no_response")
        assert silent.response_received_at is None

        declined = await service.update_status(request.id, "declined")
        assert declined.status == "declined"
        assert declined.response_received_at is not None

    @pytest.mark.parametrize(
        ("path", "target"),
        [
            ([], "accepted"),
            ([], "successful"),
            (["sent"], "successful"),
            (["sent", "declined"], "accepted"),
            (["sent", "accepted", "successful"], "sent"),
        ],
    )
    @pytest.mark.asyncio
    async def test_invalid_transition(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        saved_job: JobModel,
        path: list[str],
        target: str,
    ) -> None:
        """Skipping or reversing a step is refused and the status is kept."""
        service, _ = _service(mock_settings, session_factory)
        request = await service.create_request(saved_job.id, "Sam", "Hi Sam")
        for status in path:
            await service.update_status(request.id, status)  # type: ignore[arg-type]

        with pytest.raises(InvalidStatusTransitionError):
            await service.update_status(request.id, target)  # type: ignore[arg-type]

        [stored] = await service.list_requests()
        assert stored.status == (path[-1] if path else "draft")

    @pytest.mark.asyncio
    async def test_unknown_request(
        self, mock_settings: MagicMock, session_factory: async_sessionmaker[AsyncSession]
    ) -> None:
        """Updating a missing request raises RecordNotFoundError."""
        service, _ = _service(mock_settings, session_factory)
        with pytest.raises(RecordNotFoundError):
            await service.update_status("missing", "sent")

    @pytest.mark.asyncio
    async def test_status_changes_published(
        self,
        mock_settings: MagicMock,
        session_factory: async_sessionmaker[AsyncSession],
        feed: InMemoryChangeFeed,
        saved_job: JobModel,
    ) -> None:
        """Each committed status change reaches subscribers."""
        events: list[ChangeEvent] = []

        async def record(event: ChangeEvent) -> None:
            events.append(event)

        service, _ = _service(mock_settings, session_factory, feed)
        feed.subscribe("referral_requests", record)
        request = await service.create_request(saved_job.id, "Sam", "Hi Sam")
        await service.update_status(request.id, "sent")

        assert [(e.event, e.record["status"]) for e in events] == [
            ("INSERT", "draft"),
            ("UPDATE", "sent"),
        ]
