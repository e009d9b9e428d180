"""Tests for the in-memory change feed."""

from __future__ import annotations

import pytest

from jobprep_core.interfaces.change_feed import ChangeEvent, ChangeFeed, Subscription
from jobprep_infra.realtime.change_feed import InMemoryChangeFeed


class _Recorder:
    def __init__(self) -> None:
        self.events: list[ChangeEvent] = []

    async def __call__(self, event: ChangeEvent) -> None:
        self.events.append(event)


def _event(table: str = "interviews", **record: object) -> ChangeEvent:
    return ChangeEvent(table=table, event="UPDATE", record=dict(record))


@pytest.mark.unit
class TestInMemoryChangeFeed:
    """Test subscription filtering and delivery."""

    def test_satisfies_protocol(self) -> None:
        """The in-memory feed is a ChangeFeed."""
        assert isinstance(InMemoryChangeFeed(), ChangeFeed)

    @pytest.mark.asyncio
    async def test_table_and_filter_match(self, feed: InMemoryChangeFeed) -> None:
        """Only events for the table whose record matches every filter arrive."""
        recorder = _Recorder()
        feed.subscribe("interviews", recorder, {"id": "int-1"})

        await feed.publish(_event(id="int-1", status="completed"))
        await feed.publish(_event(id="int-2"))
        await feed.publish(_event("jobs", id="int-1"))

        assert len(recorder.events) == 1
        assert recorder.events[0].record["status"] == "completed"

    @pytest.mark.asyncio
    async def test_no_filters_receives_all_rows(self, feed: InMemoryChangeFeed) -> None:
        """A subscription without filters sees every change on the table."""
        recorder = _Recorder()
        feed.subscribe("interviews", recorder)
        await feed.publish(_event(id="a"))
        await feed.publish(_event(id="b"))
        assert [e.record["id"] for e in recorder.events] == ["a", "b"]

    @pytest.mark.asyncio
    async def test_unsubscribe_is_idempotent(self, feed: InMemoryChangeFeed) -> None:
        """After unsubscribe nothing arrives; a second call is harmless."""
        recorder = _Recorder()
        sub = feed.subscribe("interviews", recorder)
        sub.unsubscribe()
        sub.unsubscribe()

        await feed.publish(_event(id="a"))
        assert recorder.events == []
        assert feed.subscription_count == 0

    @pytest.mark.asyncio
    async def test_failing_callback_isolated(self, feed: InMemoryChangeFeed) -> None:
        """One subscriber raising does not stop the others or the publisher."""

        async def boom(event: ChangeEvent) -> None:
            msg = "subscriber broke"
            raise RuntimeError(msg)

        recorder = _Recorder()
        feed.subscribe("interviews", boom)
        feed.subscribe("interviews", recorder)

        await feed.publish(_event(id="a"))
        assert len(recorder.events) == 1

    @pytest.mark.asyncio
    async def test_unsubscribe_during_delivery(self, feed: InMemoryChangeFeed) -> None:
        """A callback may unsubscribe a later subscriber mid-publish."""
        recorder = _Recorder()
        subs: list[Subscription] = []

        async def remove_later(event: ChangeEvent) -> None:
            subs[0].unsubscribe()

        feed.subscribe("interviews", remove_later)
        subs.append(feed.subscribe("interviews", recorder))

        await feed.publish(_event(id="a"))
        assert recorder.events == []
        assert feed.subscription_count == 1
