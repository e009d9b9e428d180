"""Abstract change-feed interface."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

ChangeType = Literal["INSERT", "UPDATE", "DELETE"]


@dataclass(frozen=True)
class ChangeEvent:
    """A single row change published after a write."""

    table: str
    event: ChangeType
    record: dict[str, object] = field(default_factory=dict)


ChangeCallback = Callable[[ChangeEvent], Awaitable[None]]


@runtime_checkable
class Subscription(Protocol):
    """Handle returned by subscribe; unsubscribe is idempotent."""

    def unsubscribe(self) -> None:
        """Stop receiving events."""
        ...


@runtime_checkable
class ChangeFeed(Protocol):
    """Observer interface over table writes."""

    def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        filters: dict[str, object] | None = None,
    ) -> Subscription:
        """Register callback for changes on table whose record matches filters."""
        ...

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to every matching subscriber."""
        ...
