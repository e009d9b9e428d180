"""In-process change feed that fans row changes out to async subscribers."""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from jobprep_core.interfaces.change_feed import ChangeCallback, ChangeEvent

logger = structlog.get_logger()


@dataclass
class _Subscription:
    feed: InMemoryChangeFeed
    table: str
    callback: ChangeCallback
    filters: dict[str, object] = field(default_factory=dict)
    active: bool = True

    def matches(self, event: ChangeEvent) -> bool:
        if event.table != self.table:
            return False
        return all(event.record.get(k) == v for k, v in self.filters.items())

    def unsubscribe(self) -> None:
        """Detach from the feed. Calling twice is a no-op."""
        if not self.active:
            return
        self.active = False
        self.feed._remove(self)


class InMemoryChangeFeed:
    """Equality-filtered table subscriptions delivered in registration order.

    Callbacks are awaited one at a time. A failing callback is logged and
    does not affect the writer or the remaining subscribers.
    """

    def __init__(self) -> None:
        self._subscriptions: list[_Subscription] = []

    @property
    def subscription_count(self) -> int:
        """Number of live subscriptions."""
        return len(self._subscriptions)

    def subscribe(
        self,
        table: str,
        callback: ChangeCallback,
        filters: dict[str, object] | None = None,
    ) -> _Subscription:
        """Register callback for changes on table whose record matches filters."""
        sub = _Subscription(self, table, callback, dict(filters or {}))
        self._subscriptions.append(sub)
        logger.debug("change_feed_subscribed", table=table, filters=sub.filters)
        return sub

    async def publish(self, event: ChangeEvent) -> None:
        """Deliver an event to every matching subscriber."""
        for sub in list(self._subscriptions):
            if not sub.active or not sub.matches(event):
                continue
            try:
                await sub.callback(event)
            except Exception as e:
                logger.error(
                    "change_callback_failed",
                    table=event.table,
                    change=event.event,
                    error_type=type(e).__name__,
                    error=str(e),
                )

    def _remove(self, sub: _Subscription) -> None:
        if sub in self._subscriptions:
            self._subscriptions.remove(sub)
            logger.debug("change_feed_unsubscribed", table=sub.table)
