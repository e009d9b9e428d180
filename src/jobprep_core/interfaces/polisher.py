"""Abstract message polisher interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from jobprep_core.models.follow_up import PolishedMessage


@runtime_checkable
class MessagePolisher(Protocol):
    """Anything that can stylistically refine a filled-in message."""

    async def polish(
        self,
        subject: str,
        content: str,
        follow_up_type: str,
        placeholder_values: dict[str, str],
    ) -> PolishedMessage:
        """Return a refined subject and body."""
        ...
