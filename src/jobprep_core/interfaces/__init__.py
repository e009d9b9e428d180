"""Public interface re-exports for jobprep_core."""

from jobprep_core.interfaces.change_feed import (
    ChangeCallback,
    ChangeEvent,
    ChangeFeed,
    Subscription,
)
from jobprep_core.interfaces.polisher import MessagePolisher

__all__ = [
    "ChangeCallback",
    "ChangeEvent",
    "ChangeFeed",
    "MessagePolisher",
    "Subscription",
]
