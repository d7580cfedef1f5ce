"""App-side components: the card stack controller and the API client."""

from .cardstack import (
    CardPhase,
    CardStackController,
    Dispatcher,
    ReleaseResult,
    StackStatus,
    SwipeIntent,
    classify_release,
)
from .http import GridWayClient, get_client

__all__ = [
    "CardPhase",
    "CardStackController",
    "Dispatcher",
    "GridWayClient",
    "ReleaseResult",
    "StackStatus",
    "SwipeIntent",
    "classify_release",
    "get_client",
]
