"""Card stack controller.

Presents discovery candidates one card at a time and turns a drag on the
top card into a left/right decision once the horizontal displacement
crosses a fraction of the card width. Rendering (opacity, rotation,
easing) belongs to the UI; this module owns the state machine and the
threshold comparison.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from gridway.core.errors import ConflictError, GridWayError
from gridway.core.settings import settings
from gridway.domain import Direction, SwipeableItem, TargetType

logger = logging.getLogger(__name__)


class CardPhase(str, Enum):
    """Per-card gesture state."""
    RESTING = "resting"
    DRAGGING = "dragging"
    COMMITTED = "committed"


class StackStatus(str, Enum):
    """Overall stack state; EXHAUSTED is a normal end state, not an error."""
    LOADING = "loading"
    ACTIVE = "active"
    EXHAUSTED = "exhausted"


@dataclass(frozen=True)
class SwipeIntent:
    """Decision emitted by the stack, waiting to be dispatched."""
    item_id: str
    target_type: TargetType
    direction: Direction


@dataclass(frozen=True)
class ReleaseResult:
    """Outcome of releasing the pointer on the top card."""
    phase: CardPhase
    intent: SwipeIntent | None = None


@dataclass
class _DragState:
    item_id: str
    pointer_id: int
    start_x: float
    start_y: float
    dx: float = 0.0
    dy: float = 0.0


Dispatcher = Callable[[SwipeIntent], Awaitable[object]]


def classify_release(dx: float, card_width: float, threshold: float) -> Direction | None:
    """Map a released horizontal displacement onto a direction.

    Returns ``None`` (snap back) unless ``|dx|`` strictly exceeds
    ``threshold * card_width``.
    """
    if card_width <= 0:
        raise ValueError("card_width must be positive")
    if abs(dx) > threshold * card_width:
        return Direction.RIGHT if dx > 0 else Direction.LEFT
    return None


class CardStackController:
    """Gesture-driven presentation queue for one kind of swipeable item."""

    def __init__(
        self,
        target_type: TargetType,
        *,
        dispatcher: Dispatcher | None = None,
        threshold: float | None = None,
        peek_depth: int | None = None,
    ) -> None:
        self.target_type = target_type
        self.dispatcher = dispatcher
        self.threshold = settings.swipe_threshold if threshold is None else threshold
        self.peek_depth = settings.stack_peek_depth if peek_depth is None else peek_depth
        if not 0 < self.threshold < 1:
            raise ValueError("threshold must be a fraction of the card width")

        self._queue: list[SwipeableItem] | None = None
        self._drag: _DragState | None = None
        self._in_flight: dict[str, SwipeableItem] = {}
        self.outbox: list[SwipeIntent] = []
        self.failed: list[SwipeIntent] = []

    def load(self, items: Iterable[SwipeableItem]) -> None:
        """Replace the queue with already filtered, undecided candidates."""
        self._queue = list(items)
        self._drag = None

    @property
    def status(self) -> StackStatus:
        if self._queue is None:
            return StackStatus.LOADING
        return StackStatus.ACTIVE if self._queue else StackStatus.EXHAUSTED

    @property
    def top(self) -> SwipeableItem | None:
        return self._queue[0] if self._queue else None

    def visible(self) -> Sequence[SwipeableItem]:
        """Return the top card followed by the cards peeking beneath it."""
        if not self._queue:
            return []
        return self._queue[: 1 + self.peek_depth]

    @property
    def phase(self) -> CardPhase:
        """Phase of the top card."""
        return CardPhase.DRAGGING if self._drag is not None else CardPhase.RESTING

    @property
    def displacement(self) -> tuple[float, float]:
        if self._drag is None:
            return (0.0, 0.0)
        return (self._drag.dx, self._drag.dy)

    def press(self, item_id: str, x: float, y: float, pointer_id: int = 0) -> bool:
        """Start dragging ``item_id``; only the top card reacts."""
        top = self.top
        if top is None or top.id != item_id or self._drag is not None:
            return False
        self._drag = _DragState(item_id=item_id, pointer_id=pointer_id, start_x=x, start_y=y)
        return True

    def move(self, x: float, y: float, pointer_id: int = 0) -> None:
        drag = self._drag
        if drag is None or drag.pointer_id != pointer_id:
            return
        drag.dx = x - drag.start_x
        drag.dy = y - drag.start_y

    def release(self, card_width: float, pointer_id: int = 0) -> ReleaseResult:
        """End the drag and either commit a decision or snap back.

        A committed card leaves the queue immediately and its intent is
        queued for ``flush``.
        """
        drag = self._drag
        if drag is None or drag.pointer_id != pointer_id:
            return ReleaseResult(phase=CardPhase.RESTING)
        self._drag = None

        direction = classify_release(drag.dx, card_width, self.threshold)
        if direction is None:
            return ReleaseResult(phase=CardPhase.RESTING)
        return ReleaseResult(phase=CardPhase.COMMITTED, intent=self._commit(drag.item_id, direction))

    def swipe(self, item_id: str, direction: Direction) -> SwipeIntent | None:
        """Commit the top card without a gesture (button taps)."""
        top = self.top
        if top is None or top.id != item_id or self._drag is not None:
            return None
        return self._commit(item_id, direction)

    def _commit(self, item_id: str, direction: Direction) -> SwipeIntent:
        item = self._queue.pop(0)  # type: ignore[union-attr]
        self._in_flight[item_id] = item
        self.failed = [intent for intent in self.failed if intent.item_id != item_id]
        intent = SwipeIntent(item_id=item_id, target_type=self.target_type, direction=direction)
        self.outbox.append(intent)
        return intent

    async def flush(self) -> list[SwipeIntent]:
        """Dispatch queued intents and reconcile failures.

        A conflict means the server already holds a decision, so the intent
        counts as delivered. Any other failure puts the card back on top of
        the stack and records the intent in ``failed`` so the user can retry;
        an exception that is not a ``GridWayError`` is re-raised after that,
        leaving later intents in ``outbox``.

        Returns:
            Intents the server accepted (or already had)
        """
        if self.dispatcher is None:
            raise RuntimeError("No dispatcher configured for this card stack")

        delivered: list[SwipeIntent] = []
        while self.outbox:
            intent = self.outbox.pop(0)
            try:
                await self.dispatcher(intent)
            except ConflictError:
                logger.info("Decision on %s was already recorded", intent.item_id)
            except GridWayError as exc:
                logger.warning("Dispatch of %s failed: %s", intent.item_id, exc.detail)
                self._restore(intent)
                continue
            except Exception:
                logger.exception("Dispatcher crashed on %s", intent.item_id)
                self._restore(intent)
                raise
            self._in_flight.pop(intent.item_id, None)
            delivered.append(intent)
        return delivered

    def _restore(self, intent: SwipeIntent) -> None:
        item = self._in_flight.pop(intent.item_id, None)
        if item is None:
            return
        if self._queue is None:
            self._queue = []
        # The restored card becomes top again; an in-progress drag on the old top is dropped.
        self._drag = None
        self._queue.insert(0, item)
        self.failed.append(intent)
