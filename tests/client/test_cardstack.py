# tests/client/test_cardstack.py
"""Tests for the card stack gesture state machine and dispatch reconciliation."""

import pytest

from gridway.client import (
    CardPhase,
    CardStackController,
    StackStatus,
    SwipeIntent,
    classify_release,
)
from gridway.core.errors import ConflictError, DownstreamUnavailableError
from gridway.domain import AttendeeItem, Direction, TargetType

CARD_WIDTH = 300


def _attendees(*ids: str) -> list[AttendeeItem]:
    return [AttendeeItem(id=item_id, name=item_id.upper()) for item_id in ids]


def _drag(stack: CardStackController, item_id: str, dx: float) -> object:
    assert stack.press(item_id, 0, 0)
    stack.move(dx, 5)
    return stack.release(CARD_WIDTH)


@pytest.fixture()
def stack() -> CardStackController:
    controller = CardStackController(TargetType.ATTENDEE, threshold=1 / 3, peek_depth=2)
    controller.load(_attendees("a", "b", "c", "d", "e"))
    return controller


class TestClassifyRelease:
    @pytest.mark.parametrize(
        ("dx", "expected"),
        [
            (0, None),
            (99, None),
            (100, None),
            (101, Direction.RIGHT),
            (-99, None),
            (-101, Direction.LEFT),
        ],
    )
    def test_threshold_is_strict(self, dx, expected):
        assert classify_release(dx, CARD_WIDTH, 1 / 3) is expected

    def test_rejects_non_positive_width(self):
        with pytest.raises(ValueError):
            classify_release(10, 0, 1 / 3)


class TestGestures:
    def test_below_threshold_snaps_back(self, stack):
        result = _drag(stack, "a", 99)

        assert result.phase is CardPhase.RESTING
        assert result.intent is None
        assert stack.top.id == "a"
        assert stack.outbox == []

    def test_past_threshold_commits(self, stack):
        result = _drag(stack, "a", 101)

        assert result.phase is CardPhase.COMMITTED
        assert result.intent == SwipeIntent("a", TargetType.ATTENDEE, Direction.RIGHT)
        assert stack.top.id == "b"
        assert stack.outbox == [result.intent]

    def test_left_drag_commits_left(self, stack):
        result = _drag(stack, "a", -150)

        assert result.intent.direction is Direction.LEFT

    def test_only_top_card_accepts_press(self, stack):
        assert stack.press("b", 0, 0) is False
        assert stack.phase is CardPhase.RESTING
        assert stack.press("a", 0, 0) is True
        assert stack.phase is CardPhase.DRAGGING

    def test_move_tracks_displacement(self, stack):
        stack.press("a", 10, 20)
        stack.move(60, 5)

        assert stack.displacement == (50, -15)

    def test_move_from_other_pointer_is_ignored(self, stack):
        stack.press("a", 0, 0, pointer_id=1)
        stack.move(200, 0, pointer_id=2)

        assert stack.release(CARD_WIDTH, pointer_id=1).phase is CardPhase.RESTING

    def test_visible_shows_top_and_two_peeking(self, stack):
        assert [item.id for item in stack.visible()] == ["a", "b", "c"]

    def test_button_swipe_commits_top_only(self, stack):
        assert stack.swipe("b", Direction.LEFT) is None
        intent = stack.swipe("a", Direction.LEFT)

        assert intent.direction is Direction.LEFT
        assert stack.top.id == "b"


class TestStatus:
    def test_loading_before_candidates_arrive(self):
        stack = CardStackController(TargetType.EVENT, threshold=1 / 3)

        assert stack.status is StackStatus.LOADING
        assert stack.visible() == []

    def test_exhausted_after_last_card(self):
        stack = CardStackController(TargetType.ATTENDEE, threshold=1 / 3)
        stack.load(_attendees("only"))

        assert stack.status is StackStatus.ACTIVE
        stack.swipe("only", Direction.RIGHT)
        assert stack.status is StackStatus.EXHAUSTED
        assert stack.top is None

    def test_empty_load_is_exhausted(self):
        stack = CardStackController(TargetType.ATTENDEE, threshold=1 / 3)
        stack.load([])

        assert stack.status is StackStatus.EXHAUSTED

    def test_invalid_threshold_rejected(self):
        with pytest.raises(ValueError):
            CardStackController(TargetType.EVENT, threshold=1.5)


class RecordingDispatcher:
    """Async dispatcher double that fails for selected item ids."""

    def __init__(self, failures: dict[str, Exception] | None = None) -> None:
        self.failures = failures or {}
        self.sent: list[SwipeIntent] = []

    async def __call__(self, intent: SwipeIntent) -> None:
        self.sent.append(intent)
        error = self.failures.get(intent.item_id)
        if error is not None:
            raise error


class TestFlush:
    @pytest.mark.asyncio
    async def test_flush_delivers_outbox(self, stack):
        dispatcher = RecordingDispatcher()
        stack.dispatcher = dispatcher
        stack.swipe("a", Direction.RIGHT)
        stack.swipe("b", Direction.LEFT)

        delivered = await stack.flush()

        assert [i.item_id for i in delivered] == ["a", "b"]
        assert dispatcher.sent == delivered
        assert stack.outbox == []
        assert stack.failed == []

    @pytest.mark.asyncio
    async def test_conflict_counts_as_delivered(self, stack):
        stack.dispatcher = RecordingDispatcher({"a": ConflictError("already")})
        stack.swipe("a", Direction.RIGHT)

        delivered = await stack.flush()

        assert [i.item_id for i in delivered] == ["a"]
        assert stack.top.id == "b"
        assert stack.failed == []

    @pytest.mark.asyncio
    async def test_failure_restores_card_for_retry(self, stack):
        stack.dispatcher = RecordingDispatcher({"a": DownstreamUnavailableError("offline")})
        intent = stack.swipe("a", Direction.RIGHT)

        delivered = await stack.flush()

        assert delivered == []
        assert stack.top.id == "a"
        assert stack.failed == [intent]

        stack.dispatcher = RecordingDispatcher()
        stack.swipe("a", Direction.LEFT)
        assert stack.failed == []
        assert [i.direction for i in await stack.flush()] == [Direction.LEFT]

    @pytest.mark.asyncio
    async def test_flush_requires_dispatcher(self, stack):
        stack.swipe("a", Direction.RIGHT)

        with pytest.raises(RuntimeError):
            await stack.flush()

    @pytest.mark.asyncio
    async def test_unexpected_error_restores_card_and_propagates(self, stack):
        stack.dispatcher = RecordingDispatcher({"a": ValueError("malformed response")})
        intent = stack.swipe("a", Direction.RIGHT)
        stack.swipe("b", Direction.LEFT)

        with pytest.raises(ValueError):
            await stack.flush()

        assert stack.top.id == "a"
        assert stack.failed == [intent]
        assert [i.item_id for i in stack.outbox] == ["b"]
