"""
Unit tests for the PointerCapture registry.
"""

from lanechart.core.gesture import PointerPosition
from lanechart.core.pointer_capture import PointerCapture


def test_publish_without_capture_is_not_consumed():
    hub = PointerCapture()
    assert hub.publish_move(PointerPosition(1)) is False
    assert hub.publish_up(PointerPosition(1)) is False


def test_events_reach_live_capture():
    hub = PointerCapture()
    moves, ups = [], []
    hub.acquire(moves.append, ups.append)
    assert hub.publish_move(PointerPosition(5)) is True
    assert hub.publish_up(PointerPosition(7)) is True
    assert moves == [PointerPosition(5)]
    assert ups == [PointerPosition(7)]


def test_release_detaches_and_is_idempotent():
    hub = PointerCapture()
    moves = []
    token = hub.acquire(moves.append, lambda p: None)
    token.release()
    token.release()
    assert not token.active
    assert not hub.is_captured
    hub.publish_move(PointerPosition(1))
    assert moves == []


def test_new_capture_supersedes_old_one():
    hub = PointerCapture()
    lost, first_moves, second_moves = [], [], []
    first = hub.acquire(first_moves.append, lambda p: None, lambda: lost.append(1))
    second = hub.acquire(second_moves.append, lambda p: None)
    assert not first.active
    assert second.active
    assert lost == [1]
    hub.publish_move(PointerPosition(3))
    assert first_moves == []
    assert second_moves == [PointerPosition(3)]


def test_releasing_stale_token_keeps_current():
    hub = PointerCapture()
    first = hub.acquire(lambda p: None, lambda p: None)
    hub.acquire(lambda p: None, lambda p: None)
    first.release()
    assert hub.is_captured


def test_capture_released_inside_up_handler():
    hub = PointerCapture()
    tokens = []

    def on_up(position):
        tokens[0].release()

    tokens.append(hub.acquire(lambda p: None, on_up))
    assert hub.publish_up(PointerPosition(0)) is True
    assert not hub.is_captured
