"""
Unit tests for the pure gesture state machine.
"""

from datetime import date

import pytest

from lanechart.core.date_math import DateRange
from lanechart.core.gesture import (
    Activated,
    BeginEdit,
    CancelEdit,
    CancelGesture,
    Candidate,
    Click,
    CommitEdit,
    DoubleClick,
    Editing,
    GestureKind,
    Idle,
    PointerDown,
    PointerMove,
    PointerPosition,
    PointerUp,
    draft_of,
    reduce,
)

PPD = 6
START = date(2024, 1, 10)
END = date(2024, 1, 12)


def down(kind=GestureKind.MOVE, x=100.0, scroll=0.0):
    return PointerDown(kind, PointerPosition(x, scroll), START, END)


def move(x, scroll=0.0):
    return PointerMove(PointerPosition(x, scroll))


def candidate(kind=GestureKind.MOVE, x=100.0):
    return reduce(Idle(), down(kind, x), PPD).state


class TestPointerDown:
    def test_down_from_idle_starts_candidate(self):
        t = reduce(Idle(), down(), PPD)
        assert isinstance(t.state, Candidate)
        assert t.acquire_capture
        assert t.cancel_select
        assert t.changes is None

    def test_down_while_editing_is_ignored(self):
        state = Editing("A")
        t = reduce(state, down(), PPD)
        assert t.state is state
        assert not t.acquire_capture

    def test_down_during_gesture_starts_fresh_session(self):
        active = reduce(candidate(), move(130), PPD).state
        t = reduce(active, down(GestureKind.RESIZE_RIGHT, 300), PPD)
        assert isinstance(t.state, Candidate)
        assert t.state.session.kind is GestureKind.RESIZE_RIGHT
        assert t.state.session.origin.x == 300
        assert t.changes is None

    def test_kind_accepts_string_value(self):
        t = reduce(Idle(), PointerDown("resize-left", PointerPosition(0), START, END), PPD)
        assert t.state.session.kind is GestureKind.RESIZE_LEFT


class TestActivation:
    def test_small_moves_stay_candidate(self):
        state = candidate()
        t = reduce(state, move(103), PPD)
        assert t.state is state
        t = reduce(state, move(97), PPD)
        assert t.state is state

    def test_threshold_distance_activates(self):
        t = reduce(candidate(), move(104), PPD)
        assert isinstance(t.state, Activated)
        assert t.changes is None

    def test_scroll_counts_towards_displacement(self):
        t = reduce(candidate(), move(100, scroll=5), PPD)
        assert isinstance(t.state, Activated)

    def test_custom_threshold(self):
        t = reduce(candidate(), move(108), PPD, activation_threshold=10)
        assert isinstance(t.state, Candidate)


class TestDraft:
    def test_move_shifts_both_ends(self):
        t = reduce(candidate(), move(118), PPD)
        assert t.state.draft == DateRange(date(2024, 1, 13), date(2024, 1, 15))

    def test_resize_right_moves_end_only(self):
        t = reduce(candidate(GestureKind.RESIZE_RIGHT), move(118), PPD)
        assert draft_of(t.state) == DateRange(START, date(2024, 1, 15))

    def test_resize_left_moves_start_only(self):
        t = reduce(candidate(GestureKind.RESIZE_LEFT), move(88), PPD)
        assert draft_of(t.state) == DateRange(date(2024, 1, 8), END)

    def test_resize_left_past_end_swaps(self):
        t = reduce(candidate(GestureKind.RESIZE_LEFT), move(100 + 5 * PPD), PPD)
        assert draft_of(t.state) == DateRange(END, date(2024, 1, 15))

    def test_half_day_rounds_away_from_zero(self):
        t = reduce(candidate(), move(100 - 9), PPD)
        assert draft_of(t.state).start == date(2024, 1, 8)

    def test_unchanged_draft_keeps_state(self):
        active = reduce(candidate(), move(118), PPD).state
        t = reduce(active, move(119), PPD)
        assert t.state is active

    def test_draft_of_non_activated_is_none(self):
        assert draft_of(Idle()) is None
        assert draft_of(candidate()) is None


class TestPointerUp:
    def test_up_from_candidate_commits_nothing(self):
        t = reduce(candidate(), PointerUp(PointerPosition(102)), PPD)
        assert t.state == Idle()
        assert t.changes is None
        assert t.release_capture

    def test_up_from_activated_commits_draft(self):
        active = reduce(candidate(), move(118), PPD).state
        t = reduce(active, PointerUp(PointerPosition(118)), PPD)
        assert t.state == Idle(suppress_click=True)
        assert t.changes == {"start": date(2024, 1, 13), "end": date(2024, 1, 15)}
        assert t.release_capture
        assert t.cancel_select

    def test_up_without_draft_recomputes_from_position(self):
        session = candidate().session
        t = reduce(Activated(session), PointerUp(PointerPosition(112)), PPD)
        assert t.changes == {"start": date(2024, 1, 12), "end": date(2024, 1, 14)}

    def test_up_in_idle_is_noop(self):
        t = reduce(Idle(), PointerUp(), PPD)
        assert t.state == Idle()
        assert not t.release_capture


class TestClicks:
    def test_click_schedules_select(self):
        t = reduce(Idle(), Click(), PPD)
        assert t.schedule_select

    def test_click_after_drag_is_swallowed_once(self):
        t = reduce(Idle(suppress_click=True), Click(), PPD)
        assert t.state == Idle()
        assert not t.schedule_select
        assert reduce(t.state, Click(), PPD).schedule_select

    def test_double_click_enters_editing(self):
        t = reduce(Idle(), DoubleClick("Alpha"), PPD)
        assert t.state == Editing("Alpha")
        assert t.cancel_select
        assert t.focus_editor

    def test_begin_edit_outside_idle_is_ignored(self):
        state = candidate()
        assert reduce(state, BeginEdit("A"), PPD).state is state


class TestEditing:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("  Beta  ", {"name": "Beta"}),
            ("Alpha", None),
            ("   ", None),
            ("", None),
        ],
    )
    def test_commit(self, text, expected):
        t = reduce(Editing("Alpha"), CommitEdit(text, "Alpha"), PPD)
        assert t.state == Idle()
        assert t.changes == expected

    def test_commit_outside_editing_is_ignored(self):
        t = reduce(Idle(), CommitEdit("X", "Y"), PPD)
        assert t.changes is None

    def test_cancel_edit(self):
        assert reduce(Editing("A"), CancelEdit(), PPD).state == Idle()


class TestCancelGesture:
    def test_cancel_during_drag_never_commits(self):
        active = reduce(candidate(), move(140), PPD).state
        t = reduce(active, CancelGesture(), PPD)
        assert t.state == Idle()
        assert t.changes is None
        assert t.release_capture

    def test_cancel_in_idle_only_disarms_select(self):
        t = reduce(Idle(), CancelGesture(), PPD)
        assert t.state == Idle()
        assert t.cancel_select
        assert not t.release_capture


def test_unknown_event_raises():
    with pytest.raises(TypeError):
        reduce(Idle(), object(), PPD)
