"""
Gesture State Machine Module.

Pure transition logic for direct manipulation of a single timeline item.

States are tagged, immutable values (Idle, Candidate, Activated, Editing)
and ``reduce(state, event)`` returns the next state together with an
optional commit and the side effects the owning controller must perform.
Nothing in this module touches timers, listeners or callbacks.
"""

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Any, Dict, Optional, Union

from lanechart.core.date_math import (
    DateRange,
    add_days,
    normalize_range,
    x_to_day_delta,
)

logger = logging.getLogger(__name__)

ACTIVATION_THRESHOLD_PX = 4


class GestureKind(str, Enum):
    """What a pointer-down grabbed: the bar body or one of its handles."""

    MOVE = "move"
    RESIZE_LEFT = "resize-left"
    RESIZE_RIGHT = "resize-right"


@dataclass(frozen=True)
class PointerPosition:
    """Horizontal pointer position plus the horizontal scroll offset."""

    x: float
    scroll_x: float = 0.0


@dataclass(frozen=True)
class GestureSession:
    """Snapshot taken at pointer-down."""

    kind: GestureKind
    origin: PointerPosition
    start: date
    end: date

    def displacement(self, position: PointerPosition) -> float:
        """Cumulative pointer delta including scrolling since the origin."""
        return (position.x - self.origin.x) + (
            position.scroll_x - self.origin.scroll_x
        )

    def range_at(self, position: PointerPosition, pixels_per_day: float) -> DateRange:
        """The normalized range the item would have at this pointer position."""
        delta = x_to_day_delta(self.displacement(position), pixels_per_day)
        if self.kind is GestureKind.MOVE:
            return normalize_range(
                add_days(self.start, delta), add_days(self.end, delta)
            )
        if self.kind is GestureKind.RESIZE_LEFT:
            return normalize_range(add_days(self.start, delta), self.end)
        return normalize_range(self.start, add_days(self.end, delta))


# States


@dataclass(frozen=True)
class Idle:
    # Set right after an activated drag so the trailing click is swallowed.
    suppress_click: bool = False


@dataclass(frozen=True)
class Candidate:
    session: GestureSession


@dataclass(frozen=True)
class Activated:
    session: GestureSession
    draft: Optional[DateRange] = None


@dataclass(frozen=True)
class Editing:
    original_name: str = ""


GestureState = Union[Idle, Candidate, Activated, Editing]


# Events


@dataclass(frozen=True)
class PointerDown:
    kind: GestureKind
    position: PointerPosition
    start: date
    end: date


@dataclass(frozen=True)
class PointerMove:
    position: PointerPosition


@dataclass(frozen=True)
class PointerUp:
    position: Optional[PointerPosition] = None


@dataclass(frozen=True)
class Click:
    pass


@dataclass(frozen=True)
class DoubleClick:
    name: str = ""


@dataclass(frozen=True)
class BeginEdit:
    name: str = ""


@dataclass(frozen=True)
class CommitEdit:
    text: str
    current_name: str


@dataclass(frozen=True)
class CancelEdit:
    pass


@dataclass(frozen=True)
class CancelGesture:
    """Teardown or loss of pointer capture; never commits."""


GestureEvent = Union[
    PointerDown,
    PointerMove,
    PointerUp,
    Click,
    DoubleClick,
    BeginEdit,
    CommitEdit,
    CancelEdit,
    CancelGesture,
]


@dataclass(frozen=True)
class Transition:
    """
    Result of feeding one event to the state machine.

    Attributes:
        state: The next state.
        changes: Fields to commit (without the item id), or None.
        acquire_capture: Start listening to global pointer move/up.
        release_capture: Stop listening to global pointer move/up.
        schedule_select: Arm the click debounce timer.
        cancel_select: Disarm the click debounce timer.
        focus_editor: Grab focus for the inline editor on the next turn.
    """

    state: GestureState
    changes: Optional[Dict[str, Any]] = None
    acquire_capture: bool = False
    release_capture: bool = False
    schedule_select: bool = False
    cancel_select: bool = False
    focus_editor: bool = False


def draft_of(state: GestureState) -> Optional[DateRange]:
    """The live draft range, if the state carries one."""
    if isinstance(state, Activated):
        return state.draft
    return None


def _on_pointer_down(state: GestureState, event: PointerDown) -> Transition:
    if isinstance(state, Editing):
        return Transition(state)
    if isinstance(state, (Candidate, Activated)):
        logger.debug("Pointer-down during a live gesture; superseding session")
    session = GestureSession(
        kind=GestureKind(event.kind),
        origin=event.position,
        start=event.start,
        end=event.end,
    )
    return Transition(
        Candidate(session),
        acquire_capture=True,
        cancel_select=True,
    )


def _on_pointer_move(
    state: GestureState,
    event: PointerMove,
    pixels_per_day: float,
    activation_threshold: float,
) -> Transition:
    if isinstance(state, Candidate):
        session = state.session
        if abs(session.displacement(event.position)) < activation_threshold:
            return Transition(state)
        draft = session.range_at(event.position, pixels_per_day)
        logger.debug(f"Gesture {session.kind.value} activated")
        return Transition(Activated(session, draft))

    if isinstance(state, Activated):
        draft = state.session.range_at(event.position, pixels_per_day)
        if draft == state.draft:
            return Transition(state)
        return Transition(Activated(state.session, draft))

    return Transition(state)


def _on_pointer_up(
    state: GestureState, event: PointerUp, pixels_per_day: float
) -> Transition:
    if isinstance(state, Candidate):
        return Transition(Idle(), release_capture=True)

    if isinstance(state, Activated):
        final = state.draft
        if final is None:
            position = event.position or state.session.origin
            final = state.session.range_at(position, pixels_per_day)
        return Transition(
            Idle(suppress_click=True),
            changes=final.as_changes(),
            release_capture=True,
            cancel_select=True,
        )

    return Transition(state)


def _on_click(state: GestureState) -> Transition:
    if isinstance(state, Idle):
        if state.suppress_click:
            return Transition(Idle())
        return Transition(state, schedule_select=True)
    return Transition(state)


def _on_begin_edit(state: GestureState, name: str) -> Transition:
    if isinstance(state, Idle):
        return Transition(
            Editing(original_name=name), cancel_select=True, focus_editor=True
        )
    return Transition(state)


def _on_commit_edit(state: GestureState, event: CommitEdit) -> Transition:
    if not isinstance(state, Editing):
        return Transition(state)
    value = (event.text or "").strip()
    if not value or value == event.current_name:
        return Transition(Idle())
    return Transition(Idle(), changes={"name": value})


def reduce(
    state: GestureState,
    event: GestureEvent,
    pixels_per_day: float,
    activation_threshold: float = ACTIVATION_THRESHOLD_PX,
) -> Transition:
    """
    Computes the transition for one event.

    Args:
        state: The current gesture state.
        event: The incoming input event.
        pixels_per_day: Horizontal scale used for pixel -> day conversion.
        activation_threshold: Minimum absolute displacement in pixels
            before a candidate gesture becomes a drag.

    Returns:
        Transition: Next state, optional commit and requested effects.
    """
    if isinstance(event, PointerDown):
        return _on_pointer_down(state, event)
    if isinstance(event, PointerMove):
        return _on_pointer_move(state, event, pixels_per_day, activation_threshold)
    if isinstance(event, PointerUp):
        return _on_pointer_up(state, event, pixels_per_day)
    if isinstance(event, Click):
        return _on_click(state)
    if isinstance(event, (DoubleClick, BeginEdit)):
        return _on_begin_edit(state, event.name)
    if isinstance(event, CommitEdit):
        return _on_commit_edit(state, event)
    if isinstance(event, CancelEdit):
        if isinstance(state, Editing):
            return Transition(Idle())
        return Transition(state)
    if isinstance(event, CancelGesture):
        if isinstance(state, (Candidate, Activated)):
            return Transition(Idle(), release_capture=True, cancel_select=True)
        return Transition(state, cancel_select=True)

    raise TypeError(f"Unsupported gesture event: {event!r}")
