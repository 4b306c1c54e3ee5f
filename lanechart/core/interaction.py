"""
Interaction Controller Module.

Per-item controller that drives the pure gesture state machine and owns
its side effects: the pointer capture subscription, the click debounce
timer and the deferred editor focus. Changes leave the controller only
through the ``on_update`` and ``on_select`` callbacks.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple

from lanechart.core.date_math import DateRange, bar_width, to_iso
from lanechart.core.gesture import (
    ACTIVATION_THRESHOLD_PX,
    Activated,
    BeginEdit,
    CancelEdit,
    CancelGesture,
    Candidate,
    Click,
    CommitEdit,
    DoubleClick,
    Editing,
    GestureEvent,
    GestureKind,
    GestureState,
    Idle,
    PointerDown,
    PointerMove,
    PointerPosition,
    PointerUp,
    Transition,
    draft_of,
    reduce,
)
from lanechart.core.pointer_capture import CaptureToken, PointerCapture
from lanechart.core.protocols import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

CLICK_DELAY_MS = 250


class ClickDebouncer:
    """
    Two-state timer (pending selection / none) separating single clicks
    from double clicks.
    """

    def __init__(self, scheduler: Scheduler, delay_ms: int = CLICK_DELAY_MS):
        self._scheduler = scheduler
        self.delay_ms = delay_ms
        self._handle: Optional[TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def schedule(self, callback: Callable[[], None]) -> None:
        """Arms the timer, replacing any selection already pending."""
        self.cancel()

        def fire():
            self._handle = None
            callback()

        self._handle = self._scheduler.call_later(self.delay_ms, fire)

    def cancel(self) -> None:
        """Disarms the timer if armed."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


class InteractionController:
    """
    Gesture and edit controller bound to one timeline item.

    The controller reads the item's committed range and never mutates the
    item; it reports proposed partial updates through ``on_update``.
    Missing callbacks are treated as no-op sinks.
    """

    def __init__(
        self,
        item,
        date_to_x: Callable,
        pixels_per_day: float,
        scheduler: Scheduler,
        pointer_capture: PointerCapture,
        on_update: Optional[Callable[[Dict[str, Any]], None]] = None,
        on_select: Optional[Callable[[Any], None]] = None,
        click_delay_ms: int = CLICK_DELAY_MS,
        activation_threshold: float = ACTIVATION_THRESHOLD_PX,
    ):
        """
        Initializes the InteractionController.

        Args:
            item: The bound item (id, start, end, name).
            date_to_x: Maps a date to its horizontal pixel offset.
            pixels_per_day: Horizontal scale.
            scheduler: Source of deferred callbacks.
            pointer_capture: Shared registry of global pointer listeners.
            on_update: Receives ``{"id": ..., **changed_fields}``.
            on_select: Receives the item after a confirmed single click.
            click_delay_ms: Single/double click debounce window.
            activation_threshold: Pixels of travel before a drag starts.
        """
        self.item = item
        self.date_to_x = date_to_x
        self.pixels_per_day = pixels_per_day
        self.on_update = on_update
        self.on_select = on_select
        self.activation_threshold = activation_threshold

        # Rendering hooks set by the owning view item
        self.on_changed: Optional[Callable[[], None]] = None
        self.on_focus_editor: Optional[Callable[[], None]] = None

        self._scheduler = scheduler
        self._capture = pointer_capture
        self._token: Optional[CaptureToken] = None
        self._click = ClickDebouncer(scheduler, click_delay_ms)
        self._focus_handle: Optional[TimerHandle] = None
        self._state: GestureState = Idle()

    # State inspection

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def is_editing(self) -> bool:
        return isinstance(self._state, Editing)

    @property
    def is_gesture_live(self) -> bool:
        return isinstance(self._state, (Candidate, Activated))

    @property
    def selection_pending(self) -> bool:
        return self._click.pending

    @property
    def draft(self) -> Optional[DateRange]:
        return draft_of(self._state)

    @property
    def display_range(self) -> DateRange:
        """The draft while dragging, otherwise the committed range."""
        draft = self.draft
        if draft is not None:
            return draft
        return DateRange(self.item.start, self.item.end)

    def geometry(self) -> Tuple[float, float]:
        """
        Horizontal placement of the bar for the displayed range.

        Returns:
            Tuple[float, float]: (left, width) in pixels.
        """
        rng = self.display_range
        left = self.date_to_x(rng.start)
        end_x = self.date_to_x(rng.end)
        return left, bar_width(left, end_x, self.pixels_per_day)

    def tooltip(self) -> str:
        rng = self.display_range
        return f"{self.item.name} ({to_iso(rng.start)} → {to_iso(rng.end)})"

    # Inputs from the shell

    def set_item(self, item) -> None:
        """Rebinds to the latest committed item (after a shell re-render)."""
        self.item = item
        self._notify_changed()

    def set_pixels_per_day(self, pixels_per_day: float, date_to_x: Callable = None):
        self.pixels_per_day = pixels_per_day
        if date_to_x is not None:
            self.date_to_x = date_to_x
        self._notify_changed()

    # Pointer and keyboard inputs

    def pointer_down(self, kind: GestureKind, position: PointerPosition) -> bool:
        """
        Starts a candidate gesture on the body or a resize handle.

        Returns:
            bool: False when ignored (e.g. while editing).
        """
        if self.is_editing:
            return False
        self.dispatch(
            PointerDown(
                kind=GestureKind(kind),
                position=position,
                start=self.item.start,
                end=self.item.end,
            )
        )
        return True

    def click(self) -> None:
        """A press/release pair on the item that was not a drag."""
        self.dispatch(Click())

    def double_click(self) -> None:
        self.dispatch(DoubleClick(name=self.item.name))

    def begin_edit(self) -> None:
        """Explicit edit trigger."""
        self.dispatch(BeginEdit(name=self.item.name))

    def commit_edit(self, text: str) -> None:
        """Enter pressed or editor lost focus."""
        self.dispatch(CommitEdit(text=text, current_name=self.item.name))

    def cancel_edit(self) -> None:
        """Escape pressed."""
        self.dispatch(CancelEdit())

    def teardown(self) -> None:
        """
        Drops any live gesture, listeners and timers without committing.
        """
        self.dispatch(CancelGesture())
        self._release_capture()
        self._click.cancel()
        self._cancel_focus()
        self._state = Idle()
        self.on_changed = None
        self.on_focus_editor = None

    # Core

    def dispatch(self, event: GestureEvent) -> Transition:
        """
        Feeds one event through the state machine and applies its effects.

        Returns:
            Transition: The computed transition (useful for tests/logging).
        """
        previous = self._state
        transition = reduce(
            previous, event, self.pixels_per_day, self.activation_threshold
        )
        self._state = transition.state

        if transition.cancel_select:
            self._click.cancel()
        if transition.release_capture:
            self._release_capture()
        if transition.acquire_capture:
            self._acquire_capture()
        if transition.schedule_select:
            self._click.schedule(self._fire_select)
        if transition.focus_editor:
            self._schedule_focus()
        if not isinstance(transition.state, Editing):
            self._cancel_focus()

        if transition.changes:
            self._emit_update(transition.changes)

        if transition.state != previous:
            self._notify_changed()
        return transition

    def _handle_move(self, position: PointerPosition) -> None:
        self.dispatch(PointerMove(position))

    def _handle_up(self, position: PointerPosition) -> None:
        self.dispatch(PointerUp(position))

    def _handle_lost(self) -> None:
        self._token = None
        self.dispatch(CancelGesture())

    def _acquire_capture(self) -> None:
        # Drop our own previous subscription first so the hub does not
        # report it as lost to us.
        self._release_capture()
        self._token = self._capture.acquire(
            self._handle_move, self._handle_up, self._handle_lost
        )

    def _release_capture(self) -> None:
        if self._token is not None:
            self._token.release()
            self._token = None

    def _schedule_focus(self) -> None:
        self._cancel_focus()

        def focus():
            self._focus_handle = None
            if self.is_editing and self.on_focus_editor:
                self.on_focus_editor()

        self._focus_handle = self._scheduler.call_later(0, focus)

    def _cancel_focus(self) -> None:
        if self._focus_handle is not None:
            self._focus_handle.cancel()
            self._focus_handle = None

    def _fire_select(self) -> None:
        if self.is_editing:
            return
        logger.debug(f"Item {self.item.id} selected")
        if self.on_select:
            self.on_select(self.item)

    def _emit_update(self, changes: Dict[str, Any]) -> None:
        partial = {"id": self.item.id, **changes}
        logger.debug(f"Committing update {partial}")
        if self.on_update:
            self.on_update(partial)

    def _notify_changed(self) -> None:
        if self.on_changed:
            self.on_changed()
