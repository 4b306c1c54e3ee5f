"""
Qt Scheduler.

QTimer-backed implementation of the core Scheduler protocol.
"""

from typing import Callable, Optional, Set

from PySide6.QtCore import QObject, QTimer


class QtTimerHandle:
    """Wraps a single-shot QTimer so it can be cancelled."""

    def __init__(self, timer: QTimer, on_done: Optional[Callable] = None):
        self._timer = timer
        self._on_done = on_done

    @property
    def active(self) -> bool:
        return self._timer is not None

    def cancel(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._release()

    def _finished(self) -> None:
        if self._timer is not None:
            self._release()

    def _release(self) -> None:
        self._timer.deleteLater()
        self._timer = None
        if self._on_done is not None:
            self._on_done(self)
            self._on_done = None


class QtScheduler:
    """
    Defers callbacks on the Qt event loop.

    A delay of 0 runs the callback on the next event loop turn. Pending
    handles are kept alive here until they fire or are cancelled, so
    callers may drop the returned handle.
    """

    def __init__(self, parent: QObject = None):
        """
        Initializes the QtScheduler.

        Args:
            parent (QObject, optional): Owner of the created timers.
        """
        self._parent = parent
        self._pending: Set[QtTimerHandle] = set()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer, self._pending.discard)
        self._pending.add(handle)

        def on_timeout():
            handle._finished()
            callback()

        timer.timeout.connect(on_timeout)
        timer.start(max(0, int(delay_ms)))
        return handle
