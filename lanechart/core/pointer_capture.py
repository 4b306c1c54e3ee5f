"""
Pointer Capture Module.

A registry standing in for window-level pointer listeners. The view
publishes every pointer move and release; at most one gesture session is
subscribed at a time.
"""

import logging
from typing import Callable, Optional

from lanechart.core.gesture import PointerPosition

logger = logging.getLogger(__name__)

PointerCallback = Callable[[PointerPosition], None]


class CaptureToken:
    """
    Subscription held by one gesture session.

    Released exactly once, either by its owner or when a newer capture
    takes over (in which case ``on_lost`` runs).
    """

    def __init__(
        self,
        hub: "PointerCapture",
        on_move: PointerCallback,
        on_up: PointerCallback,
        on_lost: Optional[Callable[[], None]] = None,
    ):
        self._hub = hub
        self.on_move = on_move
        self.on_up = on_up
        self.on_lost = on_lost
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def release(self) -> None:
        """Unsubscribes from the hub. Idempotent."""
        if not self._active:
            return
        self._active = False
        self._hub._detach(self)


class PointerCapture:
    """
    Dispatches pointer move/release events to the single live capture.
    """

    def __init__(self):
        self._current: Optional[CaptureToken] = None

    @property
    def is_captured(self) -> bool:
        """True while a gesture session is listening."""
        return self._current is not None

    def acquire(
        self,
        on_move: PointerCallback,
        on_up: PointerCallback,
        on_lost: Optional[Callable[[], None]] = None,
    ) -> CaptureToken:
        """
        Subscribes a gesture session to pointer moves and releases.

        Any capture still live is released first and told via its
        ``on_lost`` callback.

        Args:
            on_move: Called with each published move.
            on_up: Called with the published release.
            on_lost: Called if a later acquire supersedes this one.

        Returns:
            CaptureToken: The subscription; call release() when done.
        """
        previous = self._current
        if previous is not None:
            logger.debug("Pointer capture superseded by a new session")
            previous.release()
            if previous.on_lost:
                previous.on_lost()

        token = CaptureToken(self, on_move, on_up, on_lost)
        self._current = token
        return token

    def _detach(self, token: CaptureToken) -> None:
        if self._current is token:
            self._current = None

    def publish_move(self, position: PointerPosition) -> bool:
        """
        Forwards a pointer move to the live capture.

        Returns:
            bool: True if a session consumed the event.
        """
        token = self._current
        if token is None:
            return False
        token.on_move(position)
        return True

    def publish_up(self, position: PointerPosition) -> bool:
        """
        Forwards a pointer release to the live capture.

        Returns:
            bool: True if a session consumed the event.
        """
        token = self._current
        if token is None:
            return False
        token.on_up(position)
        return True
