"""
Protocol Interfaces for Loose Coupling.

This module defines Protocol interfaces (PEP 544) so that the interaction
logic in ``lanechart.core`` can run without a Qt event loop. The GUI layer
supplies Qt-backed implementations; tests supply manual ones.
"""

from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class TimerHandle(Protocol):
    """A scheduled callback that can be cancelled before it fires."""

    def cancel(self) -> None:
        """Prevents the callback from running. Safe to call repeatedly."""
        ...


@runtime_checkable
class Scheduler(Protocol):
    """
    Protocol for deferring callbacks on the (single) event loop.

    Used for the click/double-click debounce and for the deferred focus
    grab of the inline editor.
    """

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """
        Runs callback once after delay_ms milliseconds.

        Args:
            delay_ms: Delay in milliseconds; 0 means "next turn".
            callback: Zero-argument callable.

        Returns:
            TimerHandle: Handle used to cancel the pending call.
        """
        ...
