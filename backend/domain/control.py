"""
SessionControl - the state shared between the input listener and the game loop.

Only the pending direction and the cancellation token cross threads; the
rest of GameState is owned by the driver thread.
"""

import threading
from typing import Optional

from .constants import INITIAL_DIRECTION, OPPOSITE, VALID_MOVES


class SessionControl:
    """
    Guarded pending direction plus a cooperative cancellation token.

    Attributes:
        reason: why the session ended ('collision', 'quit', 'interrupt', 'error', ...)
        error: the exception that failed the session, if any
    """

    def __init__(self, initial_direction: str = INITIAL_DIRECTION):
        if initial_direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {initial_direction}")
        self._lock = threading.Lock()
        self._direction = initial_direction
        self._cancelled = threading.Event()
        self.reason: Optional[str] = None
        self.error: Optional[BaseException] = None

    @property
    def direction(self) -> str:
        with self._lock:
            return self._direction

    def request_direction(self, direction: str) -> bool:
        """
        Store a new pending direction unless it is the exact reverse of the
        one currently pending. Returns True if the direction was accepted.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Invalid direction: {direction}")
        with self._lock:
            if OPPOSITE[direction] == self._direction:
                return False
            self._direction = direction
            return True

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self, reason: str) -> None:
        """Signal termination. Only the first reason is kept."""
        with self._lock:
            if self.reason is None:
                self.reason = reason
        self._cancelled.set()

    def fail(self, error: BaseException) -> None:
        with self._lock:
            if self.error is None:
                self.error = error
        self.cancel("error")

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or timeout; returns True if cancelled."""
        return self._cancelled.wait(timeout)

    def __repr__(self):
        return (
            f"<SessionControl direction={self.direction}, "
            f"cancelled={self.cancelled}, reason={self.reason}>"
        )
