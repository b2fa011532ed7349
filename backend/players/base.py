"""
Base input source interface for the game engine.
"""

from dataclasses import dataclass
from typing import Optional

from domain.constants import ARROW, QUIT, ERROR, INTERRUPT


@dataclass(frozen=True)
class Event:
    """
    A single input event.

    Attributes:
        kind: one of ARROW, QUIT, ERROR, INTERRUPT
        direction: the requested direction for ARROW events
        error: the underlying exception for ERROR events
    """
    kind: str
    direction: Optional[str] = None
    error: Optional[BaseException] = None

    @classmethod
    def arrow(cls, direction: str) -> "Event":
        return cls(ARROW, direction=direction)

    @classmethod
    def quit(cls) -> "Event":
        return cls(QUIT)

    @classmethod
    def interrupt(cls) -> "Event":
        return cls(INTERRUPT)

    @classmethod
    def failure(cls, error: BaseException) -> "Event":
        return cls(ERROR, error=error)


class InputSource:
    """
    Base class/interface for whatever steers the snake.

    Each source blocks until the next event and returns it.
    """

    def poll_event(self) -> Optional[Event]:
        """
        Wait for the next input event.

        Returns:
            The next Event, or None if nothing relevant arrived before the
            source's poll timeout.
        """
        raise NotImplementedError
