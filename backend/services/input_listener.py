"""
Input listener - turns input events into pending-direction updates.

Runs on its own thread next to the game loop. It only ever touches the
session's SessionControl.
"""

import logging
import threading
from typing import Optional

from domain.constants import ARROW, QUIT, ERROR, INTERRUPT
from domain.control import SessionControl
from players.base import Event, InputSource

logger = logging.getLogger(__name__)


class InputListener:
    """
    Polls an InputSource until the session is cancelled.

    Attributes:
        control: the session's shared direction/termination holder
        source: where events come from
    """

    def __init__(self, control: SessionControl, source: InputSource):
        self.control = control
        self.source = source
        self._thread: Optional[threading.Thread] = None

    def handle_event(self, event: Optional[Event]) -> bool:
        """
        Apply a single event. Returns False once the listener should stop.
        """
        if event is None:
            return True

        if event.kind == ARROW:
            if not self.control.request_direction(event.direction):
                logger.debug("Ignoring reversal to %s", event.direction)
            return True

        if event.kind == QUIT:
            logger.info("Quit requested by player")
            self.control.cancel("quit")
            return False

        if event.kind == INTERRUPT:
            logger.info("Input interrupted")
            self.control.cancel("interrupt")
            return False

        if event.kind == ERROR:
            logger.error("Input stream failed: %s", event.error)
            self.control.fail(event.error)
            return False

        logger.debug("Ignoring unknown event kind %s", event.kind)
        return True

    def run(self) -> None:
        try:
            while not self.control.cancelled:
                if not self.handle_event(self.source.poll_event()):
                    return
        except Exception as exc:
            logger.exception("Input listener crashed")
            self.control.fail(exc)
        finally:
            # Whatever stops the listener ends the session
            self.control.cancel("input closed")

    def start(self) -> threading.Thread:
        self._thread = threading.Thread(target=self.run, name="input-listener", daemon=True)
        self._thread.start()
        return self._thread

    def join(self, timeout: Optional[float] = None) -> None:
        if self._thread is not None:
            self._thread.join(timeout)
