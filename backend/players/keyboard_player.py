"""
Keyboard player - reads arrow keys from a curses window.
"""

import curses
import threading
from typing import Optional

from domain.constants import UP, DOWN, LEFT, RIGHT, INPUT_POLL_MS
from .base import Event, InputSource

KEY_DIRECTIONS = {
    curses.KEY_UP: UP,
    curses.KEY_DOWN: DOWN,
    curses.KEY_LEFT: LEFT,
    curses.KEY_RIGHT: RIGHT,
}

# Ctrl-C, Ctrl-X, Ctrl-Z arrive as plain keys in raw mode
CTRL_C, CTRL_X, CTRL_Z = 3, 24, 26
QUIT_KEYS = {CTRL_C, CTRL_X, CTRL_Z, ord('q'), ord('Q')}


class KeyboardPlayer(InputSource):
    """
    Translates curses key codes into input events.

    The window is shared with the renderer, so every curses call goes
    through terminal_lock.
    """

    def __init__(self, window, terminal_lock: Optional[threading.Lock] = None,
                 poll_ms: int = INPUT_POLL_MS):
        self.window = window
        self.terminal_lock = terminal_lock or threading.Lock()
        with self.terminal_lock:
            self.window.keypad(True)
            self.window.timeout(poll_ms)

    def poll_event(self) -> Optional[Event]:
        try:
            with self.terminal_lock:
                key = self.window.getch()
        except curses.error as exc:
            return Event.failure(exc)

        if key == -1:
            return None
        if key in KEY_DIRECTIONS:
            return Event.arrow(KEY_DIRECTIONS[key])
        if key in QUIT_KEYS:
            return Event.quit()
        return None
