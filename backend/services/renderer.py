"""
Terminal rendering for termsnake.

Draws the board with curses, two terminal columns per cell so the cells
look square, followed by a status block:
- Round counter
- Score
- Snake length and head position
"""

import curses
import logging
import threading
from typing import Optional

from domain.constants import EMPTY, FOOD, SNAKE
from domain.game_state import GameState

logger = logging.getLogger(__name__)

CELL_WIDTH = 2  # Terminal columns per board cell
STATUS_LINES = 3


class ColorScheme:
    """Colour pair ids and their (foreground, background) colours"""

    EMPTY = 1
    FOOD = 2
    SNAKE_HEAD = 3
    SNAKE_BODY = 4

    PAIRS = {
        EMPTY: (curses.COLOR_WHITE, curses.COLOR_BLACK),
        FOOD: (curses.COLOR_WHITE, curses.COLOR_RED),
        SNAKE_HEAD: (curses.COLOR_BLACK, curses.COLOR_YELLOW),
        SNAKE_BODY: (curses.COLOR_BLACK, curses.COLOR_GREEN),
    }


def format_status(state: GameState) -> str:
    """Status block shown under the board"""
    head = state.snake.head
    return (
        f"Round: {state.round_number}\n"
        f"Score: {state.score}\n"
        f"Snake: length {state.desired_length}, head x {head.x}, head y {head.y}  "
    )


class Renderer:
    """
    Base class/interface for drawing the game state.
    """

    def draw(self, state: GameState) -> None:
        raise NotImplementedError


class CursesRenderer(Renderer):
    """Draw the game into a curses window"""

    def __init__(self, window, terminal_lock: Optional[threading.Lock] = None):
        self.window = window
        self.terminal_lock = terminal_lock or threading.Lock()
        self.use_colors = False

        with self.terminal_lock:
            try:
                curses.curs_set(0)  # Hide cursor
            except curses.error:
                logger.debug("Terminal does not support hiding the cursor")
            if curses.has_colors():
                curses.start_color()
                for pair_id, (fg, bg) in ColorScheme.PAIRS.items():
                    curses.init_pair(pair_id, fg, bg)
                self.use_colors = True

    def _attr(self, pair_id: int, extra: int = 0) -> int:
        if not self.use_colors:
            return extra
        return curses.color_pair(pair_id) | extra

    def _cell_style(self, state: GameState, x: int, y: int):
        cell, _ = state.lookup((x, y))
        if cell == SNAKE:
            if (x, y) == state.snake.head:
                return "@@", self._attr(ColorScheme.SNAKE_HEAD, curses.A_BOLD)
            return "**", self._attr(ColorScheme.SNAKE_BODY)
        if cell == FOOD:
            return "()", self._attr(ColorScheme.FOOD)
        if cell == EMPTY:
            return "  ", self._attr(ColorScheme.EMPTY)
        raise ValueError(f"Unknown cell state at {(x, y)}: {cell}")

    def draw(self, state: GameState) -> None:
        with self.terminal_lock:
            for y in range(state.height):
                for x in range(state.width):
                    glyph, attr = self._cell_style(state, x, y)
                    self.window.addstr(y, x * CELL_WIDTH, glyph, attr)

            for offset, line in enumerate(format_status(state).split("\n")):
                self.window.addstr(state.height + offset, 0, line)

            self.window.refresh()
