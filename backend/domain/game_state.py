"""
GameState entity - the board, the snake and the per-round transition.
"""

import logging
import random
from typing import Optional, Tuple

from .constants import DIRECTION_OFFSETS, FOOD, SNAKE
from .control import SessionControl
from .grid import Grid, OutOfBoundsError, Position
from .snake import Snake

logger = logging.getLogger(__name__)


class GameState:
    """
    The live state of one game session.

    Attributes:
        grid: the board holding EMPTY/FOOD cells
        snake: the snake, head first
        round_number: ticks played so far
        score: food eaten
        desired_length: the length the snake is reconciled to every round
        control: pending direction and termination flag shared with the input listener
        rng: random source used for food placement
    """

    def __init__(
        self,
        width: int,
        height: int,
        snake: Optional[Snake] = None,
        control: Optional[SessionControl] = None,
        rng: Optional[random.Random] = None,
    ):
        self.grid = Grid(width, height)
        self.snake = snake if snake is not None else Snake.initial(width, height)
        self.control = control or SessionControl()
        self.rng = rng or random.Random()
        self.round_number = 0
        self.score = 0
        self.desired_length = len(self.snake)

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def pending_direction(self) -> str:
        return self.control.direction

    @property
    def game_over(self) -> bool:
        return self.control.cancelled

    def lookup(self, pos) -> Tuple[Optional[str], bool]:
        """
        Return (cell, exists) for a position. The snake overlays the grid,
        so snake occupancy wins over the stored cell state.
        """
        try:
            cell = self.grid.get(pos)
        except OutOfBoundsError:
            return None, False
        if self.snake.occupies(pos):
            return SNAKE, True
        return cell, True

    def next_head(self, direction: str) -> Position:
        """Head position after one step in direction, wrapped around the edges."""
        dx, dy = DIRECTION_OFFSETS[direction]
        x = self.snake.head.x + dx
        y = self.snake.head.y + dy

        if x == -1:
            x = self.width - 1
        elif x == self.width:
            x = 0
        if y == -1:
            y = self.height - 1
        elif y == self.height:
            y = 0

        return Position(x, y)

    def run_round(self) -> bool:
        """
        Execute one round:
          1) Advance the round counter
          2) Compute the wrapped head position from the pending direction
          3) End the session if the snake would bite itself
          4) Move the head, eat food (score, grow, respawn)
          5) Drop the tail unless the snake is still growing

        Returns True while the session is alive.
        """
        if self.game_over:
            return False

        self.round_number += 1
        new_head = self.next_head(self.control.direction)

        cell, exists = self.lookup(new_head)
        if not exists:
            logger.warning("Round %s: head %s left the board, skipping move",
                           self.round_number, tuple(new_head))
            return True

        if cell == SNAKE:
            logger.info("Round %s: snake bit itself at %s", self.round_number, tuple(new_head))
            self.control.cancel("collision")
            return False

        self.snake.prepend(new_head)

        if self.grid.get(new_head) == FOOD:
            self.grid.clear(new_head)
            self.score += 1
            self.desired_length += 1
            self.spawn_food()

        if len(self.snake) > self.desired_length:
            self.snake.drop_tail()

        return True

    def spawn_food(self) -> Position:
        """
        Place food on a random cell not occupied by the snake.

        Retries until a free cell is drawn; on a nearly full board this can
        take a long time.
        """
        while True:
            pos = Position(
                self.rng.randrange(self.width),
                self.rng.randrange(self.height),
            )
            cell, exists = self.lookup(pos)
            if exists and cell != SNAKE:
                self.grid.set_food(pos)
                logger.debug("Spawned food at %s", tuple(pos))
                return pos

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Rows run from y=0 at the top with x-axis labels at the bottom
        """
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        for fx, fy in self.grid.food_positions():
            board[fy][fx] = 'F'

        for pos_idx, (x, y) in enumerate(self.snake):
            board[y][x] = 'H' if pos_idx == 0 else 'S'

        result = []
        for y in range(self.height):
            result.append(f"{y:2d} {' '.join(board[y])}")

        # x labels keep only the last digit so columns stay aligned
        result.append("   " + " ".join(str(i % 10) for i in range(self.width)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<GameState round={self.round_number}, score={self.score}, "
            f"length={len(self.snake)}/{self.desired_length}, head={tuple(self.snake.head)}>"
        )
