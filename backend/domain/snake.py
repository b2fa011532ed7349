"""
Snake entity for the game engine.
"""

from collections import deque
from typing import Iterator, List, Tuple

from .constants import INITIAL_SNAKE_LENGTH
from .grid import Position


class Snake:
    """
    Represents the snake on the board.

    Attributes:
        positions: deque of Position from head at index 0 to tail at the end
    """

    def __init__(self, positions: List[Tuple[int, int]]):
        if not positions:
            raise ValueError("A snake needs at least one segment.")
        self.positions = deque(Position(*p) for p in positions)

    @classmethod
    def initial(cls, width: int, height: int) -> "Snake":
        """
        Build the starting snake: vertically centred, head on top, so that
        the first move upwards is safe.
        """
        cx, cy = width // 2, height // 2
        return cls([(cx, cy - 1 + i) for i in range(INITIAL_SNAKE_LENGTH)])

    @property
    def head(self) -> Position:
        """Return the head position (first element)."""
        return self.positions[0]

    @property
    def tail(self) -> Position:
        """Return the tail position (last element)."""
        return self.positions[-1]

    def occupies(self, pos) -> bool:
        return pos in self.positions

    def prepend(self, pos) -> None:
        self.positions.appendleft(Position(*pos))

    def drop_tail(self) -> None:
        # The head is never dropped
        if len(self.positions) > 1:
            self.positions.pop()

    def __len__(self) -> int:
        return len(self.positions)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.positions)

    def __repr__(self):
        return f"<Snake head={tuple(self.head)}, length={len(self)}>"
