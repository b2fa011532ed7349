"""
Grid entity - the fixed-size board food is placed on.
"""

from typing import List, NamedTuple

from .constants import EMPTY, FOOD


class Position(NamedTuple):
    x: int
    y: int


class OutOfBoundsError(IndexError):
    """Raised when a position lies outside the board."""

    def __init__(self, pos, width: int, height: int):
        super().__init__(f"Position {tuple(pos)} is outside the {width}x{height} board.")
        self.pos = pos


class Grid:
    """
    A width x height matrix of cell states (EMPTY or FOOD).

    Snake occupancy is not stored here; see GameState.lookup().
    """

    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}.")
        self.width = width
        self.height = height
        # Indexed as cells[x][y]
        self.cells: List[List[str]] = [[EMPTY] * height for _ in range(width)]

    def in_bounds(self, pos) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, pos) -> str:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(pos, self.width, self.height)
        x, y = pos
        return self.cells[x][y]

    def set_food(self, pos) -> None:
        x, y = pos
        self.cells[x][y] = FOOD

    def clear(self, pos) -> None:
        x, y = pos
        self.cells[x][y] = EMPTY

    def food_positions(self) -> List[Position]:
        return [
            Position(x, y)
            for x in range(self.width)
            for y in range(self.height)
            if self.cells[x][y] == FOOD
        ]

    def __repr__(self):
        return f"<Grid {self.width}x{self.height}>"
