"""
Domain entities for the termsnake game engine.

This module contains the core game entities that are independent of
terminal concerns (rendering, raw keyboard input).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, EMPTY, FOOD, SNAKE
from .grid import Grid, OutOfBoundsError, Position
from .snake import Snake
from .control import SessionControl
from .game_state import GameState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES',
    'EMPTY', 'FOOD', 'SNAKE',
    'Grid', 'OutOfBoundsError', 'Position',
    'Snake',
    'SessionControl',
    'GameState',
]
