"""
Input sources for termsnake.

This module contains the input abstraction and the implementations
that steer the snake.
"""

from .base import Event, InputSource
from .keyboard_player import KeyboardPlayer

__all__ = [
    'Event',
    'InputSource',
    'KeyboardPlayer',
]
