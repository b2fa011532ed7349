"""
Game constants for termsnake.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Screen coordinates: (0, 0) is the top left cell, y grows downwards
DIRECTION_OFFSETS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

OPPOSITE = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# Cell states. SNAKE is never stored on the grid, it is derived from the snake.
EMPTY = "EMPTY"
FOOD = "FOOD"
SNAKE = "SNAKE"

# Input event kinds
ARROW = "ARROW"
QUIT = "QUIT"
ERROR = "ERROR"
INTERRUPT = "INTERRUPT"

# Game settings
INITIAL_DIRECTION = UP
INITIAL_SNAKE_LENGTH = 3
MIN_BOARD_SIZE = 5
DEFAULT_TICK_MS = 150
INPUT_POLL_MS = 20
