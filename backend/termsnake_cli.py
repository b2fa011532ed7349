#!/usr/bin/env python3
"""
termsnake - the classic snake game on a wrap-around board, in the terminal.

Usage:
    python termsnake_cli.py
    python termsnake_cli.py --width 20 --height 15

Controls:
    Arrow keys steer, q / Ctrl-C / Ctrl-X / Ctrl-Z quit.

Exit status:
    0 game over, 1 error, 2 board too large for the terminal, 3 board too small
"""

import argparse
import curses
import logging
import random
import shutil
import sys
import threading
from typing import Optional, Sequence, Tuple

from dotenv import load_dotenv

from termsnake_config import Settings, configure_logging, load_settings, release_logging
from domain.constants import MIN_BOARD_SIZE
from domain.game_state import GameState
from players.keyboard_player import KeyboardPlayer
from services.game_loop import GameLoop
from services.input_listener import InputListener
from services.renderer import CELL_WIDTH, STATUS_LINES, CursesRenderer

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_TOO_LARGE = 2
EXIT_TOO_SMALL = 3


class BoardSizeError(ValueError):
    exit_code = EXIT_FAILURE


class BoardTooSmallError(BoardSizeError):
    exit_code = EXIT_TOO_SMALL


class BoardTooLargeError(BoardSizeError):
    exit_code = EXIT_TOO_LARGE


def board_capacity(terminal_size) -> Tuple[int, int]:
    """Largest board (width, height) that fits the terminal with the status block."""
    columns, lines = terminal_size
    return columns // CELL_WIDTH, lines - STATUS_LINES


def validate_board_size(width: int, height: int, terminal_size) -> None:
    if width < MIN_BOARD_SIZE or height < MIN_BOARD_SIZE:
        raise BoardTooSmallError(
            f"The minimum dimensions are {MIN_BOARD_SIZE}x{MIN_BOARD_SIZE}!"
        )

    max_width, max_height = board_capacity(terminal_size)
    if width > max_width or height > max_height:
        raise BoardTooLargeError(
            "Error: the desired dimensions are too large for your terminal!\n"
            f"Your terminal size: {max_width}x{max_height}\n"
            f"Your desired size: {width}x{height}"
        )


def prompt_dimension(label: str) -> int:
    raw = input(f"Please enter the desired {label} of the board: ")
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"Invalid {label}: {raw.strip()!r}") from None


def read_board_size(args: argparse.Namespace) -> Tuple[int, int]:
    """Take the board size from the command line, prompting for anything missing."""
    if args.width is None or args.height is None:
        print("\nTERMSNAKE")
    width = args.width if args.width is not None else prompt_dimension("width")
    height = args.height if args.height is not None else prompt_dimension("height")
    return width, height


def format_summary(state: GameState) -> str:
    head = state.snake.head
    return (
        f"Round: {state.round_number}\tScore: {state.score}\t"
        f"Snake: length {len(state.snake)}, head x {head.x}, head y {head.y}"
    )


def play(stdscr, state: GameState, tick_ms: int) -> GameState:
    """Run one session inside curses.wrapper()."""
    # Raw mode so Ctrl-C/Ctrl-Z/Ctrl-X reach the input listener as keys
    curses.raw()
    terminal_lock = threading.Lock()

    renderer = CursesRenderer(stdscr, terminal_lock)
    listener = InputListener(state.control, KeyboardPlayer(stdscr, terminal_lock))
    listener.start()
    try:
        GameLoop(state, renderer, tick_ms).run()
    except KeyboardInterrupt:
        state.control.cancel("interrupt")
    finally:
        state.control.cancel("shutdown")
        listener.join(timeout=1.0)
    return state


def run(args: argparse.Namespace, settings: Settings) -> int:
    """Validate the board, play one session and report the result."""
    try:
        width, height = read_board_size(args)
        validate_board_size(width, height, shutil.get_terminal_size())
    except BoardSizeError as exc:
        logger.error("Rejected board size: %s", exc)
        print(exc)
        return exc.exit_code
    except (ValueError, EOFError) as exc:
        logger.error("Could not read board size: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    state = GameState(width, height, rng=random.Random(settings.seed))

    try:
        curses.wrapper(play, state, settings.tick_ms)
    except KeyboardInterrupt:
        state.control.cancel("interrupt")
    except curses.error as exc:
        logger.exception("Terminal error")
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE
    except Exception as exc:
        logger.exception("Game session crashed")
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    print("Game over!")
    print(format_summary(state))

    if state.control.error is not None:
        print(f"Error: {state.control.error}", file=sys.stderr)
        return EXIT_FAILURE
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Play snake in the terminal on a board whose edges wrap around.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument("--width", type=int, required=False, default=None,
                        help=f"Board width in cells (at least {MIN_BOARD_SIZE})")
    parser.add_argument("--height", type=int, required=False, default=None,
                        help=f"Board height in cells (at least {MIN_BOARD_SIZE})")
    args = parser.parse_args(argv)

    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_FAILURE

    held = configure_logging(settings)
    try:
        return run(args, settings)
    finally:
        release_logging(held)


if __name__ == "__main__":
    sys.exit(main())
