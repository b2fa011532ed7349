"""
Tests for termsnake_cli.py - board size validation, the CLI flow and session wiring.

curses.wrapper is replaced so these tests never touch the terminal.
"""

import curses
import logging
import os
import sys
from unittest.mock import MagicMock, patch

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import termsnake_cli as cli_module  # noqa: E402
from termsnake_config import Settings, configure_logging, load_settings, release_logging  # noqa: E402
from domain import GameState, SessionControl  # noqa: E402
from termsnake_cli import (  # noqa: E402
    BoardTooLargeError,
    BoardTooSmallError,
    board_capacity,
    format_summary,
    validate_board_size,
)

TERMINAL = os.terminal_size((80, 24))


@pytest.fixture
def cli(monkeypatch):
    """Isolate main() from .env files, the real terminal and SNAKE_* variables."""
    for name in ("SNAKE_TICK_MS", "SNAKE_SEED", "SNAKE_LOG_LEVEL", "SNAKE_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli_module, "load_dotenv", lambda: None)
    monkeypatch.setattr(cli_module.shutil, "get_terminal_size", lambda: TERMINAL)
    return monkeypatch


def finish_with(reason=None, error=None, rounds=0):
    """A curses.wrapper stand-in that ends the session immediately."""
    def fake_wrapper(func, state, tick_ms):
        state.round_number = rounds
        if error is not None:
            state.control.fail(error)
        else:
            state.control.cancel(reason or "quit")
    return fake_wrapper


class TestBoardSize:
    """Tests for board size validation."""

    def test_capacity_uses_two_columns_per_cell(self):
        """Cells are two columns wide and three lines are kept for the status."""
        assert board_capacity(TERMINAL) == (40, 21)

    def test_largest_fitting_board_is_accepted(self):
        """A board that exactly fills the terminal is fine."""
        validate_board_size(40, 21, TERMINAL)
        validate_board_size(5, 5, TERMINAL)

    @pytest.mark.parametrize("width,height", [(4, 10), (10, 4), (0, 0)])
    def test_too_small(self, width, height):
        """Boards under 5x5 exit with status 3."""
        with pytest.raises(BoardTooSmallError) as excinfo:
            validate_board_size(width, height, TERMINAL)
        assert excinfo.value.exit_code == 3
        assert "5x5" in str(excinfo.value)

    @pytest.mark.parametrize("width,height", [(41, 10), (10, 22)])
    def test_too_large(self, width, height):
        """Boards larger than the terminal exit with status 2."""
        with pytest.raises(BoardTooLargeError) as excinfo:
            validate_board_size(width, height, TERMINAL)
        assert excinfo.value.exit_code == 2
        assert "Your terminal size: 40x21" in str(excinfo.value)

    def test_too_small_is_checked_first(self):
        """A board that is both too narrow and too tall reports too small."""
        with pytest.raises(BoardTooSmallError):
            validate_board_size(3, 500, TERMINAL)


class TestMain:
    """Tests for the main() entry point."""

    def test_too_small_exit_code(self, cli, capsys):
        """Undersized boards exit with 3 before the game starts."""
        wrapper = MagicMock()
        cli.setattr(cli_module.curses, "wrapper", wrapper)

        assert cli_module.main(["--width", "3", "--height", "10"]) == 3
        assert "The minimum dimensions are 5x5!" in capsys.readouterr().out
        wrapper.assert_not_called()

    def test_too_large_exit_code(self, cli, capsys):
        """Oversized boards exit with 2."""
        cli.setattr(cli_module.curses, "wrapper", MagicMock())

        assert cli_module.main(["--width", "100", "--height", "10"]) == 2
        assert "too large for your terminal" in capsys.readouterr().out

    def test_prompts_for_missing_dimensions(self, cli, capsys):
        """Width and height are read from stdin when not given."""
        answers = iter(["12", "8"])
        prompts = []

        def fake_input(prompt):
            prompts.append(prompt)
            return next(answers)

        cli.setattr("builtins.input", fake_input)
        captured = {}

        def fake_wrapper(func, state, tick_ms):
            captured["size"] = (state.width, state.height)
            state.control.cancel("quit")

        cli.setattr(cli_module.curses, "wrapper", fake_wrapper)

        assert cli_module.main([]) == 0
        assert captured["size"] == (12, 8)
        assert prompts == [
            "Please enter the desired width of the board: ",
            "Please enter the desired height of the board: ",
        ]

    def test_non_integer_input_exits_with_error(self, cli, capsys):
        """Unparseable dimensions are fatal."""
        cli.setattr("builtins.input", lambda prompt: "wide")
        cli.setattr(cli_module.curses, "wrapper", MagicMock())

        assert cli_module.main([]) == 1
        assert "Invalid width" in capsys.readouterr().err

    def test_game_over_prints_summary(self, cli, capsys):
        """A finished session prints the final statistics and exits 0."""
        cli.setattr(cli_module.curses, "wrapper", finish_with("collision", rounds=17))

        assert cli_module.main(["--width", "10", "--height", "10"]) == 0

        out = capsys.readouterr().out
        assert "Game over!" in out
        assert "Round: 17\tScore: 0\tSnake: length 3, head x 5, head y 4" in out

    def test_input_error_exits_with_failure(self, cli, capsys):
        """A failed input stream still prints the summary but exits 1."""
        cli.setattr(cli_module.curses, "wrapper", finish_with(error=curses.error("read failed")))

        assert cli_module.main(["--width", "10", "--height", "10"]) == 1

        captured = capsys.readouterr()
        assert "Game over!" in captured.out
        assert "read failed" in captured.err

    def test_terminal_error_exits_with_failure(self, cli, capsys):
        """Terminal setup errors abort with status 1."""
        cli.setattr(cli_module.curses, "wrapper", MagicMock(side_effect=curses.error("setupterm failed")))

        assert cli_module.main(["--width", "10", "--height", "10"]) == 1
        assert "setupterm failed" in capsys.readouterr().err

    def test_keyboard_interrupt_ends_session(self, cli, capsys):
        """Ctrl-C outside raw mode still ends with the summary."""
        cli.setattr(cli_module.curses, "wrapper", MagicMock(side_effect=KeyboardInterrupt))

        assert cli_module.main(["--width", "10", "--height", "10"]) == 0
        assert "Game over!" in capsys.readouterr().out

    def test_invalid_settings_exit_with_error(self, cli, capsys):
        """A malformed SNAKE_TICK_MS is rejected."""
        cli.setenv("SNAKE_TICK_MS", "fast")

        assert cli_module.main(["--width", "10", "--height", "10"]) == 1
        assert "SNAKE_TICK_MS" in capsys.readouterr().err

    def test_unknown_log_level_exits_with_error(self, cli, capsys):
        """An unknown SNAKE_LOG_LEVEL is reported instead of crashing logging setup."""
        root = logging.getLogger()
        cli.setattr(root, "handlers", [])
        cli.setattr(root, "level", root.level)
        cli.setenv("SNAKE_LOG_LEVEL", "LOUD")
        wrapper = MagicMock()
        cli.setattr(cli_module.curses, "wrapper", wrapper)

        assert cli_module.main(["--width", "10", "--height", "10"]) == 1
        assert "SNAKE_LOG_LEVEL" in capsys.readouterr().err
        wrapper.assert_not_called()

    def test_unexpected_session_error_exits_with_failure(self, cli, capsys):
        """Errors other than curses.error from the session are fatal but reported."""
        cli.setattr(cli_module.curses, "wrapper", MagicMock(side_effect=RuntimeError("renderer broke")))

        assert cli_module.main(["--width", "10", "--height", "10"]) == 1

        captured = capsys.readouterr()
        assert "Error: renderer broke" in captured.err
        assert "Game over!" not in captured.out

    def test_session_logs_are_written_after_the_game(self, cli, capsys):
        """Console log records from the session appear once curses is gone."""
        root = logging.getLogger()
        cli.setattr(root, "handlers", [])
        cli.setattr(root, "level", root.level)

        def fake_wrapper(func, state, tick_ms):
            logging.getLogger("services.input_listener").error("Input stream failed: gone")
            assert "Input stream failed" not in capsys.readouterr().err
            state.control.cancel("quit")

        cli.setattr(cli_module.curses, "wrapper", fake_wrapper)

        assert cli_module.main(["--width", "10", "--height", "10"]) == 0
        assert "Input stream failed: gone" in capsys.readouterr().err

    def test_seed_setting_makes_food_reproducible(self, cli):
        """SNAKE_SEED feeds the food placement random source."""
        cli.setenv("SNAKE_SEED", "7")
        foods = []

        def fake_wrapper(func, state, tick_ms):
            foods.append(state.spawn_food())
            state.control.cancel("quit")

        cli.setattr(cli_module.curses, "wrapper", fake_wrapper)

        cli_module.main(["--width", "10", "--height", "10"])
        cli_module.main(["--width", "10", "--height", "10"])

        assert foods[0] == foods[1]


class TestPlay:
    """Tests for play() with a mocked curses window."""

    @patch('services.renderer.curses')
    @patch('termsnake_cli.curses')
    def test_play_runs_until_player_quits(self, mock_main_curses, mock_renderer_curses):
        """Keys reach the listener and quitting ends the loop."""
        mock_renderer_curses.has_colors.return_value = False
        state = GameState(10, 10, control=SessionControl())

        keys = iter([curses.KEY_LEFT])
        stdscr = MagicMock()
        stdscr.getch.side_effect = lambda: next(keys, -1)

        def refresh():
            if state.round_number >= 3:
                state.control.cancel("quit")

        stdscr.refresh.side_effect = refresh

        result = cli_module.play(stdscr, state, tick_ms=1)

        assert result is state
        mock_main_curses.raw.assert_called_once()
        assert state.control.cancelled is True
        assert state.round_number >= 3
        stdscr.keypad.assert_called_once_with(True)
        assert len(state.grid.food_positions()) == 1


class TestSummary:
    """Tests for the final statistics line."""

    def test_format_summary(self):
        """Round, score, length and head coordinates are tab separated."""
        state = GameState(10, 10)
        state.round_number = 4
        state.score = 1
        state.snake.prepend((5, 3))
        assert format_summary(state) == "Round: 4\tScore: 1\tSnake: length 4, head x 5, head y 3"


class TestSettings:
    """Tests for config.load_settings."""

    def test_defaults(self):
        """Missing variables fall back to defaults."""
        assert load_settings({}) == Settings(tick_ms=150, seed=None, log_level="WARNING", log_file=None)

    def test_values_from_environment(self):
        """Variables override the defaults."""
        settings = load_settings({
            "SNAKE_TICK_MS": "90",
            "SNAKE_SEED": "3",
            "SNAKE_LOG_LEVEL": "debug",
            "SNAKE_LOG_FILE": "snake.log",
        })
        assert settings == Settings(tick_ms=90, seed=3, log_level="DEBUG", log_file="snake.log")

    def test_blank_values_use_defaults(self):
        """Empty strings count as unset."""
        assert load_settings({"SNAKE_TICK_MS": " ", "SNAKE_SEED": ""}).tick_ms == 150

    @pytest.mark.parametrize("env", [
        {"SNAKE_TICK_MS": "abc"},
        {"SNAKE_SEED": "1.5"},
        {"SNAKE_TICK_MS": "0"},
        {"SNAKE_LOG_LEVEL": "LOUD"},
    ])
    def test_invalid_values_raise(self, env):
        """Non-integer or non-positive values are rejected."""
        with pytest.raises(ValueError):
            load_settings(env)

    def test_log_level_names_are_case_insensitive(self):
        """Level names are normalised to upper case."""
        assert load_settings({"SNAKE_LOG_LEVEL": " info "}).log_level == "INFO"


class TestLogging:
    """Tests for configure_logging / release_logging."""

    @pytest.fixture
    def bare_root(self, monkeypatch):
        root = logging.getLogger()
        monkeypatch.setattr(root, "handlers", [])
        monkeypatch.setattr(root, "level", root.level)
        return root

    def test_console_records_are_held_until_released(self, bare_root, capsys):
        """Nothing reaches stderr while the game owns the screen."""
        held = configure_logging(Settings(log_level="INFO"))
        logging.getLogger("services.input_listener").error("Input stream failed: boom")

        assert capsys.readouterr().err == ""

        release_logging(held)

        assert "Input stream failed: boom" in capsys.readouterr().err
        assert held not in bare_root.handlers

    def test_logging_goes_to_stderr_after_release(self, bare_root, capsys):
        """Records logged after the session are written straight away."""
        release_logging(configure_logging(Settings()))
        logging.getLogger("termsnake_cli").warning("after the game")

        assert "after the game" in capsys.readouterr().err

    def test_release_without_held_handler_is_noop(self):
        """A log file setup has nothing to release."""
        release_logging(None)
