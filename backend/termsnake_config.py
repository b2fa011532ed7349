"""
Runtime settings for termsnake, read from the environment.

Variables (a local .env file is merged in by termsnake_cli.main()):
    SNAKE_TICK_MS     tick interval in milliseconds (default 150)
    SNAKE_SEED        seed for food placement (default: random)
    SNAKE_LOG_LEVEL   logging level (default WARNING)
    SNAKE_LOG_FILE    log file path (default: stderr)
"""

import logging
import logging.handlers
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from domain.constants import DEFAULT_TICK_MS

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
HELD_RECORDS = 10000  # console records kept while curses owns the screen


@dataclass
class Settings:
    tick_ms: int = DEFAULT_TICK_MS
    seed: Optional[int] = None
    log_level: str = "WARNING"
    log_file: Optional[str] = None


def _int_setting(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from env (os.environ by default)."""
    if env is None:
        env = os.environ

    tick_ms = _int_setting(env, "SNAKE_TICK_MS")
    if tick_ms is not None and tick_ms <= 0:
        raise ValueError(f"SNAKE_TICK_MS must be positive, got {tick_ms}")

    log_level = (env.get("SNAKE_LOG_LEVEL") or "WARNING").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"SNAKE_LOG_LEVEL must be a logging level name, got {log_level!r}")

    return Settings(
        tick_ms=tick_ms if tick_ms is not None else DEFAULT_TICK_MS,
        seed=_int_setting(env, "SNAKE_SEED"),
        log_level=log_level,
        log_file=env.get("SNAKE_LOG_FILE") or None,
    )


def configure_logging(settings: Settings) -> Optional[logging.handlers.MemoryHandler]:
    """
    Set up the root logger.

    Without a log file, console records are held in memory so they do not
    draw over the curses screen. The returned handler must be passed to
    release_logging() once the terminal is restored.
    """
    if settings.log_file:
        logging.basicConfig(
            level=settings.log_level,
            format=LOG_FORMAT,
            filename=settings.log_file,
        )
        return None

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(LOG_FORMAT))
    held = logging.handlers.MemoryHandler(
        HELD_RECORDS,
        flushLevel=logging.CRITICAL + 1,
        target=console,
    )
    logging.basicConfig(level=settings.log_level, handlers=[held])
    return held


def release_logging(held: Optional[logging.handlers.MemoryHandler]) -> None:
    """Write out held console records and log straight to stderr from now on."""
    if held is None:
        return
    root = logging.getLogger()
    console = held.target
    held.flush()
    if held in root.handlers:
        root.removeHandler(held)
        root.addHandler(console)
    held.close()
