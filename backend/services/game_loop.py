"""
Fixed-tick game loop.
"""

import logging
import time

from domain.constants import DEFAULT_TICK_MS
from domain.game_state import GameState
from .renderer import Renderer

logger = logging.getLogger(__name__)


class GameLoop:
    """
    Drives a GameState: every tick runs one round and draws the result,
    until the session is cancelled.
    """

    def __init__(self, state: GameState, renderer: Renderer, tick_ms: int = DEFAULT_TICK_MS):
        if tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {tick_ms}")
        self.state = state
        self.renderer = renderer
        self.tick_seconds = tick_ms / 1000.0

    def tick(self) -> bool:
        alive = self.state.run_round()
        self.renderer.draw(self.state)
        return alive

    def run(self) -> GameState:
        control = self.state.control
        self.state.spawn_food()
        logger.info("Game started on a %sx%s board", self.state.width, self.state.height)

        next_tick = time.monotonic() + self.tick_seconds
        while not control.wait(max(0.0, next_tick - time.monotonic())):
            self.tick()
            # Late ticks are dropped rather than replayed in a burst
            next_tick = max(next_tick + self.tick_seconds, time.monotonic())

        logger.info("Game ended after %s rounds (%s), score %s",
                    self.state.round_number, control.reason, self.state.score)
        logger.debug("Final board:\n%s", self.state.print_board())
        return self.state
