#!/usr/bin/env python3
"""
Game of Squares
================
Steer your square into the colored target to score.

Controls:
    WASD / Arrows   - Move
    Gamepad stick   - Move
    Q               - Quit

Environment:
    GAME_OF_SQUARES_SEED        - RNG seed for a repeatable session
    GAME_OF_SQUARES_LOG_LEVEL   - DEBUG, INFO, WARNING (default), ...
    GAME_OF_SQUARES_LOG_FILE    - write logs here (nothing is logged otherwise)
    GAME_OF_SQUARES_NO_DEVICES  - set to 1 to skip pygame gamepads and sound
"""

import logging
import sys
import time

from blessed import Terminal

from .config import TITLE, TICK_RATE, FIXED_DT, Settings
from .components import ScoreText
from .devices import DeviceHub, NullDevices
from .engine import GameRenderer
from .player import InputHandler
from .simulation import SimulationContext, create_simulation, step

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTANTS
# =============================================================================

FRAME_TIME = 1.0 / TICK_RATE
MAX_CATCH_UP_TICKS = 4
MIN_WIDTH = 40
MIN_HEIGHT = 12

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'


def configure_logging(settings: Settings) -> None:
    """Send package logs to a file when one is configured, else drop them."""
    package_logger = logging.getLogger('game_of_squares')
    package_logger.setLevel(settings.log_level)
    if settings.log_file:
        handler = logging.FileHandler(settings.log_file, encoding='utf-8')
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
    else:
        # Anything printed would tear the fullscreen display
        package_logger.addHandler(logging.NullHandler())
        package_logger.propagate = False


# =============================================================================
# GAME STATE
# =============================================================================

class GameState:
    """Owns the session, its input, devices and renderer."""

    def __init__(self, term: Terminal, settings: Settings, devices=None):
        self.term = term
        self.renderer = GameRenderer(term)
        self.input_handler = InputHandler()
        self.devices = devices if devices is not None else NullDevices()
        self.sim: SimulationContext = create_simulation(seed=settings.seed)
        self.running = True

    def handle_input(self):
        """Drain all pending keystrokes from the terminal."""
        key = self.term.inkey(timeout=0)
        while key:
            self.input_handler.process_key(key)
            key = self.term.inkey(timeout=0)

    def update(self):
        """Run one fixed tick and hand its intents to the outside world."""
        snapshot = self.input_handler.snapshot(self.devices.poll_gamepads())
        self.input_handler.update()

        result = step(self.sim, snapshot, FIXED_DT)
        if result.exit_requested:
            self.running = False
            return

        self.devices.dispatch(result.intents)
        for intent in result.intents:
            if isinstance(intent, ScoreText):
                self.renderer.score_text = intent.text

    def render(self):
        """Render one frame."""
        if (self.term.width, self.term.height) != (self.renderer.width, self.renderer.height):
            self.renderer.resize(self.term.width, self.term.height)
            print(self.term.home + self.term.clear, end='', flush=True)

        output = self.renderer.render(self.sim.world)
        if output:
            print(output, end='', flush=True)


# =============================================================================
# MAIN LOOP
# =============================================================================

def run(term: Terminal, settings: Settings) -> int:
    """Fixed-timestep loop. Returns the process exit code."""
    devices = DeviceHub() if settings.devices_enabled else NullDevices()
    devices.open()

    try:
        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            game = GameState(term, settings, devices)
            # xterm title sequence, then the only full clear
            print(f'\x1b]0;{TITLE}\x07' + term.home + term.clear, end='', flush=True)

            last_time = time.perf_counter()
            accumulator = 0.0

            while game.running:
                now = time.perf_counter()
                delta = now - last_time
                last_time = now

                # Clamp delta to prevent spiral of death
                accumulator += min(delta, FRAME_TIME * 5)

                game.handle_input()

                ticks = 0
                while accumulator >= FRAME_TIME and ticks < MAX_CATCH_UP_TICKS and game.running:
                    game.update()
                    accumulator -= FRAME_TIME
                    ticks += 1

                if not game.running:
                    break

                game.render()

                elapsed = time.perf_counter() - now
                sleep_time = FRAME_TIME - elapsed
                if sleep_time > 0.001:
                    time.sleep(sleep_time * 0.9)

            logger.info('session over, score %d', game.sim.scoreboard.score)
            print(term.normal, end='', flush=True)
    finally:
        devices.close()

    return 0


def main():
    """Entry point."""
    settings = Settings.from_env()
    configure_logging(settings)

    term = Terminal()
    if term.width < MIN_WIDTH or term.height < MIN_HEIGHT:
        print(
            f'Terminal too small: {term.width}x{term.height}. '
            f'Minimum: {MIN_WIDTH}x{MIN_HEIGHT}'
        )
        sys.exit(1)

    sys.exit(run(term, settings))


if __name__ == '__main__':
    main()
