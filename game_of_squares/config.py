"""
Game Configuration
===================
Arena geometry, tuning constants, the color palette and the
environment-driven runtime settings.

World coordinates are centered on the origin with +y pointing up.
"""

import os
from dataclasses import dataclass
from typing import Dict, Optional, Tuple


# =============================================================================
# ARENA
# =============================================================================

TITLE = 'Game of Squares'

WIDTH = 640.0
HEIGHT = 640.0
TEXT_BAR_HEIGHT = 32.0  # Reserved status strip along the bottom edge

PLAYER_SIZE: Tuple[float, float] = (30.0, 30.0)
TARGET_SIZE: Tuple[float, float] = (28.0, 28.0)
PLAYER_START: Tuple[float, float] = (0.0, 0.0)


# =============================================================================
# TIMING & MOVEMENT
# =============================================================================

TICK_RATE = 64  # Fixed simulation ticks per second
FIXED_DT = 1.0 / TICK_RATE
SPEED = 300.0  # World units per second

DEAD_ZONE = 0.5  # Minimum stick magnitude before the pad moves the player

RUMBLE_INTENSITY = 1.0
RUMBLE_DURATION = 0.20  # Seconds

# Sampling loops are unbounded by default; warn every N rejected samples
SPAWN_WARN_EVERY = 10_000

# Terminals only report key presses, so a key counts as held for this
# many frames after its last press or auto-repeat
KEY_HOLD_FRAMES = 12


# =============================================================================
# COLORS
# =============================================================================
# Names map to ANSI 256 codes for the terminal renderer.

STARTING_COLOR = 'green'

PALETTE: Tuple[str, ...] = (
    'gold',
    'crimson',
    'purple',
    'red',
    'orange_red',
    'orange',
    'pink',
    'salmon',
    'tomato',
    'lime_green',
    'blue',
    'yellow',
)

ANSI_COLORS: Dict[str, int] = {
    'green': 46,
    'gold': 220,
    'crimson': 161,
    'purple': 91,
    'red': 196,
    'orange_red': 202,
    'orange': 214,
    'pink': 218,
    'salmon': 209,
    'tomato': 203,
    'lime_green': 77,
    'blue': 21,
    'yellow': 226,
}

STATUS_BAR_COLOR = 25  # Steel blue strip behind the status text
STATUS_TEXT_COLOR = 255
SCORE_TEXT_COLOR = 177  # Violet

HELP_TEXT = 'Controls: WSAD, Arrows. Press Q for exit. '
SCORE_LABEL = 'Score: '


# =============================================================================
# RUNTIME SETTINGS
# =============================================================================

ENV_PREFIX = 'GAME_OF_SQUARES_'
DEFAULT_LOG_LEVEL = 'WARNING'
LOG_LEVELS = ('CRITICAL', 'ERROR', 'WARNING', 'INFO', 'DEBUG')


@dataclass(frozen=True)
class Settings:
    """Runtime knobs read from the environment. There is no config file."""
    seed: Optional[int] = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None
    devices_enabled: bool = True

    @classmethod
    def from_env(cls, environ=None) -> 'Settings':
        """Build settings from GAME_OF_SQUARES_* environment variables."""
        env = os.environ if environ is None else environ

        seed_text = env.get(ENV_PREFIX + 'SEED', '').strip()
        seed = int(seed_text) if seed_text else None

        # Unknown level names fall back to the default instead of failing startup
        log_level = env.get(ENV_PREFIX + 'LOG_LEVEL', '').strip().upper()
        if log_level not in LOG_LEVELS:
            log_level = DEFAULT_LOG_LEVEL

        no_devices = env.get(ENV_PREFIX + 'NO_DEVICES', '').strip().lower()

        return cls(
            seed=seed,
            log_level=log_level,
            log_file=env.get(ENV_PREFIX + 'LOG_FILE') or None,
            devices_enabled=no_devices not in ('1', 'true', 'yes', 'on'),
        )
