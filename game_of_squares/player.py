"""
Player Module
==============
Player entity creation and input aggregation.

Input reaches the simulation as an InputSnapshot: the logical keys held
this tick plus the left-stick axes of every connected gamepad.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

from .ecs import World
from .components import Position, Size, Sprite, PlayerTag
from .config import PLAYER_SIZE, PLAYER_START, STARTING_COLOR, DEAD_ZONE, KEY_HOLD_FRAMES
from .geometry import Vec2, normalize


# Logical key names
LEFT_KEYS = ('left', 'a')
RIGHT_KEYS = ('right', 'd')
UP_KEYS = ('up', 'w')
DOWN_KEYS = ('down', 's')
EXIT_KEY = 'q'

# blessed sequence names -> logical key names
_SEQUENCE_KEYS = {
    'KEY_LEFT': 'left',
    'KEY_RIGHT': 'right',
    'KEY_UP': 'up',
    'KEY_DOWN': 'down',
}
_LETTER_KEYS = frozenset('wasdq')


def create_player(world: World, x: float = PLAYER_START[0], y: float = PLAYER_START[1],
                  color: str = STARTING_COLOR) -> int:
    """Create the player entity with all required components."""
    return world.create_entity(
        Position(x, y),
        Size(*PLAYER_SIZE),
        Sprite(color),
        PlayerTag(),
    )


# =============================================================================
# INPUT SNAPSHOT
# =============================================================================

@dataclass(frozen=True)
class InputSnapshot:
    """Everything the simulation reads from the outside world in one tick."""
    pressed: FrozenSet[str] = frozenset()
    gamepads: Mapping[int, Tuple[float, float]] = field(default_factory=dict)

    def any_pressed(self, keys) -> bool:
        return any(key in self.pressed for key in keys)


def keyboard_direction(snapshot: InputSnapshot) -> Vec2:
    """Unit direction from the arrow and WASD keys. Opposing keys cancel."""
    dx, dy = 0.0, 0.0
    if snapshot.any_pressed(LEFT_KEYS):
        dx -= 1.0
    if snapshot.any_pressed(RIGHT_KEYS):
        dx += 1.0
    if snapshot.any_pressed(UP_KEYS):
        dy += 1.0
    if snapshot.any_pressed(DOWN_KEYS):
        dy -= 1.0
    return normalize(dx, dy)


def gamepad_direction(axes: Tuple[float, float], dead_zone: float = DEAD_ZONE) -> Vec2:
    """Unit direction of a stick pushed past the dead zone, else zero."""
    x, y = axes
    if (x * x + y * y) ** 0.5 > dead_zone:
        return normalize(x, y)
    return 0.0, 0.0


def exit_requested(snapshot: InputSnapshot) -> bool:
    return EXIT_KEY in snapshot.pressed


# =============================================================================
# TERMINAL KEYBOARD
# =============================================================================

class InputHandler:
    """
    Turns blessed keystrokes into held logical keys.

    Terminals send no key-up events, so each press or auto-repeat
    refreshes a frame countdown and the key counts as held until
    the countdown runs out.
    """

    def __init__(self, hold_duration: int = KEY_HOLD_FRAMES):
        self.keys_held: Dict[str, int] = {}  # key -> frames remaining
        self.hold_duration = hold_duration

    @staticmethod
    def logical_key(key) -> Optional[str]:
        """Map a blessed Keystroke to a logical key name, or None."""
        if not key:
            return None
        if key.is_sequence:
            return _SEQUENCE_KEYS.get(key.name)
        key_str = key.lower()
        if key_str in _LETTER_KEYS:
            return key_str
        return None

    def process_key(self, key) -> None:
        """Process a single key press from blessed's inkey()."""
        name = self.logical_key(key)
        if name is not None:
            self.keys_held[name] = self.hold_duration

    def update(self) -> None:
        """Update key hold timers (call once per tick)."""
        expired = []
        for key, frames in self.keys_held.items():
            self.keys_held[key] = frames - 1
            if self.keys_held[key] <= 0:
                expired.append(key)
        for key in expired:
            del self.keys_held[key]

    def snapshot(self, gamepads: Optional[Mapping[int, Tuple[float, float]]] = None) -> InputSnapshot:
        """Freeze the currently held keys and the given pad axes."""
        return InputSnapshot(
            pressed=frozenset(self.keys_held),
            gamepads=dict(gamepads or {}),
        )
