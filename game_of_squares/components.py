"""
Component Definitions
======================
Plain dataclasses with no behavior, plus the per-tick values
passed between systems.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


# =============================================================================
# SPATIAL COMPONENTS
# =============================================================================

@dataclass
class Position:
    """Center of the entity in world units (+y up)."""
    x: float = 0.0
    y: float = 0.0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass
class Size:
    """Full width and height of the entity's box."""
    width: float = 1.0
    height: float = 1.0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.width, self.height)


# =============================================================================
# RENDERING COMPONENTS
# =============================================================================

@dataclass
class Sprite:
    """Flat-colored square. Color is a palette name."""
    color: str = 'green'


# =============================================================================
# TAG COMPONENTS (empty, used for queries)
# =============================================================================

@dataclass
class PlayerTag:
    """Marks the player entity."""
    pass


@dataclass
class TargetTag:
    """Marks the target entity."""
    pass


@dataclass
class Collider:
    """Entity takes part in overlap tests against the player."""
    pass


# =============================================================================
# RESOURCES
# =============================================================================

@dataclass
class Scoreboard:
    """Hits scored this session. Only ever goes up."""
    score: int = 0


# =============================================================================
# PER-TICK VALUES
# =============================================================================

@dataclass
class HitOutcome:
    """
    What the collision step found this tick.

    One signal is recorded per overlapping collider; despawned holds the
    IDs of targets removed by those hits.
    """
    signals: int = 0
    despawned: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class PlaySound:
    """Play the hit sound once."""
    pass


@dataclass(frozen=True)
class Rumble:
    """Rumble one gamepad."""
    gamepad: int
    intensity: float
    duration: float  # Seconds


@dataclass(frozen=True)
class ScoreText:
    """Replace the score readout with this text."""
    text: str
