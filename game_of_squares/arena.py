"""
Arena Bounds
=============
The playable rectangle is WIDTH x HEIGHT centered on the origin,
minus the status strip along the bottom edge.
"""

from typing import Tuple

from .config import WIDTH, HEIGHT, TEXT_BAR_HEIGHT
from .geometry import Vec2


def bounds(size: Vec2, width: float = WIDTH, height: float = HEIGHT,
           text_bar_height: float = TEXT_BAR_HEIGHT) -> Tuple[Vec2, Vec2]:
    """
    Lowest and highest center an entity of this size may occupy.

    Returns ((min_x, min_y), (max_x, max_y)).
    """
    half_w, half_h = size[0] / 2.0, size[1] / 2.0
    low = (-width / 2.0 + half_w, -height / 2.0 + text_bar_height + half_h)
    high = (width / 2.0 - half_w, height / 2.0 - half_h)
    return low, high


def clamp(position: Vec2, size: Vec2, width: float = WIDTH, height: float = HEIGHT,
          text_bar_height: float = TEXT_BAR_HEIGHT) -> Vec2:
    """Pull a center back so the entity's whole box stays inside the arena."""
    (min_x, min_y), (max_x, max_y) = bounds(size, width, height, text_bar_height)
    x, y = position
    return (
        min(max(x, min_x), max_x),
        min(max(y, min_y), max_y),
    )


def contains(position: Vec2, size: Vec2) -> bool:
    """Check that an entity's box lies fully inside the arena."""
    (min_x, min_y), (max_x, max_y) = bounds(size)
    x, y = position
    return min_x <= x <= max_x and min_y <= y <= max_y
