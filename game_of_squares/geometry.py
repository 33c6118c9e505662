"""
Collision Geometry
===================
Axis-aligned box tests on centered rectangles.
"""

import math
from typing import Tuple

Vec2 = Tuple[float, float]


def overlaps(center_a: Vec2, size_a: Vec2, center_b: Vec2, size_b: Vec2) -> bool:
    """
    Check AABB overlap between two boxes given by center and full size.

    Intervals must intersect strictly on both axes: boxes that only
    share an edge do not overlap.
    """
    ax, ay = center_a
    bx, by = center_b
    half_aw, half_ah = size_a[0] / 2.0, size_a[1] / 2.0
    half_bw, half_bh = size_b[0] / 2.0, size_b[1] / 2.0

    return (
        ax - half_aw < bx + half_bw and
        ax + half_aw > bx - half_bw and
        ay - half_ah < by + half_bh and
        ay + half_ah > by - half_bh
    )


def normalize(x: float, y: float) -> Vec2:
    """Scale a vector to unit length. The zero vector stays zero."""
    length = math.hypot(x, y)
    if length > 0:
        return x / length, y / length
    return 0.0, 0.0
