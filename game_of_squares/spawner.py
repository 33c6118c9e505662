"""
Target Spawner
===============
Rejection-sampling placement of the next target.

Both sampling loops retry until they succeed. Pass max_attempts to cap
them (tests do); a capped loop raises SpawnExhaustedError instead of
spinning forever.
"""

import logging
import random
from typing import Optional, Sequence

from .ecs import World
from .components import Position, Size, Sprite, TargetTag, Collider
from .config import (
    WIDTH, HEIGHT, TEXT_BAR_HEIGHT, PLAYER_SIZE, TARGET_SIZE, PALETTE,
    SPAWN_WARN_EVERY
)
from .errors import SpawnExhaustedError
from .geometry import Vec2

logger = logging.getLogger(__name__)


def create_target(world: World, x: float, y: float, color: str) -> int:
    """Create a target entity at an exact spot."""
    return world.create_entity(
        Position(x, y),
        Size(*TARGET_SIZE),
        Sprite(color),
        TargetTag(),
        Collider(),
    )


def is_clear_of_player(candidate: Vec2, player_position: Vec2,
                       player_size: Vec2 = PLAYER_SIZE,
                       target_size: Vec2 = TARGET_SIZE) -> bool:
    """
    Placement test for a candidate target center.

    Accepts when the target's far edge lies left of the player's left
    edge OR its top edge lies below the player's bottom edge. One axis
    is enough, so a target can still land right next to the player.
    """
    tx, ty = candidate
    px, py = player_position
    return (
        tx + target_size[0] / 2.0 < px - player_size[0] / 2.0 or
        ty + target_size[1] / 2.0 < py - player_size[1] / 2.0
    )


def _check_attempts(what: str, attempts: int, max_attempts: Optional[int]) -> None:
    if max_attempts is not None and attempts >= max_attempts:
        raise SpawnExhaustedError(what, attempts)
    if attempts and attempts % SPAWN_WARN_EVERY == 0:
        logger.warning('still sampling a target %s after %d attempts', what, attempts)


def sample_target_position(rng: random.Random, player_position: Vec2,
                           player_size: Vec2 = PLAYER_SIZE,
                           target_size: Vec2 = TARGET_SIZE,
                           max_attempts: Optional[int] = None) -> Vec2:
    """Draw uniform centers inside the arena until one passes the placement test."""
    half_w, half_h = target_size[0] / 2.0, target_size[1] / 2.0
    min_x, max_x = -WIDTH / 2.0 + half_w, WIDTH / 2.0 - half_w
    min_y, max_y = -HEIGHT / 2.0 + TEXT_BAR_HEIGHT + half_h, HEIGHT / 2.0 - half_h

    attempts = 0
    while True:
        _check_attempts('position', attempts, max_attempts)
        candidate = (rng.uniform(min_x, max_x), rng.uniform(min_y, max_y))
        attempts += 1
        if is_clear_of_player(candidate, player_position, player_size, target_size):
            return candidate


def sample_target_color(rng: random.Random, player_color: str,
                        palette: Sequence[str] = PALETTE,
                        max_attempts: Optional[int] = None) -> str:
    """Draw palette entries until one differs from the player's color."""
    attempts = 0
    while True:
        _check_attempts('color', attempts, max_attempts)
        color = rng.choice(palette)
        attempts += 1
        if color != player_color:
            return color


def spawn_target(world: World, player_position: Vec2, player_color: str,
                 rng: random.Random, max_attempts: Optional[int] = None) -> int:
    """Place a new target away from the player in a color the player isn't."""
    logger.debug('create_new_target player=(%.1f, %.1f)', *player_position)

    x, y = sample_target_position(rng, player_position, max_attempts=max_attempts)
    color = sample_target_color(rng, player_color, max_attempts=max_attempts)

    target_id = create_target(world, x, y, color)
    logger.debug('target %d spawned at (%.1f, %.1f) color=%s', target_id, x, y, color)
    return target_id
