"""
Simulation Systems
===================
Functions that run once per tick against the simulation context.
simulation.step() calls them in a fixed order:

    movement -> collision -> reactions

Reactions receive the collision step's HitOutcome directly instead of
reading a shared event queue.
"""

import logging
from typing import Iterator, List, Optional, TYPE_CHECKING

from .ecs import World
from .components import (
    Position, Size, Sprite, PlayerTag, TargetTag, Collider,
    HitOutcome, PlaySound, Rumble, ScoreText
)
from .config import SPEED, PALETTE, RUMBLE_INTENSITY, RUMBLE_DURATION
from .arena import clamp
from .geometry import Vec2, overlaps
from .player import InputSnapshot, keyboard_direction, gamepad_direction
from .spawner import spawn_target

if TYPE_CHECKING:
    from .simulation import SimulationContext

logger = logging.getLogger(__name__)


# =============================================================================
# MOVEMENT SYSTEMS
# =============================================================================

def _move_player(world: World, direction: Vec2, dt: float) -> None:
    """Advance the player along a unit direction, clamped to the arena."""
    dx, dy = direction
    if dx == 0.0 and dy == 0.0:
        return

    _, pos, size, _ = world.single(Position, Size, PlayerTag)
    tentative = (pos.x + dx * SPEED * dt, pos.y + dy * SPEED * dt)
    pos.x, pos.y = clamp(tentative, size.as_tuple())


def keyboard_movement_system(ctx: 'SimulationContext', snapshot: InputSnapshot, dt: float) -> None:
    """Move the player with the arrow / WASD keys."""
    _move_player(ctx.world, keyboard_direction(snapshot), dt)


def gamepad_movement_system(ctx: 'SimulationContext', snapshot: InputSnapshot, dt: float) -> None:
    """
    Move the player with each connected pad's left stick.

    Runs after the keyboard pass and starts from wherever that pass
    left the player, one step per pad in ID order.
    """
    for gamepad in sorted(snapshot.gamepads):
        _move_player(ctx.world, gamepad_direction(snapshot.gamepads[gamepad]), dt)


# =============================================================================
# COLLISION SYSTEM
# =============================================================================

def colliding(world: World, entity_id: int) -> Iterator[int]:
    """Yield every live collider whose box overlaps the entity's box."""
    pos = world.get_component(entity_id, Position)
    size = world.get_component(entity_id, Size)

    for collider_id, other_pos, other_size, _ in world.query(Position, Size, Collider):
        if collider_id == entity_id:
            continue
        if overlaps(pos.as_tuple(), size.as_tuple(),
                    other_pos.as_tuple(), other_size.as_tuple()):
            yield collider_id


def collision_system(ctx: 'SimulationContext') -> Optional[HitOutcome]:
    """
    Test the player against every collider.

    Each overlap records one hit signal. Overlapped targets are
    despawned, the player takes a random palette color and the
    score goes up by one. Returns None when nothing was hit.
    """
    world = ctx.world
    player_id, _, sprite = world.single(PlayerTag, Sprite)

    outcome = HitOutcome()
    for collider_id in list(colliding(world, player_id)):
        logger.debug('collision player=%d collider=%d', player_id, collider_id)
        outcome.signals += 1

        if world.has_component(collider_id, TargetTag):
            world.destroy_entity(collider_id)
            outcome.despawned.append(collider_id)
            sprite.color = ctx.rng.choice(PALETTE)
            ctx.scoreboard.score += 1

    if outcome.signals == 0:
        return None
    return outcome


# =============================================================================
# REACTION SYSTEMS
# =============================================================================

def hit_sound_system(outcome: Optional[HitOutcome]) -> List[PlaySound]:
    """One hit sound per tick that had any hit."""
    if outcome is None:
        return []
    return [PlaySound()]


def gamepad_rumble_system(outcome: Optional[HitOutcome], snapshot: InputSnapshot) -> List[Rumble]:
    """One full-strength rumble per connected pad on a hit tick."""
    if outcome is None:
        return []
    rumbles = []
    for gamepad in sorted(snapshot.gamepads):
        logger.debug('rumble gamepad=%d', gamepad)
        rumbles.append(Rumble(gamepad, RUMBLE_INTENSITY, RUMBLE_DURATION))
    return rumbles


def respawn_system(ctx: 'SimulationContext', outcome: Optional[HitOutcome]) -> Optional[int]:
    """
    Replace the target after a hit.

    Sees the player's position and color as the movement and collision
    steps left them this tick. Returns the new target ID, if any.
    """
    if outcome is None:
        return None

    _, pos, sprite, _ = ctx.world.single(Position, Sprite, PlayerTag)
    return spawn_target(
        ctx.world, pos.as_tuple(), sprite.color, ctx.rng,
        max_attempts=ctx.spawn_max_attempts,
    )


def score_display_system(ctx: 'SimulationContext') -> ScoreText:
    """Current score as display text. Runs every tick."""
    return ScoreText(str(ctx.scoreboard.score))
