"""
Simulation Step
================
The per-tick pipeline. step() is a literal call sequence; the order of
the calls below is the ordering contract between systems.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from .ecs import World
from .components import (
    Position, Sprite, PlayerTag, TargetTag, Scoreboard, HitOutcome
)
from .config import FIXED_DT
from .errors import InvariantError
from .player import InputSnapshot, create_player, exit_requested
from .spawner import spawn_target
from .systems import (
    keyboard_movement_system,
    gamepad_movement_system,
    collision_system,
    hit_sound_system,
    gamepad_rumble_system,
    respawn_system,
    score_display_system,
)

logger = logging.getLogger(__name__)


@dataclass
class SimulationContext:
    """Everything one game session owns. Passed to every system."""
    world: World
    scoreboard: Scoreboard
    rng: random.Random
    spawn_max_attempts: Optional[int] = None
    tick: int = 0

    def player_id(self) -> int:
        return self.world.single(PlayerTag)[0]

    def target_id(self) -> Optional[int]:
        for entity_id, _ in self.world.query(TargetTag):
            return entity_id
        return None


@dataclass
class TickResult:
    """What one tick produced for the presentation layer."""
    intents: List[object] = field(default_factory=list)
    hits: Optional[HitOutcome] = None
    respawned: Optional[int] = None
    exit_requested: bool = False


def create_simulation(seed: Optional[int] = None, rng: Optional[random.Random] = None,
                      spawn_max_attempts: Optional[int] = None) -> SimulationContext:
    """Start a session: one player at the start spot and its first target."""
    ctx = SimulationContext(
        world=World(),
        scoreboard=Scoreboard(),
        rng=rng if rng is not None else random.Random(seed),
        spawn_max_attempts=spawn_max_attempts,
    )
    player_id = create_player(ctx.world)

    pos = ctx.world.get_component(player_id, Position)
    sprite = ctx.world.get_component(player_id, Sprite)
    spawn_target(ctx.world, pos.as_tuple(), sprite.color, ctx.rng,
                 max_attempts=spawn_max_attempts)

    check_invariants(ctx.world)
    return ctx


def check_invariants(world: World) -> None:
    """Exactly one player and exactly one target must exist between ticks."""
    players = world.count(PlayerTag)
    if players != 1:
        raise InvariantError(f'expected exactly one player, found {players}')
    targets = world.count(TargetTag)
    if targets != 1:
        raise InvariantError(f'expected exactly one target, found {targets}')


def step(ctx: SimulationContext, snapshot: InputSnapshot, dt: float = FIXED_DT) -> TickResult:
    """Run one fixed tick."""
    if exit_requested(snapshot):
        logger.info('exit requested at tick %d', ctx.tick)
        return TickResult(exit_requested=True)

    # 1. Movement
    keyboard_movement_system(ctx, snapshot, dt)
    gamepad_movement_system(ctx, snapshot, dt)

    # 2. Collision
    hits = collision_system(ctx)

    # 3. Reactions, all fed the same outcome
    result = TickResult(hits=hits)
    result.intents.extend(hit_sound_system(hits))
    result.intents.extend(gamepad_rumble_system(hits, snapshot))
    result.respawned = respawn_system(ctx, hits)
    result.intents.append(score_display_system(ctx))

    ctx.world.process_dead_entities()
    check_invariants(ctx.world)

    ctx.tick += 1
    return result
