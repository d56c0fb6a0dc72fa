"""Convenience factories for building arena states.

Each helper returns a new :class:`arena_core.state.State` (plus the id of
any entity it created) so tests and callers can compose worlds step by
step::

    state = make_world(800, 600, seed=7)
    state, player_id = add_player(state, Position(400, 300))
    state, enemy_id = add_enemy(state, Position(20, 20), speed=1.5)
"""

import random
from dataclasses import replace
from typing import Iterable, Optional, Tuple

from pyrsistent import pvector

from arena_core.components import Body, Enemy, Obstacle, Pickup, Player, Position, Stats
from arena_core.config import ArenaConfig, DEFAULT_CONFIG
from arena_core.entity import Entity, new_entity_id
from arena_core.state import State
from arena_core.types import EffectKind, EntityID

PLAYER_RADIUS = 14
PICKUP_RADIUS = 10


def make_world(
    width: float = 800,
    height: float = 600,
    config: ArenaConfig = DEFAULT_CONFIG,
    obstacles: Iterable[Obstacle] = (),
    seed: Optional[int] = None,
) -> State:
    """Empty arena with the given walls; the nav grid starts stale."""
    return State(
        width=width,
        height=height,
        config=config,
        obstacles=pvector(obstacles),
        wall_timer=config.wall_interval,
        enemy_spawn_timer=config.enemy_spawn_interval,
        seed=seed,
    )


def _register(state: State, entity_id: EntityID, pos: Position, radius: float) -> State:
    return replace(
        state,
        entity=state.entity.set(entity_id, Entity()),
        position=state.position.set(entity_id, pos),
        body=state.body.set(entity_id, Body(radius=radius)),
    )


def add_player(
    state: State,
    pos: Position,
    radius: float = PLAYER_RADIUS,
    stats: Optional[Stats] = None,
) -> Tuple[State, EntityID]:
    """Player with baseline stats taken from ``state.config``."""
    if stats is None:
        stats = baseline_stats(state.config)
    player_id = new_entity_id()
    state = _register(state, player_id, pos, radius)
    state = replace(
        state,
        player=state.player.set(player_id, Player()),
        stats=state.stats.set(player_id, stats),
    )
    return state, player_id


def add_enemy(
    state: State,
    pos: Position,
    speed: float,
    radius: float = 16,
) -> Tuple[State, EntityID]:
    """Steering enemy with a fresh stuck counter."""
    if speed < 0:
        raise ValueError(f"Enemy speed must be non-negative: {speed}")
    enemy_id = new_entity_id()
    state = _register(state, enemy_id, pos, radius)
    return replace(state, enemy=state.enemy.set(enemy_id, Enemy(speed=speed))), enemy_id


def add_pickup(
    state: State,
    pos: Position,
    kind: EffectKind,
    duration: Optional[int] = None,
    radius: float = PICKUP_RADIUS,
) -> Tuple[State, EntityID]:
    """Power-up lying at ``pos``; duration defaults from config."""
    if duration is None:
        duration = state.config.default_effect_duration
    pickup_id = new_entity_id()
    state = _register(state, pickup_id, pos, radius)
    pickup = Pickup(kind=EffectKind(kind), duration=duration)
    return replace(state, pickup=state.pickup.set(pickup_id, pickup)), pickup_id


def baseline_stats(config: ArenaConfig) -> Stats:
    """Player stats with every effect reverted."""
    return Stats(
        speed=config.player_speed,
        health=config.player_health,
        max_health=config.player_health,
    )


def random_edge_position(
    rng: random.Random, width: float, height: float, margin: float
) -> Position:
    """Random point just outside one of the four world edges."""
    side = rng.randint(0, 3)
    if side == 0:
        return Position(-margin, rng.uniform(0, height))
    if side == 1:
        return Position(width + margin, rng.uniform(0, height))
    if side == 2:
        return Position(rng.uniform(0, width), -margin)
    return Position(rng.uniform(0, width), height + margin)
