"""Enemy spawning.

New enemies appear ``config.edge_margin`` outside a random world edge. A spawn
point is rerolled (up to :data:`SPAWN_ATTEMPTS` times) while the enemy, once
pulled into the world, would overlap a wall or land within
``config.spawn_clearance`` of the player. After the last attempt the final
candidate is used as is.

The spawn interval shrinks as the score grows, down to
``config.min_enemy_spawn_interval``; no enemy spawns while
``config.enemy_cap`` enemies are alive.
"""

import logging
import math
import random
from dataclasses import replace
from typing import Optional, Tuple

from arena_core.components import Position
from arena_core.levels.factories import add_enemy, random_edge_position
from arena_core.state import State
from arena_core.types import EntityID
from arena_core.utils.ecs import get_player_id
from arena_core.utils.geometry import clamp_position, collides_any

logger = logging.getLogger(__name__)

SPAWN_ATTEMPTS = 60
FAST_ENEMY_CHANCE = 0.12
FAST_ENEMY_RADIUS = 16


def roll_enemy(rng: random.Random) -> Tuple[float, float]:
    """Pick ``(speed, radius)`` for a new enemy.

    Most enemies are slow and come in three sizes; a few are small and fast.
    """
    if rng.random() < FAST_ENEMY_CHANCE:
        return round(rng.uniform(1.6, 3.0), 2), FAST_ENEMY_RADIUS
    toughness = rng.randint(1, 3)
    return round(rng.uniform(0.6, 2.4), 2), 14 + toughness * 2


def is_clear_spawn(
    state: State, pos: Position, radius: float, player_pos: Optional[Position]
) -> bool:
    """Whether ``pos`` keeps clear of walls and of the player."""
    inside = clamp_position(pos, radius, state.width, state.height)
    if collides_any(state.obstacles, inside.x, inside.y, radius):
        return False
    if player_pos is None:
        return True
    distance = math.hypot(pos.x - player_pos.x, pos.y - player_pos.y)
    return distance > state.config.spawn_clearance


def find_spawn_position(
    rng: random.Random, state: State, radius: float
) -> Position:
    """Edge point for an enemy of ``radius``, rerolled while blocked."""
    player_id = get_player_id(state)
    player_pos = state.position.get(player_id) if player_id is not None else None
    margin = state.config.edge_margin
    pos = random_edge_position(rng, state.width, state.height, margin)
    for _ in range(SPAWN_ATTEMPTS):
        if is_clear_spawn(state, pos, radius, player_pos):
            break
        pos = random_edge_position(rng, state.width, state.height, margin)
    return pos


def spawn_enemy(
    state: State, rng: random.Random
) -> Tuple[State, Optional[EntityID]]:
    """Add one enemy at the edge, unless the enemy cap is reached."""
    if len(state.enemy) >= state.config.enemy_cap:
        return state, None
    speed, radius = roll_enemy(rng)
    pos = find_spawn_position(rng, state, radius)
    state, enemy_id = add_enemy(state, pos, speed=speed, radius=radius)
    logger.debug(
        "Spawned enemy %d at (%.1f, %.1f), speed %.2f", enemy_id, pos.x, pos.y, speed
    )
    return state, enemy_id


def spawn_interval(state: State) -> int:
    """Ticks until the next spawn at the current score."""
    config = state.config
    speedup = math.floor(state.score * config.spawn_score_factor)
    return max(
        config.min_enemy_spawn_interval, config.enemy_spawn_interval - speedup
    )


def spawn_rng(state: State) -> random.Random:
    if state.seed is None:
        return random.Random()
    return random.Random(f"{state.seed}:spawn:{state.turn}")


def spawn_initial_enemies(state: State) -> State:
    """Spawn ``config.initial_enemies`` enemies at once."""
    rng = spawn_rng(state)
    for _ in range(state.config.initial_enemies):
        state, _ = spawn_enemy(state, rng)
    return state


def spawn_system(state: State) -> State:
    """Count down the spawn timer and add an enemy when it runs out."""
    timer = state.enemy_spawn_timer - 1
    if timer > 0:
        return replace(state, enemy_spawn_timer=timer)
    state, _ = spawn_enemy(state, spawn_rng(state))
    return replace(state, enemy_spawn_timer=spawn_interval(state))
