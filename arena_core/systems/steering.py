"""Obstacle-aware enemy steering.

Each tick every enemy tries, in order:

1. A direct step of ``speed`` toward the player.
2. Sidesteps of the same magnitude at +90 and then -90 degrees from the
   direct heading.
3. A step toward the centre of the second cell of an A* path on the
   navigation grid (built lazily, see :mod:`arena_core.utils.nav_grid`).

Every candidate is clamped into the world before its collision test, so the
position committed is always the one that was tested. The first
collision-free candidate is committed and ``stuck_ticks`` reset. If all
fail the enemy stays put and ``stuck_ticks`` grows; when it reaches
``config.stuck_threshold`` the enemy is added to ``State.respawn_requests``
and the counter resets. :func:`respawn_system` performs the relocation.

Steps 1-2 (:func:`local_avoidance`) and step 3 (:func:`path_fallback`) are
separate pure functions so either can be exercised on its own.
"""

import logging
import random
from dataclasses import replace
from typing import Iterable, Optional, Tuple

from pyrsistent import pset

from arena_core.components import Obstacle, Position
from arena_core.state import State
from arena_core.systems.spawn import find_spawn_position
from arena_core.types import EntityID
from arena_core.utils.ecs import enemy_ids, get_player_id
from arena_core.utils.geometry import (
    clamp_position,
    collides_any,
    direction_to,
    perpendiculars,
)
from arena_core.utils.nav_grid import NavGrid, cell_center, ensure_nav_grid
from arena_core.utils.pathfinding import find_path

logger = logging.getLogger(__name__)


Bounds = Tuple[float, float]


def _offset(
    pos: Position,
    direction: Tuple[float, float],
    speed: float,
    radius: float,
    bounds: Optional[Bounds],
) -> Position:
    moved = Position(pos.x + direction[0] * speed, pos.y + direction[1] * speed)
    if bounds is None:
        return moved
    return clamp_position(moved, radius, bounds[0], bounds[1])


def local_avoidance(
    pos: Position,
    radius: float,
    target: Position,
    speed: float,
    obstacles: Iterable[Obstacle],
    bounds: Optional[Bounds] = None,
) -> Optional[Position]:
    """Return the first collision-free of direct, left and right steps.

    With ``bounds`` (world width and height) each candidate is clamped into
    the world before it is tested, so the returned position is exactly the
    one checked. Returns ``None`` when all three collide.
    """
    walls = list(obstacles)
    heading = direction_to(pos, target) or (0.0, 0.0)
    left, right = perpendiculars(heading)
    for direction in (heading, left, right):
        candidate = _offset(pos, direction, speed, radius, bounds)
        if not collides_any(walls, candidate.x, candidate.y, radius):
            return candidate
    return None


def path_fallback(
    pos: Position,
    radius: float,
    target: Position,
    speed: float,
    obstacles: Iterable[Obstacle],
    grid: NavGrid,
    bounds: Optional[Bounds] = None,
) -> Optional[Position]:
    """Step toward the next waypoint of a grid path to ``target``.

    Returns ``None`` if there is no path, the path has fewer than two cells,
    or the step toward the waypoint collides.
    """
    path = find_path(grid, pos.x, pos.y, target.x, target.y)
    if path is None or len(path) < 2:
        return None
    wx, wy = cell_center(grid, path[1])
    heading = direction_to(pos, Position(wx, wy))
    if heading is None:
        return None
    candidate = _offset(pos, heading, speed, radius, bounds)
    if collides_any(obstacles, candidate.x, candidate.y, radius):
        return None
    return candidate


def steer(state: State, enemy_id: EntityID, target: Position) -> Tuple[State, bool]:
    """Move one enemy toward ``target`` for this tick.

    Args:
        state: Current world state.
        enemy_id: Entity with ``Enemy`` and ``Position`` components.
        target: Point to converge on, usually the player's position.

    Returns:
        The updated state and whether the enemy reached the stuck threshold
        (and was therefore queued for respawn).
    """
    enemy = state.enemy[enemy_id]
    pos = state.position[enemy_id]
    radius = state.body[enemy_id].radius if enemy_id in state.body else 0.0

    bounds = (state.width, state.height)
    new_pos = local_avoidance(
        pos, radius, target, enemy.speed, state.obstacles, bounds
    )
    if new_pos is not None:
        stuck_ticks = 0
    else:
        stuck_ticks = enemy.stuck_ticks + 1
        state, grid = ensure_nav_grid(state)
        new_pos = path_fallback(
            pos, radius, target, enemy.speed, state.obstacles, grid, bounds
        )
        if new_pos is not None:
            stuck_ticks = 0

    position = state.position
    if new_pos is not None:
        position = position.set(enemy_id, new_pos)

    respawn = stuck_ticks >= state.config.stuck_threshold
    requests = state.respawn_requests
    if respawn:
        logger.info(
            "Enemy %d stuck for %d ticks; requesting respawn", enemy_id, stuck_ticks
        )
        stuck_ticks = 0
        requests = requests.add(enemy_id)

    return (
        replace(
            state,
            position=position,
            enemy=state.enemy.set(enemy_id, replace(enemy, stuck_ticks=stuck_ticks)),
            respawn_requests=requests,
        ),
        respawn,
    )


def steering_system(state: State) -> State:
    """Steer every enemy toward the player."""
    player_id = get_player_id(state)
    if player_id is None or player_id not in state.position:
        return state
    target = state.position[player_id]
    for enemy_id in enemy_ids(state):
        if enemy_id not in state.position:
            continue
        state, _ = steer(state, enemy_id, target)
    return state


def respawn_rng(state: State) -> random.Random:
    """RNG for this tick, deterministic when ``state.seed`` is set."""
    if state.seed is None:
        return random.Random()
    return random.Random(f"{state.seed}:{state.turn}")


def respawn_system(state: State) -> State:
    """Relocate every enemy queued for respawn to a random world edge."""
    if not state.respawn_requests:
        return state
    rng = respawn_rng(state)
    position = state.position
    for enemy_id in sorted(state.respawn_requests):
        if enemy_id not in state.enemy:
            continue
        radius = state.body[enemy_id].radius if enemy_id in state.body else 0.0
        new_pos = find_spawn_position(rng, state, radius)
        logger.info(
            "Respawning enemy %d at (%.1f, %.1f)", enemy_id, new_pos.x, new_pos.y
        )
        position = position.set(enemy_id, new_pos)
    return replace(state, position=position, respawn_requests=pset())
