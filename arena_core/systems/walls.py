"""Wall respawn system.

Walls are replaced wholesale every ``config.wall_interval`` ticks. Each
respawn lays down one or two walls spanning the whole arena, each split by a
passage gap. A wall that would pass through the player has its gap centred on
the player so they are never sealed in. Replacing walls goes through
:func:`arena_core.utils.nav_grid.set_obstacles`, which invalidates the
navigation grid.
"""

import logging
import random
from dataclasses import replace
from typing import List, Sequence

from arena_core.components import Obstacle, Position
from arena_core.state import State
from arena_core.utils.ecs import get_player_id
from arena_core.utils.geometry import clamp_position, collides_any
from arena_core.utils.nav_grid import set_obstacles

logger = logging.getLogger(__name__)

MIN_GAP = 80
MAX_GAP = 180
EDGE_CLEARANCE = 80
MIN_SEGMENT = 8
MAX_NUDGE_ATTEMPTS = 20


def _placement(rng: random.Random, span: float) -> int:
    """Random coordinate at least ``EDGE_CLEARANCE`` from both ends of ``span``.

    Spans too short to keep that clearance use their midpoint.
    """
    high = int(span) - EDGE_CLEARANCE
    if high < EDGE_CLEARANCE:
        return int(span) // 2
    return rng.randint(EDGE_CLEARANCE, high)


def spawn_walls(
    rng: random.Random,
    width: float,
    height: float,
    player_pos: Position,
    player_radius: float,
    thickness: float = 32,
) -> List[Obstacle]:
    """Generate one or two full-span walls with passage gaps."""
    walls: List[Obstacle] = []
    half = thickness / 2
    for _ in range(rng.randint(1, 2)):
        vertical = rng.random() < 0.5
        # Lay the wall along its span axis, then map to x/y.
        span, across = (height, width) if vertical else (width, height)
        player_span, player_across = (
            (player_pos.y, player_pos.x) if vertical else (player_pos.x, player_pos.y)
        )
        gap = rng.randint(MIN_GAP, MAX_GAP)
        gap_center = _placement(rng, span)
        line = _placement(rng, across)
        if abs(line - player_across) < thickness + player_radius:
            gap_center = max(
                gap // 2 + MIN_SEGMENT,
                min(int(span) - gap // 2 - MIN_SEGMENT, round(player_span)),
            )

        first_len = max(0, gap_center - gap // 2)
        second_start = gap_center + gap // 2
        second_len = span - second_start
        segments = []
        if first_len > MIN_SEGMENT:
            segments.append((0, first_len))
        if second_len > MIN_SEGMENT:
            segments.append((second_start, second_len))
        for start, length in segments:
            if vertical:
                walls.append(Obstacle(line - half, start, thickness, length))
            else:
                walls.append(Obstacle(start, line - half, length, thickness))
    return walls


def resolve_overlap(
    pos: Position,
    radius: float,
    obstacles: Sequence[Obstacle],
    width: float,
    height: float,
) -> Position:
    """Nudge a circle out of any wall it overlaps.

    Tries growing offsets in the four axis directions; if none is clear the
    circle is pushed away from the arena centre and the search repeats.
    """
    attempts = 0
    while attempts < MAX_NUDGE_ATTEMPTS:
        if not collides_any(obstacles, pos.x, pos.y, radius):
            break
        attempts += 1
        off = 6 + attempts
        for dx, dy in ((off, 0), (-off, 0), (0, off), (0, -off)):
            candidate = clamp_position(
                Position(pos.x + dx, pos.y + dy), radius, width, height
            )
            if not collides_any(obstacles, candidate.x, candidate.y, radius):
                return candidate
        pos = clamp_position(
            Position(
                pos.x + (off if pos.x > width / 2 else -off),
                pos.y + (off if pos.y > height / 2 else -off),
            ),
            radius,
            width,
            height,
        )
    return pos


def wall_rng(state: State) -> random.Random:
    if state.seed is None:
        return random.Random()
    return random.Random(f"{state.seed}:walls:{state.turn}")


def respawn_walls(state: State) -> State:
    """Replace the walls now and move the player clear of them."""
    player_id = get_player_id(state)
    if player_id is not None and player_id in state.position:
        player_pos = state.position[player_id]
        player_radius = state.body[player_id].radius if player_id in state.body else 0
    else:
        player_pos = Position(state.width / 2, state.height / 2)
        player_radius = 0

    walls = spawn_walls(
        wall_rng(state),
        state.width,
        state.height,
        player_pos,
        player_radius,
        state.config.wall_thickness,
    )
    logger.info("Respawned %d wall segments at turn %d", len(walls), state.turn)
    state = set_obstacles(state, walls)

    if player_id is not None and player_id in state.position:
        resolved = resolve_overlap(
            player_pos, player_radius, walls, state.width, state.height
        )
        if resolved != player_pos:
            state = replace(state, position=state.position.set(player_id, resolved))
    return replace(state, wall_timer=state.config.wall_interval)


def wall_system(state: State) -> State:
    """Count down the wall timer and respawn walls when it runs out."""
    wall_timer = state.wall_timer - 1
    if wall_timer > 0:
        return replace(state, wall_timer=wall_timer)
    return respawn_walls(state)
