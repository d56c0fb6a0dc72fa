import math
from dataclasses import replace

import pytest

from arena_core.components import Obstacle, Position
from arena_core.config import ArenaConfig
from arena_core.levels.factories import add_enemy
from arena_core.systems.steering import (
    local_avoidance,
    path_fallback,
    respawn_system,
    steer,
    steering_system,
)
from arena_core.utils.geometry import collides_any
from arena_core.utils.nav_grid import build_nav_grid
from tests.test_utils import boxed_in_obstacles, make_enemy_state


# Pocket open to the left: walls above, below and to the right of (100, 90).
POCKET = [
    Obstacle(40, 40, 100, 33),
    Obstacle(40, 107, 100, 33),
    Obstacle(115, 40, 25, 100),
]


def test_clear_line_of_sight_moves_exactly_speed_toward_target() -> None:
    state, _, enemy_id = make_enemy_state(
        enemy_pos=(100, 100), speed=3, player_pos=(400, 500)
    )
    state, respawn = steer(state, enemy_id, Position(400, 500))

    pos = state.position[enemy_id]
    assert not respawn
    assert (pos.x, pos.y) == pytest.approx((101.8, 102.4))
    assert math.hypot(pos.x - 100, pos.y - 100) == pytest.approx(3)
    assert state.enemy[enemy_id].stuck_ticks == 0


def test_first_sidestep_when_direct_blocked() -> None:
    wall = [Obstacle(112, 50, 20, 100)]
    new_pos = local_avoidance(Position(100, 100), 10, Position(300, 100), 2, wall)
    assert new_pos == Position(100, 102)


def test_second_sidestep_when_first_blocked() -> None:
    walls = [Obstacle(112, 50, 20, 100), Obstacle(50, 111, 100, 10)]
    new_pos = local_avoidance(Position(100, 100), 10, Position(300, 100), 2, walls)
    assert new_pos == Position(100, 98)


def test_local_avoidance_fails_when_boxed_in() -> None:
    walls = boxed_in_obstacles(100, 100)
    assert local_avoidance(Position(100, 100), 10, Position(400, 300), 2, walls) is None


def test_path_fallback_leaves_pocket() -> None:
    grid = build_nav_grid(POCKET, 36, 800, 600)
    assert local_avoidance(Position(100, 90), 14, Position(300, 90), 4, POCKET) is None

    new_pos = path_fallback(Position(100, 90), 14, Position(300, 90), 4, POCKET, grid)
    assert new_pos is not None
    # Next waypoint is the centre of cell (1, 2) at (54, 90).
    assert (new_pos.x, new_pos.y) == pytest.approx((96, 90))


def test_path_fallback_without_path_returns_none() -> None:
    walls = boxed_in_obstacles(100, 100)
    grid = build_nav_grid(walls, 36, 800, 600)
    new_pos = path_fallback(Position(100, 100), 10, Position(400, 300), 2, walls, grid)
    assert new_pos is None


def test_steer_uses_path_fallback_and_resets_stuck_ticks() -> None:
    state, _, enemy_id = make_enemy_state(
        enemy_pos=(100, 90),
        speed=4,
        radius=14,
        player_pos=(300, 90),
        obstacles=POCKET,
    )
    enemy = replace(state.enemy[enemy_id], stuck_ticks=7)
    state = replace(state, enemy=state.enemy.set(enemy_id, enemy))
    assert state.nav_grid is None

    state, respawn = steer(state, enemy_id, Position(300, 90))

    assert not respawn
    assert state.nav_grid is not None
    assert state.enemy[enemy_id].stuck_ticks == 0
    pos = state.position[enemy_id]
    assert (pos.x, pos.y) == pytest.approx((96, 90))


def test_boxed_in_enemy_requests_respawn_exactly_at_threshold() -> None:
    state, _, enemy_id = make_enemy_state(
        enemy_pos=(100, 100), speed=2, obstacles=boxed_in_obstacles(100, 100)
    )
    target = Position(400, 300)

    for tick in range(1, 180):
        state, respawn = steer(state, enemy_id, target)
        assert not respawn, f"Respawn requested early at tick {tick}"
        assert state.enemy[enemy_id].stuck_ticks == tick
        assert state.position[enemy_id] == Position(100, 100)
        assert enemy_id not in state.respawn_requests

    state, respawn = steer(state, enemy_id, target)
    assert respawn
    assert state.enemy[enemy_id].stuck_ticks == 0
    assert enemy_id in state.respawn_requests

    state, respawn = steer(state, enemy_id, target)
    assert not respawn
    assert state.enemy[enemy_id].stuck_ticks == 1


def test_stuck_threshold_comes_from_config() -> None:
    state, _, enemy_id = make_enemy_state(
        enemy_pos=(100, 100),
        speed=2,
        obstacles=boxed_in_obstacles(100, 100),
        config=ArenaConfig(stuck_threshold=3),
    )
    flags = []
    for _ in range(6):
        state, respawn = steer(state, enemy_id, Position(400, 300))
        flags.append(respawn)
    assert flags == [False, False, True, False, False, True]


def test_position_is_clamped_to_world() -> None:
    state, _, enemy_id = make_enemy_state(enemy_pos=(15, 300), speed=10)
    state, _ = steer(state, enemy_id, Position(-100, 300))
    assert state.position[enemy_id] == Position(10, 300)


# Wall running in from the left edge, level with an enemy waiting outside it.
EDGE_WALL = [Obstacle(0, 280, 300, 32)]


def test_local_avoidance_tests_the_clamped_candidate() -> None:
    pos, target = Position(-20, 296), Position(400, 296)

    unbounded = local_avoidance(pos, 16, target, 2, EDGE_WALL)
    assert unbounded == Position(-18, 296)

    assert local_avoidance(pos, 16, target, 2, EDGE_WALL, bounds=(800, 600)) is None


def test_enemy_outside_edge_is_never_pulled_into_wall() -> None:
    state, _, enemy_id = make_enemy_state(
        enemy_pos=(-20, 296),
        speed=2,
        radius=16,
        player_pos=(400, 296),
        obstacles=EDGE_WALL,
    )

    state, _ = steer(state, enemy_id, Position(400, 296))

    pos = state.position[enemy_id]
    assert not collides_any(EDGE_WALL, pos.x, pos.y, 16)
    assert pos == Position(-20, 296)
    assert state.enemy[enemy_id].stuck_ticks == 1


def test_clamped_step_is_committed_when_clear() -> None:
    state, _, enemy_id = make_enemy_state(
        enemy_pos=(-20, 200), speed=2, radius=16, obstacles=EDGE_WALL
    )
    state, _ = steer(state, enemy_id, Position(400, 200))
    pos = state.position[enemy_id]
    assert pos == Position(16, 200)
    assert not collides_any(EDGE_WALL, pos.x, pos.y, 16)

def test_steering_system_moves_every_enemy_toward_player() -> None:
    state, player_id, first = make_enemy_state(
        enemy_pos=(100, 300), speed=2, player_pos=(400, 300)
    )
    state, second = add_enemy(state, Position(700, 300), speed=5)

    state = steering_system(state)

    assert state.position[first] == Position(102, 300)
    assert state.position[second] == Position(695, 300)
    assert state.position[player_id] == Position(400, 300)


def test_respawn_system_moves_requested_enemies_to_edge() -> None:
    state, _, enemy_id = make_enemy_state(enemy_pos=(100, 100), speed=2)
    state = replace(state, respawn_requests=state.respawn_requests.add(enemy_id))

    state = respawn_system(state)

    pos = state.position[enemy_id]
    assert not state.respawn_requests
    assert pos.x in (-20, 820) or pos.y in (-20, 620)


def test_respawn_system_is_deterministic_for_seed() -> None:
    state, _, enemy_id = make_enemy_state(enemy_pos=(100, 100), speed=2)
    state = replace(state, respawn_requests=state.respawn_requests.add(enemy_id))
    assert respawn_system(state).position == respawn_system(state).position
