from collections import deque
from typing import Iterable, Optional, Tuple

import numpy as np

from arena_core.components import Obstacle, Position
from arena_core.config import ArenaConfig, DEFAULT_CONFIG
from arena_core.levels.factories import add_enemy, add_player, make_world
from arena_core.state import State
from arena_core.types import Cell, EntityID
from arena_core.utils.nav_grid import NavGrid


def make_arena_state(
    *,
    player_pos: Tuple[float, float] = (400, 300),
    obstacles: Iterable[Obstacle] = (),
    width: float = 800,
    height: float = 600,
    config: ArenaConfig = DEFAULT_CONFIG,
    seed: Optional[int] = 0,
) -> tuple[State, EntityID]:
    """Arena with a single player and the given walls."""
    state = make_world(width, height, config=config, obstacles=obstacles, seed=seed)
    return add_player(state, Position(*player_pos))


def make_enemy_state(
    *,
    enemy_pos: Tuple[float, float],
    speed: float,
    radius: float = 10,
    player_pos: Tuple[float, float] = (400, 300),
    obstacles: Iterable[Obstacle] = (),
    config: ArenaConfig = DEFAULT_CONFIG,
) -> tuple[State, EntityID, EntityID]:
    """Arena with a player and one enemy. Returns state, player_id, enemy_id."""
    state, player_id = make_arena_state(
        player_pos=player_pos, obstacles=obstacles, config=config
    )
    state, enemy_id = add_enemy(state, Position(*enemy_pos), speed=speed, radius=radius)
    return state, player_id, enemy_id


def grid_from_rows(rows: list[str]) -> NavGrid:
    """Unit-size grid from ASCII rows ('#' blocked, anything else open)."""
    open_cells = np.array(
        [[ch != "#" for ch in row] for row in rows], dtype=bool
    ).T.copy()
    return NavGrid(
        cell_size=1, cols=open_cells.shape[0], rows=open_cells.shape[1], open=open_cells
    )


def bfs_distance(grid: NavGrid, start: Cell, goal: Cell) -> Optional[int]:
    """Brute-force 4-connected step count, ``None`` if unreachable."""
    if not grid.is_open(start) or not grid.is_open(goal):
        return None
    seen = {start: 0}
    queue = deque([start])
    while queue:
        cell = queue.popleft()
        if cell == goal:
            return seen[cell]
        for dc, dr in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nxt = (cell[0] + dc, cell[1] + dr)
            if nxt not in seen and grid.is_open(nxt):
                seen[nxt] = seen[cell] + 1
                queue.append(nxt)
    return None


def assert_valid_path(grid: NavGrid, path: list[Cell], start: Cell, goal: Cell) -> None:
    """Check endpoints, adjacency and traversability of a cell path."""
    assert path[0] == start
    assert path[-1] == goal
    for cell in path:
        assert grid.is_open(cell), f"Path crosses blocked cell {cell}"
    for a, b in zip(path, path[1:]):
        assert abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1, f"{a} -> {b} is not a step"


# 10x10 cells of 36 units; a wall fills column 5 on rows 0-8, leaving row 9 open.
GAP_WALL = Obstacle(190, 0, 16, 304)


def boxed_in_obstacles(x: float, y: float) -> list[Obstacle]:
    """Four thin walls leaving a radius-10 circle at (x, y) one unit of play."""
    return [
        Obstacle(x + 11, y - 20, 4, 40),
        Obstacle(x - 15, y - 20, 4, 40),
        Obstacle(x - 20, y - 15, 40, 4),
        Obstacle(x - 20, y + 11, 40, 4),
    ]
