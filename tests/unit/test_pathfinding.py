# tests/unit/test_pathfinding.py

import random

import numpy as np
import pytest

from arena_core.utils.nav_grid import NavGrid, build_nav_grid, cell_center
from arena_core.utils.pathfinding import find_cell_path, find_path, manhattan
from tests.test_utils import (
    GAP_WALL,
    assert_valid_path,
    bfs_distance,
    grid_from_rows,
)


def random_grid(seed: int, cols: int = 8, rows: int = 8) -> NavGrid:
    rng = np.random.default_rng(seed)
    open_cells = rng.random((cols, rows)) > 0.3
    return NavGrid(cell_size=1, cols=cols, rows=rows, open=open_cells)


@pytest.mark.parametrize("seed", range(25))
def test_path_length_matches_bfs_on_random_grids(seed: int) -> None:
    grid = random_grid(seed)
    rng = random.Random(seed)
    open_cells = [
        (c, r) for c in range(grid.cols) for r in range(grid.rows) if grid.open[c, r]
    ]
    for _ in range(10):
        start = rng.choice(open_cells)
        goal = rng.choice(open_cells)
        expected = bfs_distance(grid, start, goal)
        path = find_cell_path(grid, start, goal)
        if expected is None:
            assert path is None
        else:
            assert path is not None
            assert_valid_path(grid, path, start, goal)
            assert len(path) - 1 == expected


def test_path_around_wall_through_gap() -> None:
    grid = build_nav_grid([GAP_WALL], 36, 360, 360)
    assert (grid.cols, grid.rows) == (10, 10)
    assert all(not grid.is_open((5, row)) for row in range(9))
    assert grid.is_open((5, 9))

    sx, sy = cell_center(grid, (0, 0))
    tx, ty = cell_center(grid, (9, 0))
    path = find_path(grid, sx, sy, tx, ty)

    assert path is not None
    assert (5, 9) in path
    assert_valid_path(grid, path, (0, 0), (9, 0))
    # 9 down, 9 across, 9 up.
    assert len(path) - 1 == 27
    assert len(path) - 1 == bfs_distance(grid, (0, 0), (9, 0))


def test_blocked_start_returns_none() -> None:
    grid = grid_from_rows(
        [
            "#...",
            "....",
        ]
    )
    assert find_cell_path(grid, (0, 0), (3, 1)) is None


def test_blocked_goal_returns_none() -> None:
    grid = grid_from_rows(
        [
            "....",
            "...#",
        ]
    )
    assert find_cell_path(grid, (0, 0), (3, 1)) is None


def test_unreachable_goal_returns_none() -> None:
    grid = grid_from_rows(
        [
            "..#..",
            "..#..",
            "..#..",
        ]
    )
    assert find_cell_path(grid, (0, 0), (4, 2)) is None


def test_start_equals_goal_is_single_cell_path() -> None:
    grid = grid_from_rows(["..."])
    assert find_cell_path(grid, (1, 0), (1, 0)) == [(1, 0)]


def test_no_path_is_distinct_from_already_at_goal() -> None:
    grid = grid_from_rows([".#."])
    assert find_cell_path(grid, (0, 0), (0, 0)) == [(0, 0)]
    assert find_cell_path(grid, (0, 0), (2, 0)) is None


def test_out_of_bounds_points_are_clamped() -> None:
    grid = build_nav_grid([], 36, 360, 360)
    path = find_path(grid, -500, -500, 10_000, 10_000)
    assert path is not None
    assert path[0] == (0, 0)
    assert path[-1] == (9, 9)
    assert len(path) - 1 == 18


def test_no_diagonal_moves() -> None:
    grid = grid_from_rows(
        [
            "...",
            "...",
            "...",
        ]
    )
    path = find_cell_path(grid, (0, 0), (2, 2))
    assert path is not None
    assert len(path) == 5
    assert_valid_path(grid, path, (0, 0), (2, 2))


def test_manhattan() -> None:
    assert manhattan((0, 0), (3, 4)) == 7
    assert manhattan((5, 2), (1, 2)) == 4
