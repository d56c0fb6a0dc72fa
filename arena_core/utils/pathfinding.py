"""A* search on the navigation grid.

Movement is 4-connected with unit step cost and the Manhattan distance as
heuristic, so returned paths are shortest under that metric. The open set is a
binary heap ordered by ``(f, g, insertion order)``; stale heap entries are
skipped via the closed set.

Public API
----------
``find_path(grid, sx, sy, tx, ty)`` -> ``list[Cell]`` or ``None``

``None`` means no path: the start or goal cell is blocked, or the goal is
unreachable. A start and goal in the same open cell yield ``[start]``.
"""

import heapq
import itertools
import logging
from typing import Dict, List, Optional, Set, Tuple

from arena_core.types import Cell
from arena_core.utils.nav_grid import NavGrid, world_to_cell

logger = logging.getLogger(__name__)

_DIRS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def manhattan(a: Cell, b: Cell) -> int:
    """Manhattan distance between two cells."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def find_path(
    grid: NavGrid,
    start_x: float,
    start_y: float,
    target_x: float,
    target_y: float,
) -> Optional[List[Cell]]:
    """Shortest cell path between two world points.

    Points outside the world are clamped to the nearest cell.

    Args:
        grid: Navigation grid to search.
        start_x, start_y: Start point in world units.
        target_x, target_y: Goal point in world units.

    Returns:
        Cells from start to goal inclusive, or ``None`` if no path exists.
    """
    start = world_to_cell(grid, start_x, start_y)
    goal = world_to_cell(grid, target_x, target_y)
    return find_cell_path(grid, start, goal)


def find_cell_path(grid: NavGrid, start: Cell, goal: Cell) -> Optional[List[Cell]]:
    """A* between two cells already known to be inside the grid."""
    if not grid.is_open(start) or not grid.is_open(goal):
        logger.debug("No path: endpoint blocked (start=%s, goal=%s)", start, goal)
        return None

    counter = itertools.count()
    open_heap: List[Tuple[int, int, int, Cell]] = [
        (manhattan(start, goal), 0, next(counter), start)
    ]
    g_score: Dict[Cell, int] = {start: 0}
    came_from: Dict[Cell, Cell] = {}
    closed: Set[Cell] = set()

    while open_heap:
        _f, g, _order, node = heapq.heappop(open_heap)
        if node in closed:
            continue
        closed.add(node)

        if node == goal:
            path = [node]
            while node in came_from:
                node = came_from[node]
                path.append(node)
            path.reverse()
            return path

        for dc, dr in _DIRS:
            neighbor = (node[0] + dc, node[1] + dr)
            if neighbor in closed or not grid.is_open(neighbor):
                continue
            new_g = g + 1
            if new_g < g_score.get(neighbor, new_g + 1):
                g_score[neighbor] = new_g
                came_from[neighbor] = node
                heapq.heappush(
                    open_heap,
                    (new_g + manhattan(neighbor, goal), new_g, next(counter), neighbor),
                )

    logger.debug("No path: %s unreachable from %s", goal, start)
    return None
