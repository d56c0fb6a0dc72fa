"""Navigation grid derived from the wall rectangles.

The grid is a coarse occupancy map over the world: ``open[col, row]`` is
``True`` when an agent may pass through that cell. A cell is blocked if its
centre lies within ``cell_size * block_ratio`` of any obstacle.

The grid is a cached artifact of ``State.obstacles``. It is stored on the
state as ``nav_grid`` and set to ``None`` whenever walls change
(:func:`set_obstacles`); :func:`ensure_nav_grid` rebuilds it on the first
query after that.
"""

import logging
import math
from dataclasses import dataclass, replace
from typing import Iterable, Tuple, TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from pyrsistent import pvector

from arena_core.components import Obstacle
from arena_core.types import Cell
from arena_core.utils.geometry import rect_circle_collide

if TYPE_CHECKING:
    from arena_core.state import State

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class NavGrid:
    """Traversability grid.

    Attributes:
        cell_size: Cell edge length in world units.
        cols: Number of columns (``ceil(width / cell_size)``).
        rows: Number of rows (``ceil(height / cell_size)``).
        open: Read-only boolean array of shape ``(cols, rows)``.
    """

    cell_size: float
    cols: int
    rows: int
    open: npt.NDArray[np.bool_]

    def is_open(self, cell: Cell) -> bool:
        col, row = cell
        return 0 <= col < self.cols and 0 <= row < self.rows and bool(
            self.open[col, row]
        )


def build_nav_grid(
    obstacles: Iterable[Obstacle],
    cell_size: float,
    world_width: float,
    world_height: float,
    block_ratio: float = 0.45,
) -> NavGrid:
    """Compute the traversability grid for ``obstacles``.

    Building twice from the same obstacles yields identical grids; a world
    with no obstacles is fully open.

    Raises:
        ValueError: If ``cell_size`` or the world size is not positive.
    """
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive: {cell_size}")
    if world_width <= 0 or world_height <= 0:
        raise ValueError(f"Invalid world size: {world_width}x{world_height}")

    cols = math.ceil(world_width / cell_size)
    rows = math.ceil(world_height / cell_size)
    radius = cell_size * block_ratio
    walls = list(obstacles)

    grid = np.ones((cols, rows), dtype=bool)
    for col in range(cols):
        cx = col * cell_size + cell_size / 2
        for row in range(rows):
            cy = row * cell_size + cell_size / 2
            for wall in walls:
                if rect_circle_collide(wall, cx, cy, radius):
                    grid[col, row] = False
                    break
    grid.setflags(write=False)

    logger.debug(
        "Built %dx%d nav grid from %d obstacles (%d blocked cells)",
        cols,
        rows,
        len(walls),
        int(grid.size - grid.sum()),
    )
    return NavGrid(cell_size=cell_size, cols=cols, rows=rows, open=grid)


def world_to_cell(grid: NavGrid, x: float, y: float) -> Cell:
    """Map a world point to its cell, clamping points outside the world."""
    col = max(0, min(grid.cols - 1, math.floor(x / grid.cell_size)))
    row = max(0, min(grid.rows - 1, math.floor(y / grid.cell_size)))
    return col, row


def cell_center(grid: NavGrid, cell: Cell) -> tuple[float, float]:
    """World coordinates of the centre of ``cell``."""
    col, row = cell
    return (
        col * grid.cell_size + grid.cell_size / 2,
        row * grid.cell_size + grid.cell_size / 2,
    )


def set_obstacles(state: "State", obstacles: Iterable[Obstacle]) -> "State":
    """Replace the wall set and invalidate the cached grid."""
    return replace(state, obstacles=pvector(obstacles), nav_grid=None)


def ensure_nav_grid(state: "State") -> Tuple["State", NavGrid]:
    """Return ``state`` with a fresh ``nav_grid`` plus that grid.

    The grid is rebuilt only when stale; otherwise ``state`` is returned as is.
    """
    if state.nav_grid is not None:
        return state, state.nav_grid
    grid = build_nav_grid(
        state.obstacles,
        state.config.cell_size,
        state.width,
        state.height,
        state.config.cell_block_ratio,
    )
    return replace(state, nav_grid=grid), grid
