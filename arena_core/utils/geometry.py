"""Collision and vector helpers.

Pure predicates used by the steering, pickup and wall systems. Functions here
are intentionally lightweight to keep per-tick loops fast.
"""

import math
from typing import Iterable, Optional, Tuple

from arena_core.components import Obstacle, Position


def rect_circle_collide(
    rect: Obstacle, cx: float, cy: float, radius: float
) -> bool:
    """Return True if the circle touches or overlaps ``rect``.

    Uses the closest point on the rectangle to the circle centre; touching
    (distance equal to the radius) counts as a collision.
    """
    closest_x = max(rect.x, min(cx, rect.x + rect.width))
    closest_y = max(rect.y, min(cy, rect.y + rect.height))
    dx = cx - closest_x
    dy = cy - closest_y
    return dx * dx + dy * dy <= radius * radius


def collides_any(
    obstacles: Iterable[Obstacle], cx: float, cy: float, radius: float
) -> bool:
    """Return True if the circle collides with any obstacle (overlaps allowed)."""
    return any(rect_circle_collide(o, cx, cy, radius) for o in obstacles)


def circles_overlap(a: Position, ra: float, b: Position, rb: float) -> bool:
    """Return True if two circles strictly overlap."""
    return math.hypot(a.x - b.x, a.y - b.y) < ra + rb


def direction_to(
    origin: Position, target: Position
) -> Optional[Tuple[float, float]]:
    """Unit vector from ``origin`` toward ``target``; ``None`` if they coincide."""
    dx = target.x - origin.x
    dy = target.y - origin.y
    dist = math.hypot(dx, dy)
    if dist == 0:
        return None
    return dx / dist, dy / dist


def perpendiculars(
    vec: Tuple[float, float],
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Return ``vec`` turned by +90 and -90 degrees, in that order."""
    return (-vec[1], vec[0]), (vec[1], -vec[0])


def clamp_position(
    pos: Position, radius: float, width: float, height: float
) -> Position:
    """Clamp a circle centre so the circle stays inside the world rectangle."""
    x = max(radius, min(width - radius, pos.x))
    y = max(radius, min(height - radius, pos.y))
    return Position(x, y)
