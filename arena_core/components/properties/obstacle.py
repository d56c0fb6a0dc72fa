"""Obstacle (wall) component.

Axis-aligned rectangles stored in ``State.obstacles``. Obstacles may overlap;
collision helpers test each one independently.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Obstacle:
    """Axis-aligned rectangle.

    Attributes:
        x: Left edge.
        y: Top edge.
        width: Horizontal extent.
        height: Vertical extent.
    """

    x: float
    y: float
    width: float
    height: float
