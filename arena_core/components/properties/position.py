"""Position component.

World coordinates of an entity's centre, in world units (not grid cells).
Stored in ``State.position`` keyed by entity id.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """World coordinate.

    Attributes:
        x: Horizontal offset from the left edge.
        y: Vertical offset from the top edge.
    """

    x: float
    y: float
