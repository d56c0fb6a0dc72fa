"""Property component aggregates.

Stable attributes of arena entities (position, collision body, enemy
steering state, player stats, pickups) plus the wall rectangles. All
properties are immutable dataclasses; systems replace them to express change.
Temporary modifiers live in the sibling :mod:`arena_core.components.effects`
package.
"""

from .body import Body
from .enemy import Enemy
from .obstacle import Obstacle
from .pickup import Pickup
from .player import Player
from .position import Position
from .stats import Stats

__all__ = [
    "Body",
    "Enemy",
    "Obstacle",
    "Pickup",
    "Player",
    "Position",
    "Stats",
]
