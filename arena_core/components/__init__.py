"""arena_core.components
=======================

Aggregate import surface for all component dataclasses used by the engine::

    from arena_core.components import Position, Enemy, Obstacle

All component classes are frozen ``@dataclass`` value objects with no
behaviour; systems transform them between ticks.
"""

# Effects
from .effects import ActiveEffect

# Properties
from .properties import Body
from .properties import Enemy
from .properties import Obstacle
from .properties import Pickup
from .properties import Player
from .properties import Position
from .properties import Stats

__all__ = [
    # Effects
    "ActiveEffect",
    # Properties
    "Body",
    "Enemy",
    "Obstacle",
    "Pickup",
    "Player",
    "Position",
    "Stats",
]
