"""Enemy component.

Marks an entity as a steering agent that converges on the player each tick.
``stuck_ticks`` counts consecutive ticks in which every movement attempt
(direct, both sidesteps, path fallback) failed; it is owned by the steering
system.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Enemy:
    """Steering agent.

    Attributes:
        speed: Maximum distance travelled per tick.
        stuck_ticks: Consecutive ticks without any successful move.
    """

    speed: float
    stuck_ticks: int = 0
