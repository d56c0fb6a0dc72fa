"""Player stats component.

Holds every value an effect may mutate. Effects never store their own copy
of these values; each kind's revert is the inverse of its apply (see
:mod:`arena_core.utils.effects`).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Stats:
    """Mutable-by-replacement player statistics.

    Attributes:
        speed: Movement per tick.
        fire_rate: Fire rate modifier (1 = normal, 2 = rapid).
        bullet_damage: Damage per bullet. Never drops below 1.
        health: Current hit points, clamped to ``[0, max_health]``.
        max_health: Upper bound for ``health``.
        omni_shot, tri_shot, boomerang, half_omni, laser, charge,
        invincible, bombs, sword, knives: Weapon / defence mode flags.
        hit_invincible: Ticks left of the short immunity that follows a
            contact hit.
    """

    speed: float = 4
    fire_rate: int = 1
    bullet_damage: int = 1
    health: int = 3
    max_health: int = 3
    omni_shot: bool = False
    tri_shot: bool = False
    boomerang: bool = False
    half_omni: bool = False
    laser: bool = False
    charge: bool = False
    invincible: bool = False
    bombs: bool = False
    sword: bool = False
    knives: bool = False
    hit_invincible: int = 0
