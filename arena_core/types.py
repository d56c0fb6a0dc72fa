"""Common type aliases and enumerations.

``EffectKind`` names every power-up the player can receive. Timed kinds are
tracked in ``State.effects`` until they expire; instant kinds take effect
once and are never tracked.
"""

from enum import StrEnum, auto
from typing import Tuple


EntityID = int

Cell = Tuple[int, int]
"""Navigation grid coordinate ``(column, row)``."""


class EffectKind(StrEnum):
    """Power-up kinds (values match the names used in level data)."""

    OMNI = auto()
    RAPID = auto()
    DAMAGE = auto()
    TRISHOT = auto()
    BOOMERANG = auto()
    SPEED = auto()
    HALFOMNI = auto()
    LASER = auto()
    CHARGE = auto()
    INVINCIBLE = auto()
    BOMBS = auto()
    SWORD = auto()
    KNIVES = auto()
    DASH_DAMAGE = auto()
    HEAL = auto()
    NUKE = auto()


INSTANT_EFFECTS = frozenset({EffectKind.HEAL, EffectKind.NUKE})
