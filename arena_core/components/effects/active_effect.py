from dataclasses import dataclass

from arena_core.types import EffectKind


@dataclass(frozen=True)
class ActiveEffect:
    """A timed modifier currently applied to the player.

    The effect system decrements ``remaining`` each tick; when it reaches zero
    the kind's revert runs and the entry is removed.

    Attributes:
        kind: Which effect is active.
        remaining: Number of future ticks for which the effect still holds.
    """

    kind: EffectKind
    remaining: int
