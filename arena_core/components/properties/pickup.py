from dataclasses import dataclass

from arena_core.types import EffectKind


@dataclass(frozen=True)
class Pickup:
    """Power-up lying in the arena, consumed when the player touches it.

    Attributes:
        kind: Effect granted on pickup.
        duration: Ticks the effect lasts (ignored for instant kinds).
    """

    kind: EffectKind
    duration: int
