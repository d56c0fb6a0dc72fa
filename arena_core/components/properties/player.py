"""Player marker component.

Presence of :class:`Player` designates the subject that enemies chase and
that power-ups modify. Only one player is expected; systems pick the first.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Player:
    """Marker (no fields)."""

    pass
