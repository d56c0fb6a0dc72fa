"""Effect components.

Only :class:`ActiveEffect` lives here: the record of a timed power-up held by
the player. The stat mutations themselves are described by the effect table
in :mod:`arena_core.utils.effects`.
"""

from .active_effect import ActiveEffect

__all__ = ["ActiveEffect"]
