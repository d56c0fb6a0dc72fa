"""ECS convenience queries."""

from typing import List, Optional

from arena_core.state import State
from arena_core.types import EntityID


def get_player_id(state: State) -> Optional[EntityID]:
    """Return the first player entity id, or ``None`` if there is none."""
    return next(iter(state.player.keys()), None)


def require_player_id(state: State) -> EntityID:
    """Return the player entity id.

    Raises:
        ValueError: If the state contains no player.
    """
    player_id = get_player_id(state)
    if player_id is None:
        raise ValueError("State contains no player")
    return player_id


def enemy_ids(state: State) -> List[EntityID]:
    """Enemy ids in ascending order, so systems iterate deterministically."""
    return sorted(state.enemy.keys())
