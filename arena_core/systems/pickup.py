"""Power-up pickup system.

When the player's body overlaps a ``Pickup`` the pickup is consumed and its
effect applied through :func:`arena_core.utils.effects.apply_effect`, which
resolves duplicates by extending the active effect.
"""

from arena_core.levels.factories import PICKUP_RADIUS
from arena_core.state import State
from arena_core.utils.ecs import get_player_id
from arena_core.utils.effects import apply_effect
from arena_core.utils.gc import remove_entities
from arena_core.utils.geometry import circles_overlap


def pickup_system(state: State) -> State:
    """Consume every pickup touched by the player this tick."""
    player_id = get_player_id(state)
    if player_id is None or player_id not in state.position:
        return state
    player_pos = state.position[player_id]
    player_radius = state.body[player_id].radius if player_id in state.body else 0

    touched = []
    for pickup_id in sorted(state.pickup.keys()):
        pos = state.position.get(pickup_id)
        if pos is None:
            continue
        radius = (
            state.body[pickup_id].radius if pickup_id in state.body else PICKUP_RADIUS
        )
        if circles_overlap(player_pos, player_radius, pos, radius):
            touched.append(pickup_id)

    if not touched:
        return state

    pickups = [state.pickup[pid] for pid in touched]
    state = remove_entities(state, touched)
    for pickup in pickups:
        duration = pickup.duration or state.config.default_effect_duration
        state = apply_effect(state, pickup.kind, duration)
    return state
