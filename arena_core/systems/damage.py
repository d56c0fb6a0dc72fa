"""Contact damage.

An enemy whose body overlaps the player's costs the player one health unless
the ``invincible`` effect is active or the player is still inside the brief
``hit_invincible`` window left by a previous hit. Each hit restarts that
window at ``config.hit_invincibility`` ticks; the window then shrinks by one
every tick. Dropping to zero health sets ``State.lose``.
"""

import logging
from dataclasses import replace

from arena_core.components import Stats
from arena_core.state import State
from arena_core.utils.ecs import enemy_ids, get_player_id
from arena_core.utils.geometry import circles_overlap

logger = logging.getLogger(__name__)


def is_damageable(stats: Stats) -> bool:
    return not stats.invincible and stats.hit_invincible <= 0


def take_hit(stats: Stats, immunity: int) -> Stats:
    """One point of damage followed by ``immunity`` ticks of protection."""
    return replace(stats, health=max(0, stats.health - 1), hit_invincible=immunity)


def contact_damage_system(state: State) -> State:
    """Apply enemy contact damage to the player and age the hit window."""
    player_id = get_player_id(state)
    if state.lose or player_id is None or player_id not in state.stats:
        return state
    player_pos = state.position.get(player_id)
    if player_pos is None:
        return state
    player_radius = state.body[player_id].radius if player_id in state.body else 0
    stats = state.stats[player_id]
    lose = False

    for enemy_id in enemy_ids(state):
        pos = state.position.get(enemy_id)
        if pos is None:
            continue
        radius = state.body[enemy_id].radius if enemy_id in state.body else 0
        if not circles_overlap(player_pos, player_radius, pos, radius):
            continue
        if not is_damageable(stats):
            continue
        stats = take_hit(stats, state.config.hit_invincibility)
        logger.debug("Enemy %d hit the player; health %d", enemy_id, stats.health)
        if stats.health <= 0:
            logger.info("Player died at turn %d", state.turn)
            lose = True
            break

    if stats.hit_invincible > 0:
        stats = replace(stats, hit_invincible=stats.hit_invincible - 1)
    if stats == state.stats[player_id] and not lose:
        return state
    return replace(state, stats=state.stats.set(player_id, stats), lose=lose)
