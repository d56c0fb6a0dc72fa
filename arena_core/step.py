"""State reducer and tick orchestration.

This module wires together all systems in the correct order to implement a
single fixed-timestep *tick*. The exported :func:`step` is the only public
progression entry point and is pure: it returns a *new*
:class:`arena_core.state.State`.

Ordering (high level):

1. ``wall_system`` counts down and, when due, replaces the walls (which
    invalidates the navigation grid).
2. ``steering_system`` moves every enemy toward the player, queueing stuck
    enemies for respawn.
3. ``respawn_system`` relocates queued enemies to a world edge.
4. ``contact_damage_system`` hurts the player on enemy contact and may set
    ``lose``.
5. ``pickup_system`` applies power-ups the player is touching.
6. ``effect_tick_system`` ages active effects and reverts expired ones.
7. ``spawn_system`` adds a new enemy when its timer runs out.
8. The tick counter is bumped.

A state that has already lost is returned unchanged.

Contact damage runs before the effect tick, so an ``invincible`` effect still
protects the player on the tick it expires.
"""

from dataclasses import replace

from pyrsistent import pmap, pset

from arena_core.components import Position
from arena_core.levels.factories import baseline_stats
from arena_core.state import State
from arena_core.systems.damage import contact_damage_system
from arena_core.systems.effects import effect_tick_system
from arena_core.systems.pickup import pickup_system
from arena_core.systems.spawn import spawn_initial_enemies, spawn_system
from arena_core.systems.steering import respawn_system, steering_system
from arena_core.systems.walls import respawn_walls, wall_system
from arena_core.types import EffectKind
from arena_core.utils.ecs import require_player_id
from arena_core.utils.effects import apply_effect, revert_all_effects
from arena_core.utils.gc import remove_entities


def step(state: State) -> State:
    """Advance the arena by one tick.

    Args:
        state (State): Previous immutable world state.

    Returns:
        State: Next state snapshot, or ``state`` itself once it has lost.
    """
    if state.lose:
        return state
    state = wall_system(state)
    state = steering_system(state)
    state = respawn_system(state)
    state = contact_damage_system(state)
    state = pickup_system(state)
    state = effect_tick_system(state)
    state = spawn_system(state)
    return replace(state, turn=state.turn + 1)


def reset_state(state: State) -> State:
    """Restart the run while keeping the player entity and configuration.

    Reverts every active effect, removes enemies and pickups, restores the
    player's baseline stats at the arena centre, lays down fresh walls,
    grants a short invincibility window and spawns the opening enemies.

    Raises:
        ValueError: If the state contains no player.
    """
    state = revert_all_effects(state)
    state = remove_entities(
        state, list(state.enemy.keys()) + list(state.pickup.keys())
    )

    player_id = require_player_id(state)
    centre = Position(state.width / 2, state.height / 2)
    state = replace(
        state,
        position=state.position.set(player_id, centre),
        stats=state.stats.set(player_id, baseline_stats(state.config)),
        effects=pmap(),
        respawn_requests=pset(),
        score=0,
        lose=False,
        enemy_spawn_timer=state.config.enemy_spawn_interval,
    )
    state = respawn_walls(state)
    state = apply_effect(
        state, EffectKind.INVINCIBLE, state.config.reset_invincibility
    )
    return spawn_initial_enemies(state)
