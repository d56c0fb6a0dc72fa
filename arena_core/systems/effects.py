"""Effect lifecycle system.

Ages every active effect by one tick and reverts those that run out. The
revert for each expired kind runs exactly once, in kind order, after which
the entry is removed from ``State.effects``.
"""

from dataclasses import replace

from arena_core.components import ActiveEffect
from arena_core.state import State
from arena_core.utils.effects import revert_effect


def tick_effect(effect: ActiveEffect) -> ActiveEffect:
    """Return ``effect`` with one fewer remaining tick."""
    return replace(effect, remaining=effect.remaining - 1)


def effect_tick_system(state: State) -> State:
    """Decrement all effects and revert the expired ones."""
    if not state.effects:
        return state

    effects = state.effects
    expired = []
    for kind, effect in effects.items():
        effect = tick_effect(effect)
        effects = effects.set(kind, effect)
        if effect.remaining <= 0:
            expired.append(kind)

    state = replace(state, effects=effects)
    for kind in sorted(expired):
        state = revert_effect(state, kind)
    return state
