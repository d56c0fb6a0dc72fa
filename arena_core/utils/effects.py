"""Effect table and application helpers.

Every timed :class:`arena_core.types.EffectKind` maps to an
:class:`EffectSpec`: a pair of pure ``Stats -> Stats`` functions where
``revert`` undoes ``apply``. Numeric reverts clamp to the effect's ``floor`` so
an out-of-order revert can never push a stat below its baseline. The table is
validated at import time.

Lifecycle invariants:

* The first :func:`apply_effect` for a kind runs ``apply`` exactly once and
  records an :class:`ActiveEffect`.
* Applying a kind that is already active only extends its remaining duration
  (capped at ``config.max_effect_duration``); ``apply`` is not run again.
* ``revert`` runs exactly once per recorded effect: on expiry
  (:func:`arena_core.systems.effects.effect_tick_system`) or on
  :func:`revert_all_effects`.

Instant kinds (``heal``, ``nuke``) act on the world once and are never
recorded.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Mapping, Optional

from arena_core.components import ActiveEffect, Stats
from arena_core.state import State
from arena_core.types import EffectKind, INSTANT_EFFECTS
from arena_core.utils.ecs import require_player_id
from arena_core.utils.gc import remove_entities

logger = logging.getLogger(__name__)

StatsFn = Callable[[Stats], Stats]
InstantFn = Callable[[State], State]

NUKE_SCORE = 5


class EffectRegistryError(ValueError):
    """Raised when the effect table is missing a kind or half of a pair."""


@dataclass(frozen=True)
class EffectSpec:
    """Inverse mutation pair for one effect kind.

    Attributes:
        apply: Mutation run when the effect starts.
        revert: Inverse mutation run when the effect ends.
        floor: Lowest value ``revert`` may leave on the mutated stat, for
            numeric effects.
    """

    apply: StatsFn
    revert: StatsFn
    floor: Optional[float] = None


def flag_effect(name: str) -> EffectSpec:
    """Effect that switches a boolean stat on, and off again on revert."""
    return EffectSpec(
        apply=lambda s: replace(s, **{name: True}),
        revert=lambda s: replace(s, **{name: False}),
    )


def additive_effect(name: str, amount: float, floor: float) -> EffectSpec:
    """Effect that adds ``amount`` to a stat and subtracts it on revert."""
    return EffectSpec(
        apply=lambda s: replace(s, **{name: getattr(s, name) + amount}),
        revert=lambda s: replace(s, **{name: max(floor, getattr(s, name) - amount)}),
        floor=floor,
    )


def set_effect(name: str, value: float, baseline: float) -> EffectSpec:
    """Effect that sets a stat to ``value`` and restores ``baseline``."""
    return EffectSpec(
        apply=lambda s: replace(s, **{name: value}),
        revert=lambda s: replace(s, **{name: baseline}),
        floor=baseline,
    )


EFFECT_REGISTRY: Mapping[EffectKind, EffectSpec] = {
    EffectKind.OMNI: flag_effect("omni_shot"),
    EffectKind.RAPID: set_effect("fire_rate", 2, baseline=1),
    EffectKind.DAMAGE: additive_effect("bullet_damage", 1, floor=1),
    EffectKind.TRISHOT: flag_effect("tri_shot"),
    EffectKind.BOOMERANG: flag_effect("boomerang"),
    EffectKind.SPEED: additive_effect("speed", 2, floor=1),
    EffectKind.HALFOMNI: flag_effect("half_omni"),
    EffectKind.LASER: flag_effect("laser"),
    EffectKind.CHARGE: flag_effect("charge"),
    EffectKind.INVINCIBLE: flag_effect("invincible"),
    EffectKind.BOMBS: flag_effect("bombs"),
    EffectKind.SWORD: flag_effect("sword"),
    EffectKind.KNIVES: flag_effect("knives"),
    EffectKind.DASH_DAMAGE: additive_effect("bullet_damage", 1, floor=1),
}


def _heal(state: State) -> State:
    player_id = require_player_id(state)
    stats = state.stats[player_id]
    healed = replace(stats, health=min(stats.max_health, stats.health + 1))
    return replace(state, stats=state.stats.set(player_id, healed))


def _nuke(state: State) -> State:
    state = remove_entities(state, list(state.enemy.keys()))
    return replace(state, score=state.score + NUKE_SCORE)


INSTANT_REGISTRY: Mapping[EffectKind, InstantFn] = {
    EffectKind.HEAL: _heal,
    EffectKind.NUKE: _nuke,
}


def validate_registry(
    registry: Mapping[EffectKind, EffectSpec],
    instants: Mapping[EffectKind, InstantFn],
) -> None:
    """Check every kind is handled exactly one way with both halves defined.

    Raises:
        EffectRegistryError: On a missing kind, a missing half, or a kind
            registered as both timed and instant.
    """
    for kind in EffectKind:
        if kind in INSTANT_EFFECTS:
            if kind not in instants:
                raise EffectRegistryError(f"Instant effect {kind} has no handler")
            if kind in registry:
                raise EffectRegistryError(f"Instant effect {kind} is also timed")
            continue
        entry = registry.get(kind)
        if entry is None:
            raise EffectRegistryError(f"Effect {kind} is not registered")
        if not callable(entry.apply) or not callable(entry.revert):
            raise EffectRegistryError(f"Effect {kind} lacks an apply/revert pair")


validate_registry(EFFECT_REGISTRY, INSTANT_REGISTRY)


def is_effect_active(state: State, kind: EffectKind) -> bool:
    return kind in state.effects


def apply_effect(state: State, kind: EffectKind, duration: int) -> State:
    """Apply ``kind`` to the player for ``duration`` ticks.

    A duplicate application extends the existing effect instead of stacking
    a second one.

    Raises:
        ValueError: If ``kind`` is unknown, ``duration`` is not positive for
            a timed kind, or the state contains no player.
    """
    kind = EffectKind(kind)
    if kind in INSTANT_EFFECTS:
        logger.debug("Instant effect %s", kind)
        return INSTANT_REGISTRY[kind](state)

    if duration <= 0:
        raise ValueError(f"Effect duration must be positive: {duration}")
    cap = state.config.max_effect_duration

    existing = state.effects.get(kind)
    if existing is not None:
        remaining = min(cap, existing.remaining + duration)
        logger.debug("Extended %s to %d ticks", kind, remaining)
        return replace(
            state,
            effects=state.effects.set(kind, replace(existing, remaining=remaining)),
        )

    player_id = require_player_id(state)
    stats = EFFECT_REGISTRY[kind].apply(state.stats[player_id])
    return replace(
        state,
        stats=state.stats.set(player_id, stats),
        effects=state.effects.set(kind, ActiveEffect(kind, min(cap, duration))),
    )


def revert_effect(state: State, kind: EffectKind) -> State:
    """Revert an active effect once and forget it; no-op if not active."""
    if kind not in state.effects:
        return state
    state = replace(state, effects=state.effects.remove(kind))
    player_id = require_player_id(state)
    stats = EFFECT_REGISTRY[kind].revert(state.stats[player_id])
    return replace(state, stats=state.stats.set(player_id, stats))


def revert_all_effects(state: State) -> State:
    """Force-revert every active effect regardless of remaining duration."""
    for kind in sorted(state.effects.keys()):
        state = revert_effect(state, kind)
    return state
