"""Garbage collection utilities.

Removes component entries for entities that are no longer registered in
``State.entity``. Systems that destroy entities (pickup consumption, nukes)
drop the id from the registry and let the collector prune the component maps,
which keeps those systems from having to know every store an entity may
appear in.
"""

from dataclasses import replace
from typing import Any, Dict, Iterable, Set, cast

from pyrsistent import pmap, pset
from pyrsistent.typing import PMap

from arena_core.state import State
from arena_core.types import EntityID

COMPONENT_FIELDS = ("position", "body", "enemy", "player", "stats", "pickup")


def compute_alive_entities(state: State) -> Set[EntityID]:
    """Return the IDs still present in the entity registry."""
    return set(state.entity.keys())


def run_garbage_collector(state: State) -> State:
    """Prune component maps and signals to only contain registered IDs."""
    alive = compute_alive_entities(state)
    new_fields: Dict[str, Any] = {}
    for field in COMPONENT_FIELDS:
        value_map = cast(PMap[EntityID, Any], getattr(state, field))
        if any(k not in alive for k in value_map):
            new_fields[field] = pmap(
                {k: v for k, v in value_map.items() if k in alive}
            )
    requests = state.respawn_requests
    if any(eid not in alive for eid in requests):
        new_fields["respawn_requests"] = pset(e for e in requests if e in alive)
    if not new_fields:
        return state
    return replace(state, **new_fields)


def remove_entities(state: State, entity_ids: Iterable[EntityID]) -> State:
    """Unregister ``entity_ids`` and prune their components."""
    registry = state.entity
    for eid in entity_ids:
        registry = registry.discard(eid)
    return run_garbage_collector(replace(state, entity=registry))
