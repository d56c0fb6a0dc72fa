"""Entity primitives & ID generation.

Each *thing* in the arena (player, enemy, pickup) is an ``EntityID`` plus
zero or more component dataclasses stored in persistent maps on
:class:`arena_core.state.State`. Walls are not entities; they live in the
``State.obstacles`` vector because they are replaced wholesale.

IDs are *not* recycled; a simple incrementing counter is sufficient because
a ``State`` lives for one run.
"""

from dataclasses import dataclass
from typing import Iterator

from arena_core.types import EntityID


@dataclass(frozen=True)
class Entity:
    """Marker for a registered entity."""

    pass


def entity_id_generator() -> Iterator[EntityID]:
    """Yield an infinite sequence of monotonically increasing entity IDs."""
    eid = 0
    while True:
        yield eid
        eid += 1


_entity_id_gen = entity_id_generator()


def new_entity_id() -> EntityID:
    """Return a newly allocated unique entity ID."""
    return next(_entity_id_gen)
