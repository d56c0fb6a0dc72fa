"""Core immutable ECS `State` dataclass.

This module defines the frozen :class:`State` object that represents the
entire arena at a single tick. All systems are pure functions that take a
previous ``State`` and return a *new* ``State``; no mutation happens in-place.
This makes the simulation deterministic for a given seed and easy to test.

Design notes:

* Component stores are **persistent maps** (``pyrsistent.PMap``) keyed by
    ``EntityID``. Absence of a key means the entity does not currently possess
    that component.
* Walls are not entities. ``obstacles`` is a persistent vector that is
    replaced wholesale whenever walls respawn; ``nav_grid`` is the navigation
    grid derived from it and is ``None`` whenever it is stale. Use
    :func:`arena_core.utils.nav_grid.set_obstacles` to replace walls so the
    grid is invalidated together with them.
* Active effects are keyed by :class:`arena_core.types.EffectKind`, so at
    most one instance of each kind can exist.
* ``respawn_requests`` is an outbound signal: enemies that hit the stuck
    threshold during steering. :func:`arena_core.systems.steering.respawn_system`
    consumes it.
* ``lose`` is a terminal marker: once set, :func:`arena_core.step.step`
    returns the state unchanged.

See :mod:`arena_core.step` for how the reducer orchestrates systems.
"""

from dataclasses import dataclass
from typing import Optional

from pyrsistent import PMap, PSet, PVector, pmap, pset, pvector

from arena_core.config import ArenaConfig, DEFAULT_CONFIG
from arena_core.entity import Entity
from arena_core.components.effects import ActiveEffect
from arena_core.components.properties import (
    Body,
    Enemy,
    Obstacle,
    Pickup,
    Player,
    Position,
    Stats,
)
from arena_core.types import EffectKind, EntityID
from arena_core.utils.nav_grid import NavGrid


@dataclass(frozen=True)
class State:
    """Immutable ECS world state.

    Attributes:
        width (float): World width in world units.
        height (float): World height in world units.
        config (ArenaConfig): Gameplay constants.
        entity (PMap[EntityID, Entity]): Registry of live entities.
        position (PMap[EntityID, Position]): Entity centres.
        body (PMap[EntityID, Body]): Collision circles.
        enemy (PMap[EntityID, Enemy]): Steering agents.
        player (PMap[EntityID, Player]): Player marker (one entry expected).
        stats (PMap[EntityID, Stats]): Player statistics mutated by effects.
        pickup (PMap[EntityID, Pickup]): Power-ups lying in the arena.
        obstacles (PVector[Obstacle]): Wall rectangles.
        nav_grid (NavGrid | None): Cached navigation grid, ``None`` if stale.
        effects (PMap[EffectKind, ActiveEffect]): Active timed effects.
        respawn_requests (PSet[EntityID]): Enemies to relocate this tick.
        turn (int): Tick counter (0-based).
        score (int): Accumulated score.
        wall_timer (int): Ticks until walls respawn.
        enemy_spawn_timer (int): Ticks until the next enemy spawn.
        lose (bool): True once the player has run out of health.
        seed (int | None): Base RNG seed for respawn and wall placement.
    """

    # World
    width: float
    height: float
    config: ArenaConfig = DEFAULT_CONFIG

    # Entity
    entity: PMap[EntityID, Entity] = pmap()

    # Components
    position: PMap[EntityID, Position] = pmap()
    body: PMap[EntityID, Body] = pmap()
    enemy: PMap[EntityID, Enemy] = pmap()
    player: PMap[EntityID, Player] = pmap()
    stats: PMap[EntityID, Stats] = pmap()
    pickup: PMap[EntityID, Pickup] = pmap()

    # Walls
    obstacles: PVector[Obstacle] = pvector()
    nav_grid: Optional[NavGrid] = None

    # Effects
    effects: PMap[EffectKind, ActiveEffect] = pmap()

    # Signals
    respawn_requests: PSet[EntityID] = pset()

    # Status
    turn: int = 0
    score: int = 0
    wall_timer: int = 0
    enemy_spawn_timer: int = 0
    lose: bool = False

    # RNG
    seed: Optional[int] = None
