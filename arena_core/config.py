"""Arena tuning configuration.

All gameplay constants live on a single frozen :class:`ArenaConfig` carried by
``State.config`` so systems never read module globals. Values are in ticks
(one tick per display refresh, 60 per second) and world units.

A config can be authored in TOML under an ``[arena]`` table::

    [arena]
    cell_size = 40
    stuck_threshold = 120

and loaded with :func:`load_config`; omitted keys keep their defaults.
"""

import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, Union


@dataclass(frozen=True)
class ArenaConfig:
    """Gameplay constants.

    Attributes:
        cell_size: Navigation grid cell edge in world units.
        cell_block_ratio: A cell is blocked if an obstacle lies within
            ``cell_size * cell_block_ratio`` of its centre.
        stuck_threshold: Consecutive stuck ticks before an enemy is respawned.
        max_effect_duration: Cap on an effect's remaining ticks when extended.
        default_effect_duration: Duration used when a pickup does not specify one.
        wall_interval: Ticks between wall respawns.
        wall_thickness: Thickness of spawned walls.
        edge_margin: Distance outside the world edge where enemies respawn.
        player_speed: Baseline player speed restored on reset.
        player_health: Baseline player health restored on reset.
        reset_invincibility: Ticks of invincibility granted after a reset.
        hit_invincibility: Ticks the player is immune after taking contact
            damage.
        enemy_cap: Maximum number of live enemies.
        enemy_spawn_interval: Ticks between enemy spawns at score 0.
        min_enemy_spawn_interval: Floor for the spawn interval as score grows.
        spawn_score_factor: Ticks removed from the spawn interval per point.
        spawn_clearance: Minimum distance between a new enemy and the player.
        initial_enemies: Enemies spawned by a reset.
    """

    cell_size: float = 36
    cell_block_ratio: float = 0.45
    stuck_threshold: int = 180
    max_effect_duration: int = 1800
    default_effect_duration: int = 600
    wall_interval: int = 1800
    wall_thickness: float = 32
    edge_margin: float = 20
    player_speed: float = 4
    player_health: int = 3
    reset_invincibility: int = 60
    hit_invincibility: int = 60
    enemy_cap: int = 20
    enemy_spawn_interval: int = 90
    min_enemy_spawn_interval: int = 18
    spawn_score_factor: float = 1.2
    spawn_clearance: float = 120
    initial_enemies: int = 3


DEFAULT_CONFIG = ArenaConfig()


def config_from_mapping(values: Mapping[str, Any]) -> ArenaConfig:
    """Return ``DEFAULT_CONFIG`` overridden by ``values``.

    Raises:
        ValueError: If ``values`` contains a key that is not a config field or
            the resulting config is invalid.
    """
    known = {f.name for f in fields(ArenaConfig)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown arena config keys: {sorted(unknown)}")
    config = replace(DEFAULT_CONFIG, **dict(values))
    validate_config(config)
    return config


def validate_config(config: ArenaConfig) -> None:
    """Raise ``ValueError`` if any constant is out of range."""
    if config.cell_size <= 0:
        raise ValueError(f"cell_size must be positive: {config.cell_size}")
    if config.stuck_threshold <= 0:
        raise ValueError(
            f"stuck_threshold must be positive: {config.stuck_threshold}"
        )
    if config.max_effect_duration <= 0:
        raise ValueError(
            f"max_effect_duration must be positive: {config.max_effect_duration}"
        )
    if config.wall_interval <= 0:
        raise ValueError(f"wall_interval must be positive: {config.wall_interval}")
    if config.min_enemy_spawn_interval <= 0:
        raise ValueError(
            "min_enemy_spawn_interval must be positive: "
            f"{config.min_enemy_spawn_interval}"
        )
    if config.enemy_cap < 0:
        raise ValueError(f"enemy_cap must not be negative: {config.enemy_cap}")


def load_config(path: Union[str, Path]) -> ArenaConfig:
    """Load an :class:`ArenaConfig` from the ``[arena]`` table of a TOML file."""
    with open(path, "rb") as fh:
        data = tomllib.load(fh)
    return config_from_mapping(data.get("arena", {}))
