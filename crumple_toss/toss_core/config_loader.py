"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Optional

import yaml


@dataclass(frozen=True)
class FieldConfig:
    """Play-field geometry."""
    width: int
    height: int
    out_of_bounds_margin: float  # Units beyond the field before a note is lost


@dataclass(frozen=True)
class PlayerConfig:
    """Fixed throwing position."""
    x: float
    y: float
    grab_radius: float

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class TargetConfig:
    """Moving bin geometry and motion."""
    x: float
    y: float
    width: float
    height: float
    speed: float       # Units per frame
    direction: int     # Initial direction, -1 or +1


@dataclass(frozen=True)
class ProjectileConfig:
    """Crumpled note physics."""
    width: float
    height: float
    gravity: float         # Added to vy every frame
    rotation_speed: float  # Radians per frame
    crumple_points: int
    wrinkles: int


@dataclass(frozen=True)
class LaunchConfig:
    """Hold-to-charge throw parameters."""
    base_speed: float
    min_speed_factor: float
    dead_zone: float
    max_charge_ms: float
    ms_per_power: float
    held_base_size: float
    held_size_per_power: float
    power_ring_threshold: float

    @property
    def max_power(self) -> float:
        return self.max_charge_ms / self.ms_per_power


@dataclass(frozen=True)
class SessionConfig:
    """Countdown settings."""
    duration_seconds: int
    tick_interval: float


@dataclass(frozen=True)
class VariantConfig:
    """Configuration for a single note color."""
    id: int
    tag: str
    difficulty: str
    color: str
    collision_multiplier: float
    points: int

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return _hex_to_rgb(self.color)


@dataclass(frozen=True)
class SnapshotConfig:
    """Frame snapshot parameters."""
    max_objects: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    field: FieldConfig
    player: PlayerConfig
    target: TargetConfig
    projectile: ProjectileConfig
    launch: LaunchConfig
    session: SessionConfig
    variants: Tuple[VariantConfig, ...]
    snapshot: SnapshotConfig

    @property
    def num_variants(self) -> int:
        return len(self.variants)

    def get_variant(self, variant_id: int) -> VariantConfig:
        """Get variant config by ID."""
        if 0 <= variant_id < len(self.variants):
            return self.variants[variant_id]
        raise ValueError(f"Invalid variant ID: {variant_id}")


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse '#RRGGBB' into an RGB tuple."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Color must be '#RRGGBB', got '{color}'")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def _parse_variant(variant_data: dict) -> VariantConfig:
    """Parse a single variant configuration from YAML."""
    return VariantConfig(
        id=int(variant_data["id"]),
        tag=str(variant_data["tag"]),
        difficulty=str(variant_data["difficulty"]),
        color=str(variant_data["color"]),
        collision_multiplier=float(variant_data["collision_multiplier"]),
        points=int(variant_data["points"])
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if len(config.variants) != 3:
        raise ValueError(f"Exactly 3 variants required, got {len(config.variants)}")

    for i, variant in enumerate(config.variants):
        if variant.id != i:
            raise ValueError(f"Variant ID mismatch: expected {i}, got {variant.id}")
        if not 0.6 <= variant.collision_multiplier <= 1.5:
            raise ValueError(
                f"collision_multiplier for '{variant.tag}' must be in [0.6, 1.5], "
                f"got {variant.collision_multiplier}"
            )
        if not 1 <= variant.points <= 3:
            raise ValueError(f"points for '{variant.tag}' must be in [1, 3], got {variant.points}")
        # Raises on malformed colors
        _hex_to_rgb(variant.color)

    tags = [v.tag.lower() for v in config.variants]
    if len(set(tags)) != len(tags):
        raise ValueError(f"Variant tags must be unique, got {tags}")

    if config.field.width <= 0 or config.field.height <= 0:
        raise ValueError(f"Field size must be positive, got {config.field.width}x{config.field.height}")

    if config.target.width <= 0 or config.target.height <= 0:
        raise ValueError("Target size must be positive")

    if config.target.width > config.field.width:
        raise ValueError(
            f"Target width ({config.target.width}) exceeds field width ({config.field.width})"
        )

    if not 0 <= config.target.x <= config.field.width - config.target.width:
        raise ValueError(f"Target start x ({config.target.x}) outside the field")

    if config.target.direction not in (-1, 1):
        raise ValueError(f"target.direction must be -1 or 1, got {config.target.direction}")

    if config.launch.ms_per_power <= 0 or config.launch.max_charge_ms < 0:
        raise ValueError("launch charge timings must be positive")

    if config.session.duration_seconds <= 0:
        raise ValueError(
            f"session.duration_seconds must be positive, got {config.session.duration_seconds}"
        )

    if config.session.tick_interval <= 0:
        raise ValueError(f"session.tick_interval must be positive, got {config.session.tick_interval}")

    if config.snapshot.max_objects <= 0:
        raise ValueError(f"snapshot.max_objects must be positive, got {config.snapshot.max_objects}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    field_data = raw["field"]
    field = FieldConfig(
        width=int(field_data["width"]),
        height=int(field_data["height"]),
        out_of_bounds_margin=float(field_data.get("out_of_bounds_margin", 50.0))
    )

    player_data = raw["player"]
    player = PlayerConfig(
        x=float(player_data["x"]),
        y=float(player_data["y"]),
        grab_radius=float(player_data.get("grab_radius", 50.0))
    )

    target_data = raw["target"]
    target = TargetConfig(
        x=float(target_data["x"]),
        y=float(target_data["y"]),
        width=float(target_data["width"]),
        height=float(target_data["height"]),
        speed=float(target_data["speed"]),
        direction=int(target_data.get("direction", 1))
    )

    projectile_data = raw["projectile"]
    projectile = ProjectileConfig(
        width=float(projectile_data["width"]),
        height=float(projectile_data["height"]),
        gravity=float(projectile_data["gravity"]),
        rotation_speed=float(projectile_data.get("rotation_speed", 0.1)),
        crumple_points=int(projectile_data.get("crumple_points", 8)),
        wrinkles=int(projectile_data.get("wrinkles", 3))
    )

    launch_data = raw["launch"]
    launch = LaunchConfig(
        base_speed=float(launch_data["base_speed"]),
        min_speed_factor=float(launch_data.get("min_speed_factor", 0.5)),
        dead_zone=float(launch_data.get("dead_zone", 5.0)),
        max_charge_ms=float(launch_data["max_charge_ms"]),
        ms_per_power=float(launch_data.get("ms_per_power", 1000.0)),
        held_base_size=float(launch_data.get("held_base_size", 25.0)),
        held_size_per_power=float(launch_data.get("held_size_per_power", 5.0)),
        power_ring_threshold=float(launch_data.get("power_ring_threshold", 0.1))
    )

    session_data = raw["session"]
    session = SessionConfig(
        duration_seconds=int(session_data["duration_seconds"]),
        tick_interval=float(session_data.get("tick_interval", 1.0))
    )

    variants = tuple(_parse_variant(v) for v in raw["variants"])

    # Optional section
    snapshot_data = raw.get("snapshot", {})
    snapshot = SnapshotConfig(
        max_objects=int(snapshot_data.get("max_objects", 64))
    )

    config = GameConfig(
        field=field,
        player=player,
        target=target,
        projectile=projectile,
        launch=launch,
        session=session,
        variants=variants,
        snapshot=snapshot
    )

    _validate_config(config)
    return config


# Module-level cache for the default (immutable) configuration
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
