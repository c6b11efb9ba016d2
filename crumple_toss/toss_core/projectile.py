"""
Projectile
==========

A crumpled note in flight: per-frame ballistic motion, field bounds test, and
the variant-scaled hit box used by the collision engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np
import pymunk

from crumple_toss.toss_core.config_loader import ProjectileConfig
from crumple_toss.toss_core.variant_catalog import Variant


class Outcome(Enum):
    """Where a note is in its lifecycle."""
    IN_FLIGHT = "in_flight"
    HIT = "hit"
    MISS = "miss"


def crumple_outline(seed: int, size: float, points: int = 8) -> np.ndarray:
    """
    Irregular polygon for a crumpled note, centered on the origin.

    Pure function of the seed so the shape stays stable frame to frame.

    Returns:
        (points, 2) float array of vertex offsets.
    """
    rng = np.random.default_rng(seed)
    angles = np.arange(points) / points * 2.0 * np.pi
    radii = (size / 2.0) * (0.7 + rng.random(points) * 0.3)
    return np.stack([np.cos(angles) * radii, np.sin(angles) * radii], axis=1)


def wrinkle_lines(seed: int, size: float, count: int = 3) -> np.ndarray:
    """
    Short crease segments drawn across a note.

    Returns:
        (count, 4) float array of (x1, y1, x2, y2) offsets.
    """
    # Offset the stream so creases don't mirror the outline radii
    rng = np.random.default_rng([seed, 1])
    return (rng.random((count, 4)) - 0.5) * size


@dataclass
class Projectile:
    """
    One thrown note.

    Motion is integrated in display-frame units: dt=1.0 advances exactly one
    frame of the reference motion.
    """
    uid: int
    variant: Variant
    position: pymunk.Vec2d
    velocity: pymunk.Vec2d
    width: float
    height: float
    gravity: float
    rotation_speed: float
    rotation: float = 0.0
    shape_seed: int = 0
    crumple_points: int = 8
    wrinkle_count: int = 3
    outcome: Outcome = Outcome.IN_FLIGHT
    _outline: Optional[np.ndarray] = field(default=None, init=False, repr=False)
    _wrinkles: Optional[np.ndarray] = field(default=None, init=False, repr=False)

    @classmethod
    def launch(
        cls,
        uid: int,
        variant: Variant,
        origin: pymunk.Vec2d,
        velocity: pymunk.Vec2d,
        config: ProjectileConfig,
        shape_seed: int = 0
    ) -> "Projectile":
        """Create a note leaving the player's hand."""
        return cls(
            uid=uid,
            variant=variant,
            position=pymunk.Vec2d(*origin),
            velocity=pymunk.Vec2d(*velocity),
            width=config.width,
            height=config.height,
            gravity=config.gravity,
            rotation_speed=config.rotation_speed,
            shape_seed=shape_seed,
            crumple_points=config.crumple_points,
            wrinkle_count=config.wrinkles
        )

    @property
    def active(self) -> bool:
        return self.outcome is Outcome.IN_FLIGHT

    @property
    def x(self) -> float:
        return self.position.x

    @property
    def y(self) -> float:
        return self.position.y

    def advance(self, dt: float = 1.0) -> None:
        """Apply gravity, move, and spin. Inactive notes don't move."""
        if not self.active:
            return
        self.velocity = pymunk.Vec2d(self.velocity.x, self.velocity.y + self.gravity * dt)
        self.position = self.position + self.velocity * dt
        self.rotation += self.rotation_speed * dt

    def is_out_of_bounds(self, field_width: float, field_height: float, margin: float = 50.0) -> bool:
        """
        True once the note has left the field by more than ``margin``.

        The top edge is open: notes thrown upward come back down.
        """
        x, y = self.position
        return y > field_height + margin or x < -margin or x > field_width + margin

    def hit_box(self) -> pymunk.BB:
        """
        Collision box anchored at the note's position.

        Width and height are scaled by the variant's collision multiplier.
        """
        w = self.width * self.variant.collision_multiplier
        h = self.height * self.variant.collision_multiplier
        x, y = self.position
        return pymunk.BB(x, y, x + w, y + h)

    def mark_hit(self) -> None:
        if self.active:
            self.outcome = Outcome.HIT

    def mark_missed(self) -> None:
        if self.active:
            self.outcome = Outcome.MISS

    @property
    def outline(self) -> np.ndarray:
        """Cached crumple polygon (cosmetic)."""
        if self._outline is None:
            self._outline = crumple_outline(self.shape_seed, self.width, self.crumple_points)
        return self._outline

    @property
    def wrinkles(self) -> np.ndarray:
        """Cached crease segments (cosmetic)."""
        if self._wrinkles is None:
            self._wrinkles = wrinkle_lines(self.shape_seed, self.width, self.wrinkle_count)
        return self._wrinkles
