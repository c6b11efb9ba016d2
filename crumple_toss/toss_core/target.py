"""
Target Controller
=================

Moves the bin back and forth along the field, bouncing at the side edges.
"""

from __future__ import annotations

from typing import Optional

import pymunk

from crumple_toss.toss_core.config_loader import GameConfig, get_config


class TargetController:
    """
    Owns the bin's position and direction.

    Speed magnitude is constant; only the direction flips at an edge.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._field_width = float(config.field.width)
        self.width = config.target.width
        self.height = config.target.height
        self.speed = config.target.speed

        self.x: float = 0.0
        self.y: float = 0.0
        self.direction: int = 1
        self.reset()

    def reset(self) -> None:
        """Put the bin back at its starting spot."""
        self.x = self._config.target.x
        self.y = self._config.target.y
        self.direction = self._config.target.direction

    @property
    def max_x(self) -> float:
        return self._field_width - self.width

    def advance(self, dt: float = 1.0) -> None:
        """Move one step and reflect off either side of the field."""
        self.x += self.speed * self.direction * dt

        if self.x + self.width >= self._field_width:
            self.x = self.max_x
            self.direction = -1
        elif self.x <= 0:
            self.x = 0.0
            self.direction = 1

    def bounds(self) -> pymunk.BB:
        """Bin box in field coordinates; ``bottom`` is the smaller y."""
        return pymunk.BB(self.x, self.y, self.x + self.width, self.y + self.height)

    def place(self, x: float, y: Optional[float] = None) -> None:
        """Move the bin directly, clamped to the field."""
        self.x = max(0.0, min(self.max_x, x))
        if y is not None:
            self.y = y
