"""
Launch Controller
=================

Hold-to-charge throwing. A grab near the player picks up a note of a random
color; the longer it is held, the harder it is thrown on release.

States:
    idle      -- nothing in hand
    charging  -- a note is held; ``LaunchState`` records when and which color
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import pymunk

from crumple_toss.toss_core.config_loader import GameConfig, get_config
from crumple_toss.toss_core.projectile import Projectile
from crumple_toss.toss_core.rng import VariantPicker
from crumple_toss.toss_core.variant_catalog import Variant


def monotonic_ms() -> float:
    """Default clock: monotonic milliseconds."""
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class LaunchState:
    """A note currently held by the player."""
    start_ms: float
    variant: Variant


@dataclass(frozen=True)
class HeldNote:
    """Render view of the held note."""
    x: float
    y: float
    variant: Variant
    power: float
    display_size: float
    show_power_ring: bool


@dataclass
class LaunchResult:
    """
    Outcome of a release.

    ``projectile`` is None when the aim point was inside the dead zone and the
    throw was cancelled.
    """
    variant: Variant
    power: float
    velocity: Optional[Tuple[float, float]]
    projectile: Optional[Projectile]

    @property
    def thrown(self) -> bool:
        return self.projectile is not None


class LaunchController:
    """
    Converts grab/release gestures into thrown notes.
    """

    def __init__(
        self,
        picker: VariantPicker,
        config: Optional[GameConfig] = None,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Args:
            picker: Source of note colors and shape seeds.
            config: Game configuration. Uses default if None.
            clock: Returns the current time in milliseconds.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._picker = picker
        self._clock = clock or monotonic_ms
        self._player = pymunk.Vec2d(config.player.x, config.player.y)
        self._state: Optional[LaunchState] = None
        self._next_uid = 0

    @property
    def player_position(self) -> pymunk.Vec2d:
        return self._player

    @property
    def state(self) -> Optional[LaunchState]:
        return self._state

    @property
    def is_charging(self) -> bool:
        return self._state is not None

    def grab(self, x: float, y: float) -> Optional[Variant]:
        """
        Pick up a note if the point is close enough to the player.

        Returns:
            The drawn variant, or None if nothing happened.
        """
        if self._state is not None:
            return None

        distance = (pymunk.Vec2d(x, y) - self._player).length
        if distance >= self._config.player.grab_radius:
            return None

        self._state = LaunchState(start_ms=self._clock(), variant=self._picker.draw())
        return self._state.variant

    def power_for(self, held_ms: float) -> float:
        """Charge power for a hold duration, clamped to [0, max_power]."""
        launch = self._config.launch
        held_ms = max(0.0, min(held_ms, launch.max_charge_ms))
        return held_ms / launch.ms_per_power

    def speed_for(self, power: float) -> float:
        """Launch speed scalar for a charge power."""
        launch = self._config.launch
        return launch.base_speed * (launch.min_speed_factor + power)

    def current_power(self) -> float:
        """Power of the held note right now (0 when idle)."""
        if self._state is None:
            return 0.0
        return self.power_for(self._clock() - self._state.start_ms)

    def release(self, x: float, y: float) -> Optional[LaunchResult]:
        """
        Let go of the held note, throwing it toward (x, y).

        Returns:
            LaunchResult, or None if no note was held.
        """
        if self._state is None:
            return None

        state = self._state
        self._state = None

        power = self.power_for(self._clock() - state.start_ms)
        aim = pymunk.Vec2d(x, y) - self._player
        if aim.length <= self._config.launch.dead_zone:
            return LaunchResult(variant=state.variant, power=power, velocity=None, projectile=None)

        velocity = aim.normalized() * self.speed_for(power)
        projectile = Projectile.launch(
            uid=self._next_uid,
            variant=state.variant,
            origin=self._player,
            velocity=velocity,
            config=self._config.projectile,
            shape_seed=self._picker.next_shape_seed()
        )
        self._next_uid += 1
        return LaunchResult(
            variant=state.variant,
            power=power,
            velocity=(velocity.x, velocity.y),
            projectile=projectile
        )

    def cancel(self) -> bool:
        """Drop the held note without throwing. Returns True if one was held."""
        held = self._state is not None
        self._state = None
        return held

    def held_note(self) -> Optional[HeldNote]:
        """Render view of the note in hand, or None when idle."""
        if self._state is None:
            return None
        launch = self._config.launch
        power = self.current_power()
        return HeldNote(
            x=self._player.x,
            y=self._player.y,
            variant=self._state.variant,
            power=power,
            display_size=launch.held_base_size + power * launch.held_size_per_power,
            show_power_ring=power > launch.power_ring_threshold
        )

