"""
Core Game
=========

Main game orchestrator combining the bin, throwing, collision, scoring, and
the session countdown. Each CoreGame is a self-contained context; nothing is
shared between instances.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Dict, List, Optional

from crumple_toss.toss_core.collision import CollisionEngine
from crumple_toss.toss_core.config_loader import GameConfig, get_config
from crumple_toss.toss_core.events import EventDispatcher, GameListener
from crumple_toss.toss_core.launch import HeldNote, LaunchController, LaunchResult
from crumple_toss.toss_core.projectile import Projectile
from crumple_toss.toss_core.rng import VariantPicker
from crumple_toss.toss_core.scoring import ScoreTracker
from crumple_toss.toss_core.session import SessionStateMachine
from crumple_toss.toss_core.simulation import SimulationLoop
from crumple_toss.toss_core.state_snapshot import FrameSnapshot, SnapshotBuilder
from crumple_toss.toss_core.target import TargetController
from crumple_toss.toss_core.variant_catalog import Variant, VariantCatalog, get_catalog

logger = logging.getLogger(__name__)


def _finite(*values: float) -> bool:
    try:
        return all(math.isfinite(v) for v in values)
    except TypeError:
        return False


class CoreGame:
    """
    Main game simulation class.

    Orchestrates:
    - Target (moving bin)
    - Launch controller (grab / charge / release)
    - Simulation loop and collision engine
    - Scoring
    - Session countdown
    - Frame snapshots for renderers

    Inputs arrive through ``grab``, ``release``, ``frame_tick``,
    ``second_tick`` / ``advance_clock``, ``start_session`` and
    ``force_end_session``. Outputs go to registered GameListeners.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None
    ):
        """
        Initialize game.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for note colors and shapes.
            clock: Millisecond clock used to time charges.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed

        # Initialize subsystems
        self._catalog = get_catalog(config)
        self._events = EventDispatcher()
        self._picker = VariantPicker(self._catalog, seed)
        self._target = TargetController(config)
        self._launcher = LaunchController(self._picker, config, clock)
        self._scorer = ScoreTracker(config, self._catalog)
        self._session = SessionStateMachine(self._scorer, self._events, config)
        self._collision = CollisionEngine(self._scorer, config)
        self._loop = SimulationLoop(self._target, self._collision, self._events)
        self._snapshot_builder = SnapshotBuilder(config)

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def catalog(self) -> VariantCatalog:
        return self._catalog

    @property
    def target(self) -> TargetController:
        return self._target

    @property
    def launcher(self) -> LaunchController:
        return self._launcher

    @property
    def session(self) -> SessionStateMachine:
        return self._session

    @property
    def loop(self) -> SimulationLoop:
        return self._loop

    @property
    def score(self) -> int:
        return self._scorer.score

    @property
    def tallies(self) -> Dict[str, int]:
        return self._scorer.tallies

    @property
    def hits_by_tag(self) -> Dict[str, int]:
        return self._scorer.hits_by_tag()

    @property
    def is_active(self) -> bool:
        return self._session.active

    @property
    def seconds_remaining(self) -> int:
        return self._session.seconds_remaining

    @property
    def projectiles(self) -> List[Projectile]:
        """Notes in flight (for rendering; do not mutate)."""
        return list(self._loop.active_projectiles())

    def add_listener(self, listener: GameListener) -> None:
        self._events.add(listener)

    def remove_listener(self, listener: GameListener) -> None:
        self._events.remove(listener)

    def start_session(self) -> bool:
        """Start a round; ignored while one is running."""
        return self._session.start()

    def force_end_session(self) -> bool:
        """End the running round now; ignored when none is running."""
        return self._session.force_end()

    def second_tick(self) -> None:
        """One countdown second from an external once-per-second source."""
        self._session.second_tick()

    def advance_clock(self, elapsed_seconds: float) -> int:
        """
        Feed real elapsed time to the countdown timer.

        Returns:
            Number of countdown seconds that fired.
        """
        if not _finite(elapsed_seconds) or elapsed_seconds < 0:
            logger.debug("Ignoring clock advance of %r", elapsed_seconds)
            return 0
        return self._session.timer.advance(elapsed_seconds)

    def grab(self, x: float, y: float) -> Optional[Variant]:
        """
        Mouse/touch down. Picks up a note when a round is running and the
        point is near the player.
        """
        if not _finite(x, y):
            logger.debug("Ignoring grab at non-finite point (%r, %r)", x, y)
            return None
        if not self._session.active:
            return None

        variant = self._launcher.grab(x, y)
        if variant is not None:
            self._events.charge_started(variant)
        return variant

    def release(self, x: float, y: float) -> Optional[LaunchResult]:
        """Mouse/touch up. Throws the held note toward (x, y)."""
        if not _finite(x, y):
            logger.debug("Ignoring release at non-finite point (%r, %r)", x, y)
            return None

        result = self._launcher.release(x, y)
        if result is not None and result.projectile is not None:
            self._loop.add(result.projectile)
            self._events.throw(result.variant, result.velocity)
        return result

    def frame_tick(self, dt: float = 1.0) -> List[Projectile]:
        """
        Advance the simulation one display frame.

        Args:
            dt: Frame fraction (1.0 = one reference frame).

        Returns:
            Notes that landed or were lost this frame.
        """
        if not _finite(dt) or dt < 0:
            logger.debug("Ignoring frame tick with dt=%r", dt)
            return []
        return self._loop.step(dt)

    def held_note(self) -> Optional[HeldNote]:
        return self._launcher.held_note()

    def snapshot(self) -> FrameSnapshot:
        """Read-only view of the current frame for renderers."""
        return self._snapshot_builder.build(
            target=self._target,
            projectiles=self._loop.active_projectiles(),
            held=self._launcher.held_note(),
            score=self._scorer.score,
            tallies=self._scorer.tallies,
            session_active=self._session.active,
            seconds_remaining=self._session.seconds_remaining
        )
