"""
Simulation Loop
===============

Per-frame driver: moves the bin, flies every note, and drops the notes that
landed or left the field. Runs whether or not a session is active.
"""

from __future__ import annotations

from typing import Iterator, List

from crumple_toss.toss_core.collision import CollisionEngine
from crumple_toss.toss_core.events import EventDispatcher
from crumple_toss.toss_core.projectile import Outcome, Projectile
from crumple_toss.toss_core.target import TargetController


class SimulationLoop:
    """
    Owns the collection of notes in flight.

    Each step updates every note first and filters afterwards, so removing
    a note never causes another one to be skipped.
    """

    def __init__(
        self,
        target: TargetController,
        collision: CollisionEngine,
        events: EventDispatcher
    ):
        self._target = target
        self._collision = collision
        self._events = events
        self._projectiles: List[Projectile] = []

    def add(self, projectile: Projectile) -> None:
        """Put a freshly thrown note in flight."""
        self._projectiles.append(projectile)

    def active_projectiles(self) -> Iterator[Projectile]:
        """Notes still in flight, in launch order (read-only use)."""
        return (p for p in self._projectiles if p.active)

    def step(self, dt: float = 1.0) -> List[Projectile]:
        """
        Advance one frame.

        Returns:
            Notes that finished (hit or miss) during this frame.
        """
        self._target.advance(dt)

        finished: List[Projectile] = []
        # Notes thrown by listeners during this pass start moving next frame
        for projectile in list(self._projectiles):
            projectile.advance(dt)
            outcome = self._collision.evaluate(projectile, self._target)

            if outcome is Outcome.MISS:
                finished.append(projectile)
                self._events.miss()
            elif outcome is Outcome.HIT:
                finished.append(projectile)
                self._events.hit(projectile.variant)
                score_event = self._collision.last_score_event
                self._events.score_changed(score_event.total, self._collision.scorer.tallies)

        if finished:
            self._projectiles = [p for p in self._projectiles if p.active]
        return finished
