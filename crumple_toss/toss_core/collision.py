"""
Collision & Scoring Engine
==========================

Classifies each in-flight note once per frame: lost off the field, landed in
the bin, or still flying.
"""

from __future__ import annotations

from typing import Optional

import pymunk

from crumple_toss.toss_core.config_loader import GameConfig, get_config
from crumple_toss.toss_core.projectile import Outcome, Projectile
from crumple_toss.toss_core.scoring import ScoreEvent, ScoreTracker
from crumple_toss.toss_core.target import TargetController


def boxes_overlap(a: pymunk.BB, b: pymunk.BB) -> bool:
    """
    Strict AABB overlap; boxes that only share an edge do not touch.

    Field y grows downward, so ``bottom`` holds the smaller y.
    """
    return (
        a.right > b.left and
        a.left < b.right and
        a.top > b.bottom and
        a.bottom < b.top
    )


class CollisionEngine:
    """
    Bounds and bin tests for thrown notes.

    The bounds test always runs first: a note that is past the field margin
    counts as a miss even if its box also overlaps the bin that frame.
    """

    def __init__(
        self,
        scorer: ScoreTracker,
        config: Optional[GameConfig] = None
    ):
        """
        Args:
            scorer: Tracker credited on every hit, in or out of a session.
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._scorer = scorer
        self._field_width = float(config.field.width)
        self._field_height = float(config.field.height)
        self._margin = config.field.out_of_bounds_margin
        self.last_score_event: Optional[ScoreEvent] = None

    @property
    def scorer(self) -> ScoreTracker:
        return self._scorer

    def evaluate(self, projectile: Projectile, target: TargetController) -> Outcome:
        """
        Test one note against the field and the bin.

        Args:
            projectile: Note to classify. Marked hit/missed in place.
            target: Current bin.

        Returns:
            The note's outcome after this test.
        """
        self.last_score_event = None
        if not projectile.active:
            return projectile.outcome

        if projectile.is_out_of_bounds(self._field_width, self._field_height, self._margin):
            projectile.mark_missed()
            return Outcome.MISS

        if boxes_overlap(projectile.hit_box(), target.bounds()):
            projectile.mark_hit()
            self.last_score_event = self._scorer.apply_hit(projectile.variant)
            return Outcome.HIT

        return Outcome.IN_FLIGHT
