"""
Scoring System
==============

Credits landed notes to the running score and per-color tallies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from crumple_toss.toss_core.config_loader import GameConfig, get_config
from crumple_toss.toss_core.variant_catalog import Variant, VariantCatalog, get_catalog


@dataclass
class ScoreEvent:
    """Record of a scoring event."""
    points: int
    variant_tag: str
    total: int

    def __repr__(self) -> str:
        return f"ScoreEvent({self.variant_tag}+{self.points}, total={self.total})"


class ScoreTracker:
    """
    Tracks the session score.

    Every point added to the total is also added to exactly one color tally,
    so the tallies always sum to the score.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        catalog: Optional[VariantCatalog] = None
    ):
        if config is None:
            config = get_config()
        if catalog is None:
            catalog = get_catalog(config)

        self._config = config
        self._catalog = catalog
        self._score: int = 0
        self._tallies: Dict[str, int] = {tag: 0 for tag in catalog.tags}

    @property
    def score(self) -> int:
        """Current total score."""
        return self._score

    @property
    def tallies(self) -> Dict[str, int]:
        """Points per color tag (copy)."""
        return dict(self._tallies)

    def apply_hit(self, variant: Variant) -> ScoreEvent:
        """
        Credit one landed note.

        Args:
            variant: Color of the note that landed.

        Returns:
            ScoreEvent describing the points awarded.
        """
        self._score += variant.points
        self._tallies[variant.tag] += variant.points
        return ScoreEvent(points=variant.points, variant_tag=variant.tag, total=self._score)

    def hits_by_tag(self) -> Dict[str, int]:
        """Number of landed notes per color, derived from the tallies."""
        return {
            variant.tag: self._tallies[variant.tag] // variant.points
            for variant in self._catalog
        }

    def reset(self) -> None:
        """Reset score and tallies to zero."""
        self._score = 0
        for tag in self._tallies:
            self._tallies[tag] = 0
