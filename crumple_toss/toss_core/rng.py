"""
RNG - Variant Picker
====================

Draws note colors uniformly at random from a private, seedable generator so
each game instance is reproducible on its own.
"""

from __future__ import annotations

import random
from typing import List, Optional

from crumple_toss.toss_core.variant_catalog import Variant, VariantCatalog


class VariantPicker:
    """
    Uniform variant selection for the next charged throw.

    Also hands out seeds for cosmetic note geometry so the crumple shape of
    every thrown note is reproducible from the game seed.
    """

    def __init__(self, catalog: VariantCatalog, seed: Optional[int] = None):
        """
        Initialize picker.

        Args:
            catalog: Catalog to draw variants from.
            seed: Random seed for reproducibility. Random if None.
        """
        self._catalog = catalog
        self._rng = random.Random(seed)

    def draw(self) -> Variant:
        """Pick one variant, each with equal probability."""
        return self._rng.choice(self._catalog.all_variants)

    def draw_many(self, count: int) -> List[Variant]:
        """Draw several variants (consumes the sequence)."""
        return [self.draw() for _ in range(count)]

    def next_shape_seed(self) -> int:
        """Seed for one note's crumple geometry."""
        return self._rng.getrandbits(32)

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the generator.

        Args:
            seed: New random seed. Fresh entropy if None.
        """
        self._rng = random.Random(seed)
