"""
Variant Catalog
===============

Provides convenient access to the three note colors loaded from config.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from crumple_toss.toss_core.config_loader import (
    GameConfig,
    VariantConfig,
    get_config
)


@dataclass(frozen=True)
class Variant:
    """
    Runtime representation of a note color.

    Wraps VariantConfig with convenience properties.
    """
    config: VariantConfig

    @property
    def id(self) -> int:
        return self.config.id

    @property
    def tag(self) -> str:
        return self.config.tag

    @property
    def difficulty(self) -> str:
        return self.config.difficulty

    @property
    def color(self) -> str:
        return self.config.color

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.config.rgb

    @property
    def collision_multiplier(self) -> float:
        return self.config.collision_multiplier

    @property
    def points(self) -> int:
        return self.config.points

    @property
    def label(self) -> str:
        """Human readable tier, e.g. 'Hard (3 points)'."""
        suffix = "s" if self.points > 1 else ""
        return f"{self.difficulty.capitalize()} ({self.points} point{suffix})"

    def __repr__(self) -> str:
        return f"Variant({self.id}: {self.tag})"


class VariantCatalog:
    """
    Collection of the note colors, ordered easy to hard.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize catalog from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._variants: Tuple[Variant, ...] = tuple(
            Variant(variant_config) for variant_config in config.variants
        )

    def __len__(self) -> int:
        return len(self._variants)

    def __getitem__(self, variant_id: int) -> Variant:
        """Get variant by ID."""
        if 0 <= variant_id < len(self._variants):
            return self._variants[variant_id]
        raise IndexError(f"Variant ID {variant_id} out of range [0, {len(self._variants)})")

    def __iter__(self):
        return iter(self._variants)

    @property
    def all_variants(self) -> Tuple[Variant, ...]:
        return self._variants

    @property
    def tags(self) -> Tuple[str, ...]:
        """Variant tags in catalog order (used as tally keys)."""
        return tuple(v.tag for v in self._variants)

    @property
    def easy(self) -> Variant:
        return self.get_by_difficulty("easy")

    @property
    def medium(self) -> Variant:
        return self.get_by_difficulty("medium")

    @property
    def hard(self) -> Variant:
        return self.get_by_difficulty("hard")

    def get_by_tag(self, tag: str) -> Optional[Variant]:
        """Get variant by color tag (case-insensitive)."""
        tag_lower = tag.lower()
        for variant in self._variants:
            if variant.tag.lower() == tag_lower:
                return variant
        return None

    def get_by_difficulty(self, difficulty: str) -> Variant:
        """Get variant by difficulty name (case-insensitive)."""
        difficulty_lower = difficulty.lower()
        for variant in self._variants:
            if variant.difficulty.lower() == difficulty_lower:
                return variant
        raise KeyError(f"No variant with difficulty '{difficulty}'")


# Cached catalog for the default config
_cached_catalog: Optional[VariantCatalog] = None


def get_catalog(config: Optional[GameConfig] = None) -> VariantCatalog:
    """
    Get a variant catalog.

    Args:
        config: Optional config to use. If None, uses the cached default catalog.

    Returns:
        VariantCatalog instance.
    """
    global _cached_catalog
    if config is not None:
        return VariantCatalog(config)
    if _cached_catalog is None:
        _cached_catalog = VariantCatalog()
    return _cached_catalog
