"""
Toss Core - The heart of the game.

This module provides the real-time simulation: note physics, the moving bin,
hold-to-charge throwing, collision and scoring, and the session countdown.

Main exports:
- CoreGame: One self-contained game instance
- GameListener: Base class for renderers, scoreboards and sound cues
- GameConfig: Configuration loaded from game_config.yaml
"""

from crumple_toss.toss_core.config_loader import GameConfig, load_config
from crumple_toss.toss_core.variant_catalog import Variant, VariantCatalog
from crumple_toss.toss_core.projectile import Outcome, Projectile
from crumple_toss.toss_core.events import GameListener
from crumple_toss.toss_core.launch import HeldNote, LaunchResult
from crumple_toss.toss_core.state_snapshot import FrameSnapshot
from crumple_toss.toss_core.game import CoreGame

__all__ = [
    "GameConfig",
    "load_config",
    "Variant",
    "VariantCatalog",
    "Outcome",
    "Projectile",
    "GameListener",
    "HeldNote",
    "LaunchResult",
    "FrameSnapshot",
    "CoreGame",
]
