"""
Game Events
===========

Outbound notifications for renderers, scoreboards and sound. Listeners are
fire-and-forget: a failing listener is logged and skipped, and never changes
simulation state.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from crumple_toss.toss_core.variant_catalog import Variant

logger = logging.getLogger(__name__)


class GameListener:
    """Base listener; override the hooks you need."""

    def on_score_changed(self, total: int, tallies: Dict[str, int]) -> None: ...
    def on_hit(self, variant: Variant) -> None: ...
    def on_miss(self) -> None: ...
    def on_time_changed(self, seconds_remaining: int) -> None: ...
    def on_session_started(self) -> None: ...
    def on_session_ended(self, final_score: int, final_tallies: Dict[str, int]) -> None: ...
    def on_charge_started(self, variant: Variant) -> None: ...
    def on_throw(self, variant: Variant, velocity: Tuple[float, float]) -> None: ...


class EventDispatcher:
    """Fans events out to registered listeners."""

    def __init__(self) -> None:
        self._listeners: List[GameListener] = []

    def add(self, listener: GameListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove(self, listener: GameListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listeners(self) -> List[GameListener]:
        return list(self._listeners)

    def emit(self, hook: str, *args) -> None:
        """Call ``hook`` on every listener that defines it."""
        for listener in list(self._listeners):
            handler = getattr(listener, hook, None)
            if handler is None:
                continue
            try:
                handler(*args)
            except Exception as exc:
                logger.warning("Listener %r failed in %s: %s", listener, hook, exc)

    def score_changed(self, total: int, tallies: Dict[str, int]) -> None:
        self.emit("on_score_changed", total, dict(tallies))

    def hit(self, variant: Variant) -> None:
        self.emit("on_hit", variant)

    def miss(self) -> None:
        self.emit("on_miss")

    def time_changed(self, seconds_remaining: int) -> None:
        self.emit("on_time_changed", seconds_remaining)

    def session_started(self) -> None:
        self.emit("on_session_started")

    def session_ended(self, final_score: int, final_tallies: Dict[str, int]) -> None:
        self.emit("on_session_ended", final_score, dict(final_tallies))

    def charge_started(self, variant: Variant) -> None:
        self.emit("on_charge_started", variant)

    def throw(self, variant: Variant, velocity: Tuple[float, float]) -> None:
        self.emit("on_throw", variant, velocity)
