"""
Session State Machine
=====================

One timed round: start, once-per-second countdown, and the end transition
(timer expiry or forced end).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from crumple_toss.toss_core.config_loader import GameConfig, get_config
from crumple_toss.toss_core.events import EventDispatcher
from crumple_toss.toss_core.scoring import ScoreTracker


@dataclass
class SessionResult:
    """Final numbers of a finished session."""
    score: int
    tallies: Dict[str, int] = field(default_factory=dict)
    reason: str = ""


class CountdownTimer:
    """
    Cancellable interval tick source.

    Fed real elapsed time through ``advance``; calls ``callback`` once per
    whole interval while armed. Cancelling clears any partial interval.
    """

    def __init__(self, interval: float, callback: Callable[[], None]):
        self._interval = interval
        self._callback = callback
        self._armed = False
        self._accumulator = 0.0

    @property
    def armed(self) -> bool:
        return self._armed

    def arm(self) -> None:
        self._armed = True
        self._accumulator = 0.0

    def cancel(self) -> None:
        self._armed = False
        self._accumulator = 0.0

    def advance(self, elapsed: float) -> int:
        """
        Accumulate elapsed seconds and fire due ticks.

        Returns:
            Number of ticks fired. Stops early if a tick cancels the timer.
        """
        if not self._armed or elapsed <= 0:
            return 0

        self._accumulator += elapsed
        fired = 0
        while self._armed and self._accumulator >= self._interval:
            self._accumulator -= self._interval
            fired += 1
            self._callback()
        return fired


class SessionStateMachine:
    """
    Tracks whether a round is running and how long it has left.

    States: inactive -> active (start) -> inactive (expiry or force_end).
    """

    def __init__(
        self,
        scorer: ScoreTracker,
        events: EventDispatcher,
        config: Optional[GameConfig] = None
    ):
        if config is None:
            config = get_config()

        self._config = config
        self._scorer = scorer
        self._events = events
        self._duration = config.session.duration_seconds
        self._active = False
        self._seconds_remaining = self._duration
        self._timer = CountdownTimer(config.session.tick_interval, self.second_tick)
        self._last_result: Optional[SessionResult] = None

    @property
    def active(self) -> bool:
        return self._active

    @property
    def seconds_remaining(self) -> int:
        return self._seconds_remaining

    @property
    def timer(self) -> CountdownTimer:
        return self._timer

    @property
    def last_result(self) -> Optional[SessionResult]:
        """Result of the most recently finished session."""
        return self._last_result

    def start(self) -> bool:
        """
        Begin a new round. No-op while a round is already running.

        Returns:
            True if a round was started.
        """
        if self._active:
            return False

        self._scorer.reset()
        self._seconds_remaining = self._duration
        self._active = True
        self._timer.arm()

        self._events.session_started()
        self._events.score_changed(self._scorer.score, self._scorer.tallies)
        self._events.time_changed(self._seconds_remaining)
        return True

    def second_tick(self) -> None:
        """One second of the countdown. Ignored when no round is running."""
        if not self._active:
            return

        self._seconds_remaining = max(0, self._seconds_remaining - 1)
        self._events.time_changed(self._seconds_remaining)

        if self._seconds_remaining <= 0:
            self._end("time_up")

    def force_end(self) -> bool:
        """
        End the round now (e.g. restart). No-op when no round is running.

        Returns:
            True if a round was ended.
        """
        if not self._active:
            return False
        self._end("forced")
        return True

    def _end(self, reason: str) -> None:
        self._active = False
        self._timer.cancel()
        self._last_result = SessionResult(
            score=self._scorer.score,
            tallies=self._scorer.tallies,
            reason=reason
        )
        self._events.session_ended(self._last_result.score, self._last_result.tallies)
