# ramen_runner/game/clock.py
from __future__ import annotations
import time


class SystemClock:
    """Monotonic wall clock in milliseconds."""

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0


class ManualClock:
    """
    Clock that only moves when told to. Used by the environment and tests so
    spawn cooldowns and invincibility windows become deterministic.
    """

    def __init__(self, start_ms: float = 0.0):
        self._now = float(start_ms)

    def now_ms(self) -> float:
        return self._now

    def advance(self, delta_ms: float) -> float:
        assert delta_ms >= 0.0, "clock cannot run backwards"
        self._now += delta_ms
        return self._now

    def set(self, now_ms: float) -> None:
        self._now = float(now_ms)
