"""Clock sources and the single-writer tick driver."""

from __future__ import annotations

import time
from collections import deque
from typing import Protocol

from .engine import FocusEngine, Phase


class Clock(Protocol):
    def now(self) -> float:
        """Monotonic time in seconds."""
        ...


class MonotonicClock:
    """Wall clock backed by ``time.monotonic``."""

    def now(self) -> float:
        return time.monotonic()


class ManualClock:
    """Clock advanced by hand, for tests and simulations."""

    def __init__(self, start: float = 0.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


class TickDriver:
    """Turns elapsed clock time into one-second engine ticks.

    Ticks are queued and applied strictly one at a time, in arrival order,
    from ``pump()``. Timer callbacks may ``post()`` ticks, but only the owner
    of the engine calls ``pump()``. Time spent paused never produces ticks.
    """

    def __init__(self, engine: FocusEngine, clock: Clock | None = None):
        self.engine = engine
        self.clock = clock or MonotonicClock()
        self._pending: deque[int] = deque()
        self._last: float | None = None
        self._carry = 0.0

    @property
    def pending(self) -> int:
        return len(self._pending)

    def post(self, count: int = 1) -> None:
        """Queue ``count`` elapsed-second notifications."""
        for _ in range(count):
            self._pending.append(1)

    def sample(self) -> int:
        """Read the clock and queue one tick per whole elapsed second."""
        now = self.clock.now()
        if not self.engine.is_running:
            self._last = None
            self._carry = 0.0
            return 0
        if self._last is None:
            self._last = now
            return 0

        self._carry += now - self._last
        self._last = now
        whole = int(self._carry)
        self._carry -= whole
        self.post(whole)
        return whole

    def pump(self) -> list[Phase]:
        """Sample the clock, then apply queued ticks.

        Returns the phases entered by transitions during this pump.
        """
        self.sample()
        entered = []
        while self._pending:
            self._pending.popleft()
            phase = self.engine.tick()
            if phase is not None:
                entered.append(phase)
        return entered

