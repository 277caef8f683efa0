"""Focus session state machine (work / short break / long break)."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from chronicle_cli.errors import ValidationError
from chronicle_cli.models.events import EventBus, PomodoroCompleted

if TYPE_CHECKING:
    from chronicle_cli.services.notifier import Notifier

logger = logging.getLogger(__name__)

SESSIONS_BEFORE_LONG_BREAK = 4


class Phase(str, Enum):
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def display_name(self) -> str:
        return {
            Phase.WORK: "Focus Time",
            Phase.SHORT_BREAK: "Short Break",
            Phase.LONG_BREAK: "Long Break",
        }[self]

    @property
    def is_break(self) -> bool:
        return self is not Phase.WORK


@dataclass(frozen=True)
class FocusConfiguration:
    """Phase durations (seconds) and notification preferences.

    Validated on construction, so an instance is always usable by the engine.
    """

    work_seconds: int = 25 * 60
    short_break_seconds: int = 5 * 60
    long_break_seconds: int = 15 * 60
    notify_on_sound: bool = True
    notify_on_haptic: bool = True

    def __post_init__(self) -> None:
        for name in ("work_seconds", "short_break_seconds", "long_break_seconds"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                message = f"{name} must be an integer, got {value!r}"
            elif value <= 0:
                message = f"{name} must be positive, got {value}"
            else:
                continue
            logger.warning("rejected focus configuration: %s", message)
            raise ValidationError(message)

    @classmethod
    def from_minutes(
        cls,
        work: int,
        short_break: int,
        long_break: int,
        sound: bool = True,
        haptic: bool = True,
    ) -> FocusConfiguration:
        """Build a configuration from minute values."""
        return cls(
            work_seconds=work * 60,
            short_break_seconds=short_break * 60,
            long_break_seconds=long_break * 60,
            notify_on_sound=sound,
            notify_on_haptic=haptic,
        )

    def duration_for(self, phase: Phase) -> int:
        if phase is Phase.WORK:
            return self.work_seconds
        if phase is Phase.SHORT_BREAK:
            return self.short_break_seconds
        return self.long_break_seconds


@dataclass
class FocusSessionState:
    """Mutable timer state, owned by a single FocusEngine."""

    phase: Phase
    seconds_remaining: int
    cycle_index: int = 1
    completed_work_sessions: int = 0
    accumulated_focus_seconds: int = 0
    is_running: bool = False

    def to_dict(self) -> dict:
        data = asdict(self)
        data["phase"] = self.phase.value
        return data


class FocusEngine:
    """Pomodoro state machine advanced by one-second ticks or commands.

    The engine never reads analytics. Completed work phases are announced
    as ``PomodoroCompleted`` events on the optional event bus.
    """

    def __init__(
        self,
        config: FocusConfiguration | None = None,
        *,
        event_bus: EventBus | None = None,
        notifier: Notifier | None = None,
    ):
        self._config = config or FocusConfiguration()
        self._event_bus = event_bus
        self._notifier = notifier
        self._state = FocusSessionState(
            phase=Phase.WORK, seconds_remaining=self._config.work_seconds
        )

    # -- read-only view -------------------------------------------------

    @property
    def config(self) -> FocusConfiguration:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def seconds_remaining(self) -> int:
        return self._state.seconds_remaining

    @property
    def cycle_index(self) -> int:
        return self._state.cycle_index

    @property
    def position_in_cycle(self) -> int:
        """1-based position of the current work session within its cycle."""
        return (self._state.cycle_index - 1) % SESSIONS_BEFORE_LONG_BREAK + 1

    @property
    def completed_work_sessions(self) -> int:
        return self._state.completed_work_sessions

    @property
    def accumulated_focus_seconds(self) -> int:
        return self._state.accumulated_focus_seconds

    @property
    def is_running(self) -> bool:
        return self._state.is_running

    @property
    def progress_fraction(self) -> float:
        """Fraction of the active phase already elapsed, 0.0 to 1.0."""
        total = self.duration_for(self._state.phase)
        return 1.0 - self._state.seconds_remaining / total

    def duration_for(self, phase: Phase) -> int:
        return self._config.duration_for(phase)

    def snapshot(self) -> FocusSessionState:
        """Return a copy of the current state for display."""
        return replace(self._state)

    # -- commands -------------------------------------------------------

    def configure(self, config: FocusConfiguration) -> None:
        """Replace the configuration.

        A stopped timer restarts the current phase with the new duration. A
        running timer keeps its remaining time, clamped to the new duration.
        """
        if not isinstance(config, FocusConfiguration):
            raise ValidationError(
                f"expected FocusConfiguration, got {type(config).__name__}"
            )

        self._config = config
        new_duration = config.duration_for(self._state.phase)
        if not self._state.is_running:
            self._state.seconds_remaining = new_duration
        elif self._state.seconds_remaining > new_duration:
            self._state.seconds_remaining = new_duration
        logger.debug("focus engine reconfigured: %s", config)

    def start(self) -> None:
        self._state.is_running = True

    def pause(self) -> None:
        self._state.is_running = False

    def toggle(self) -> None:
        """Pause a running timer or start a paused one."""
        if self._state.is_running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Return to the first work phase. Lifetime counters are kept."""
        self.pause()
        self._state.phase = Phase.WORK
        self._state.cycle_index = 1
        self._state.seconds_remaining = self._config.work_seconds

    def tick(self) -> Phase | None:
        """Advance one elapsed second.

        Returns the newly entered phase when the tick completed the current
        one, otherwise None. Ticks are ignored while paused.
        """
        if not self._state.is_running:
            return None

        # Ticking never leaves 0 behind; this covers state arriving at 0
        if self._state.seconds_remaining == 0:
            return self.complete_current_phase()

        self._state.seconds_remaining -= 1
        if self._state.phase is Phase.WORK:
            self._state.accumulated_focus_seconds += 1

        if self._state.seconds_remaining == 0:
            return self.complete_current_phase()
        return None

    def skip(self) -> Phase:
        """Complete the current phase immediately."""
        return self.complete_current_phase()

    def complete_current_phase(self) -> Phase:
        state = self._state
        finished = state.phase
        event = None

        if finished is Phase.WORK:
            state.completed_work_sessions += 1
            if state.cycle_index % SESSIONS_BEFORE_LONG_BREAK == 0:
                next_phase = Phase.LONG_BREAK
            else:
                next_phase = Phase.SHORT_BREAK
            event = PomodoroCompleted(duration_seconds=self._config.work_seconds)
        else:
            next_phase = Phase.WORK
            state.cycle_index += 1

        state.phase = next_phase
        state.seconds_remaining = self._config.duration_for(next_phase)
        logger.debug(
            "phase %s -> %s (cycle %d)", finished.value, next_phase.value, state.cycle_index
        )

        self._notify()
        if event is not None and self._event_bus is not None:
            self._event_bus.publish(event)
        return next_phase

    def _notify(self) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.notify(
                sound=self._config.notify_on_sound,
                haptic=self._config.notify_on_haptic,
            )
        except Exception:
            logger.debug("notification failed", exc_info=True)
