"""Focus mode - Pomodoro state machine and its terminal front end."""

from .clock import ManualClock, MonotonicClock, TickDriver
from .engine import (
    SESSIONS_BEFORE_LONG_BREAK,
    FocusConfiguration,
    FocusEngine,
    FocusSessionState,
    Phase,
)

__all__ = [
    "FocusConfiguration",
    "FocusEngine",
    "FocusSessionState",
    "ManualClock",
    "MonotonicClock",
    "Phase",
    "SESSIONS_BEFORE_LONG_BREAK",
    "TickDriver",
]
