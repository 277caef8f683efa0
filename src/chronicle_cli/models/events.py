"""In-process event bus carrying completion events to the analytics layer."""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True)
class Event:
    """Base class for completion events."""

    occurred_at: datetime = field(default_factory=_now, kw_only=True)

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class PomodoroCompleted(Event):
    """A work phase finished, naturally or by skip."""

    duration_seconds: int


@dataclass(frozen=True)
class FocusTimeLogged(Event):
    """Focus time recorded outside a completed pomodoro."""

    duration_seconds: float


@dataclass(frozen=True)
class TaskCreated(Event):
    pass


@dataclass(frozen=True)
class TaskCompleted(Event):
    pass


@dataclass(frozen=True)
class NoteCreated(Event):
    pass


EventHandler = Callable[[Event], None]


class EventBus:
    """Synchronous pub/sub bus.

    Handlers run in subscription order on the publishing thread. A handler
    that raises is logged and skipped; the remaining handlers still run.
    """

    def __init__(self) -> None:
        self._handlers: list[EventHandler] = []
        self.events_published = 0

    def subscribe(self, handler: EventHandler) -> Callable[[], None]:
        self._handlers.append(handler)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._handlers.remove(handler)

        return _unsubscribe

    def publish(self, event: Event) -> Event:
        self.events_published += 1
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception:
                logger.exception("event handler failed for %s", event.name)
        return event
