"""Productivity analytics aggregator.

Accumulates task, note and focus events into lifetime totals and per-day
stats, rolls days up into weeks on request, and derives insights. Every
mutation is followed by a snapshot save through the persistence
collaborator; a failed save leaves the in-memory state authoritative.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import date, timedelta
from typing import Any, Protocol

from chronicle_cli.errors import PersistenceError, ValidationError
from chronicle_cli.models.events import (
    Event,
    EventBus,
    FocusTimeLogged,
    NoteCreated,
    PomodoroCompleted,
    TaskCompleted,
    TaskCreated,
)

from .insights import Insight, derive_insights
from .stats import AnalyticsSnapshot, AnalyticsTotals, DailyStat, WeeklyStat

logger = logging.getLogger(__name__)

WEEKS_RETAINED = 12
DAYS_PER_WEEK = 7


class SnapshotPersistence(Protocol):
    def load_snapshot(self) -> AnalyticsSnapshot: ...

    def save_snapshot(self, snapshot: AnalyticsSnapshot) -> None: ...


def week_start_for(day: date) -> date:
    """Monday of the ISO week containing ``day``."""
    return day - timedelta(days=day.weekday())


class AnalyticsAggregator:
    """Owns the analytics snapshot; the only writer of daily/weekly stats."""

    def __init__(
        self,
        persistence: SnapshotPersistence | None = None,
        *,
        today: Callable[[], date] = date.today,
    ):
        self._persistence = persistence
        self._today = today
        self.last_save_error: PersistenceError | None = None
        self._snapshot = self._load()

    def today(self) -> date:
        """The current day as seen by this aggregator."""
        return self._today()

    def _load(self) -> AnalyticsSnapshot:
        if self._persistence is None:
            return AnalyticsSnapshot()
        try:
            return self._persistence.load_snapshot()
        except PersistenceError as e:
            logger.warning("could not load analytics snapshot, starting empty: %s", e)
            return AnalyticsSnapshot()

    def _save(self) -> None:
        if self._persistence is None:
            return
        try:
            self._persistence.save_snapshot(self._snapshot)
            self.last_save_error = None
        except PersistenceError as e:
            logger.error("could not save analytics snapshot: %s", e)
            self.last_save_error = e

    def _day(self, on: date | None) -> DailyStat:
        key = on or self._today()
        stat = self._snapshot.daily.get(key)
        if stat is None:
            stat = DailyStat(day=key)
            self._snapshot.daily[key] = stat
        return stat

    # -- recording ------------------------------------------------------

    def record_task_created(self, on: date | None = None) -> None:
        self._snapshot.totals.tasks_created += 1
        self._day(on).tasks_created += 1
        self._save()

    def record_task_completed(self, on: date | None = None) -> None:
        self._snapshot.totals.tasks_completed += 1
        self._day(on).tasks_completed += 1
        self._save()

    def record_note_created(self, on: date | None = None) -> None:
        self._snapshot.totals.notes_created += 1
        self._day(on).notes_created += 1
        self._save()

    def record_focus_completed(self, duration_seconds: float, on: date | None = None) -> None:
        """Record one completed pomodoro of ``duration_seconds``."""
        _check_duration(duration_seconds)
        totals = self._snapshot.totals
        totals.pomodoro_sessions_completed += 1
        totals.total_focus_seconds += duration_seconds
        stat = self._day(on)
        stat.pomodoro_sessions += 1
        stat.focus_seconds += duration_seconds
        self._save()

    def record_focus_time(self, duration_seconds: float, on: date | None = None) -> None:
        """Record focus time that did not complete a pomodoro."""
        _check_duration(duration_seconds)
        self._snapshot.totals.total_focus_seconds += duration_seconds
        self._day(on).focus_seconds += duration_seconds
        self._save()

    def attach(self, bus: EventBus) -> Callable[[], None]:
        """Subscribe to completion events on ``bus``."""
        return bus.subscribe(self.handle)

    def handle(self, event: Event) -> None:
        on = event.occurred_at.date()
        if isinstance(event, PomodoroCompleted):
            self.record_focus_completed(event.duration_seconds, on=on)
        elif isinstance(event, FocusTimeLogged):
            self.record_focus_time(event.duration_seconds, on=on)
        elif isinstance(event, TaskCreated):
            self.record_task_created(on=on)
        elif isinstance(event, TaskCompleted):
            self.record_task_completed(on=on)
        elif isinstance(event, NoteCreated):
            self.record_note_created(on=on)
        else:
            logger.debug("ignoring unknown event %s", event.name)

    # -- rollup ---------------------------------------------------------

    def recompute_weekly_rollup(self, reference_date: date | None = None) -> WeeklyStat:
        """
        Rebuild the weekly stat for the week containing ``reference_date``.

        The week is upserted, then weeks are ordered newest first and only
        the most recent ``WEEKS_RETAINED`` are kept.

        Args:
            reference_date: Any day of the target week (defaults to today)

        Returns:
            The recomputed WeeklyStat
        """
        week_start = week_start_for(reference_date or self._today())
        week = WeeklyStat(week_start=week_start)

        for offset in range(DAYS_PER_WEEK):
            stat = self._snapshot.daily.get(week_start + timedelta(days=offset))
            if stat is None or not stat.has_data():
                continue
            week.total_tasks += stat.tasks_created
            week.completed_tasks += stat.tasks_completed
            week.total_focus_seconds += stat.focus_seconds
            week.days_with_data += 1

        weeks = [w for w in self._snapshot.weekly if w.week_start != week_start]
        weeks.append(week)
        weeks.sort(key=lambda w: w.week_start, reverse=True)
        self._snapshot.weekly = weeks[:WEEKS_RETAINED]

        self._save()
        return replace(week)

    # -- queries --------------------------------------------------------

    def insights(self, as_of: date | None = None) -> list[Insight]:
        """Derive insights for ``as_of`` (defaults to today). Never cached."""
        day = as_of or self._today()
        return derive_insights(
            today=self._snapshot.daily.get(day),
            weekly=self.weekly_stats(),
            totals=self._snapshot.totals,
        )

    def totals(self) -> AnalyticsTotals:
        return replace(self._snapshot.totals)

    def daily_stat(self, day: date | None = None) -> DailyStat | None:
        stat = self._snapshot.daily.get(day or self._today())
        return replace(stat) if stat is not None else None

    def weekly_stats(self) -> list[WeeklyStat]:
        """Weekly rollups, newest first."""
        weeks = sorted(self._snapshot.weekly, key=lambda w: w.week_start, reverse=True)
        return [replace(w) for w in weeks]

    def export(self) -> dict[str, Any]:
        return self._snapshot.to_dict()

    def reset(self) -> None:
        """Discard all analytics, including daily and weekly stats."""
        self._snapshot = AnalyticsSnapshot()
        self._save()


def _check_duration(duration_seconds: float) -> None:
    if duration_seconds < 0:
        raise ValidationError(f"duration must not be negative, got {duration_seconds}")
