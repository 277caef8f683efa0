"""Human-readable productivity insights derived from analytics data."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .stats import AnalyticsTotals, DailyStat, WeeklyStat


class InsightType(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class Insight:
    title: str
    description: str
    type: InsightType

    def to_dict(self) -> dict:
        return {"title": self.title, "description": self.description, "type": self.type.value}


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def format_focus_duration(seconds: float) -> str:
    """Format seconds as ``"1h 1m"``, or ``"25m"`` below one hour."""
    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


def derive_insights(
    today: DailyStat | None,
    weekly: list[WeeklyStat],
    totals: AnalyticsTotals,
) -> list[Insight]:
    """
    Build insights in a fixed order.

    Args:
        today: Stats for the day of interest, if any were recorded
        weekly: Weekly rollups sorted newest first
        totals: Lifetime counters

    Returns:
        Today's progress, focus time, weekly trend, lifetime sessions;
        each only when it has something to say.
    """
    insights: list[Insight] = []

    if today is not None:
        if today.tasks_completed > 0:
            insights.append(
                Insight(
                    title="Today's Progress",
                    description=f"You completed {_plural(today.tasks_completed, 'task')} today",
                    type=InsightType.POSITIVE,
                )
            )
        if today.focus_seconds > 0:
            insights.append(
                Insight(
                    title="Focus Time",
                    description=(
                        f"You focused for {format_focus_duration(today.focus_seconds)} today"
                    ),
                    type=InsightType.POSITIVE,
                )
            )

    if len(weekly) >= 2:
        this_week, last_week = weekly[0], weekly[1]
        improvement = this_week.completed_tasks - last_week.completed_tasks
        if improvement > 0:
            insights.append(
                Insight(
                    title="Weekly Improvement",
                    description=f"You completed {_plural(improvement, 'task')} more than last week",
                    type=InsightType.POSITIVE,
                )
            )
        elif improvement < 0:
            insights.append(
                Insight(
                    title="Weekly Challenge",
                    description=(
                        f"You completed {_plural(-improvement, 'task')} fewer than last week"
                    ),
                    type=InsightType.NEUTRAL,
                )
            )

    sessions = totals.pomodoro_sessions_completed
    if sessions > 0:
        insights.append(
            Insight(
                title="Focus Sessions",
                description=f"You've completed {_plural(sessions, 'focus session')} total",
                type=InsightType.POSITIVE,
            )
        )

    return insights
