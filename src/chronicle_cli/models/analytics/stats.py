"""Analytics records: daily and weekly rollups, lifetime totals, snapshot."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date


def _fields(data: object, kind: str) -> dict:
    """Copy of a decoded JSON object, with every counter checked to be numeric."""
    if not isinstance(data, dict):
        raise TypeError(f"{kind} must be an object, got {type(data).__name__}")
    for name, value in data.items():
        if name in ("day", "week_start", "completion_rate"):
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{kind}.{name} must be a number, got {value!r}")
    return dict(data)


def _items(data: dict, key: str) -> list:
    items = data.get(key, [])
    if not isinstance(items, list):
        raise TypeError(f"{key} must be a list, got {type(items).__name__}")
    return items


@dataclass
class DailyStat:
    """Counters for one local calendar day."""

    day: date
    tasks_created: int = 0
    tasks_completed: int = 0
    notes_created: int = 0
    focus_seconds: float = 0.0
    pomodoro_sessions: int = 0

    def has_data(self) -> bool:
        return bool(
            self.tasks_created
            or self.tasks_completed
            or self.notes_created
            or self.focus_seconds
            or self.pomodoro_sessions
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data["day"] = self.day.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> DailyStat:
        data = _fields(data, "daily")
        data["day"] = date.fromisoformat(data["day"])
        return cls(**data)


@dataclass
class WeeklyStat:
    """Rollup of the seven daily stats starting at ``week_start`` (a Monday)."""

    week_start: date
    total_tasks: int = 0
    completed_tasks: int = 0
    total_focus_seconds: float = 0.0
    days_with_data: int = 0

    @property
    def average_daily_productivity(self) -> float:
        """Completed tasks per day that had any recorded data."""
        if self.days_with_data == 0:
            return 0.0
        return self.completed_tasks / self.days_with_data

    def to_dict(self) -> dict:
        data = asdict(self)
        data["week_start"] = self.week_start.isoformat()
        data["average_daily_productivity"] = self.average_daily_productivity
        return data

    @classmethod
    def from_dict(cls, data: dict) -> WeeklyStat:
        data = _fields(data, "weekly")
        data.pop("average_daily_productivity", None)
        data["week_start"] = date.fromisoformat(data["week_start"])
        return cls(**data)


@dataclass
class AnalyticsTotals:
    """Process-lifetime counters."""

    tasks_created: int = 0
    tasks_completed: int = 0
    notes_created: int = 0
    pomodoro_sessions_completed: int = 0
    total_focus_seconds: float = 0.0

    @property
    def completion_rate(self) -> float | None:
        """Completed / created tasks, or None when no task was created."""
        if self.tasks_created <= 0:
            return None
        return self.tasks_completed / self.tasks_created

    def to_dict(self) -> dict:
        data = asdict(self)
        data["completion_rate"] = self.completion_rate
        return data

    @classmethod
    def from_dict(cls, data: dict) -> AnalyticsTotals:
        data = _fields(data, "totals")
        data.pop("completion_rate", None)
        return cls(**data)


@dataclass
class AnalyticsSnapshot:
    """Everything the aggregator persists, saved and loaded as one unit."""

    totals: AnalyticsTotals = field(default_factory=AnalyticsTotals)
    daily: dict[date, DailyStat] = field(default_factory=dict)
    weekly: list[WeeklyStat] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "totals": self.totals.to_dict(),
            "daily": [stat.to_dict() for _, stat in sorted(self.daily.items())],
            "weekly": [week.to_dict() for week in self.weekly],
        }

    @classmethod
    def from_dict(cls, data: dict) -> AnalyticsSnapshot:
        if not isinstance(data, dict):
            raise TypeError(f"snapshot must be an object, got {type(data).__name__}")
        daily = [DailyStat.from_dict(item) for item in _items(data, "daily")]
        return cls(
            totals=AnalyticsTotals.from_dict(data.get("totals", {})),
            daily={stat.day: stat for stat in daily},
            weekly=[WeeklyStat.from_dict(item) for item in _items(data, "weekly")],
        )
