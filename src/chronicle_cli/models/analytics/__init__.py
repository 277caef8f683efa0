"""Productivity analytics: rollups, totals and insights."""

from .aggregator import WEEKS_RETAINED, AnalyticsAggregator, week_start_for
from .insights import Insight, InsightType, derive_insights, format_focus_duration
from .stats import AnalyticsSnapshot, AnalyticsTotals, DailyStat, WeeklyStat

__all__ = [
    "AnalyticsAggregator",
    "AnalyticsSnapshot",
    "AnalyticsTotals",
    "DailyStat",
    "Insight",
    "InsightType",
    "WEEKS_RETAINED",
    "WeeklyStat",
    "derive_insights",
    "format_focus_duration",
    "week_start_for",
]
