"""
Statistics aggregation over validated run records.

All functions are pure: they take the record sequence explicitly
and return freshly built values.
"""

from runboard.aggregation.metrics import (
    OverallMetrics,
    RunnerStatistics,
    calculate_overall_metrics,
    calculate_runner_stats,
    runner_stats_to_dataframe,
)
from runboard.aggregation.series import (
    ChartDataPoint,
    DailyRunData,
    RunnerTimelinePoint,
    daily_totals,
    runner_chart_data,
    runner_names,
    runner_timeline,
)

__all__ = [
    "ChartDataPoint",
    "DailyRunData",
    "OverallMetrics",
    "RunnerStatistics",
    "RunnerTimelinePoint",
    "calculate_overall_metrics",
    "calculate_runner_stats",
    "daily_totals",
    "runner_chart_data",
    "runner_names",
    "runner_stats_to_dataframe",
    "runner_timeline",
]
