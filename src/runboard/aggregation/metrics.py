"""
Run statistics aggregation.

Pure functions from validated run records to overall metrics and
per-runner statistics. Sums and means are computed on raw values and
rounded only for display.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

import pandas as pd

from runboard.ingestion.base import RunRecord, records_to_dataframe
from runboard.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_DECIMALS = 2

RUNNER_STATS_COLUMNS = [
    "runner_name",
    "total_miles",
    "average_miles",
    "minimum_miles",
    "maximum_miles",
    "run_count",
]


def round_display(value: float, decimals: int = DEFAULT_DECIMALS) -> float:
    """
    Round a value for display, halves away from zero.

    Rounds the exact binary value, so 4.85 (stored just below 4.85)
    stays 4.85 and a true half such as 0.125 becomes 0.13.
    """
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class OverallMetrics:
    """
    Statistics across every run in an upload.

    Attributes:
        total_runs: Number of runs.
        total_miles: Sum of distances.
        average_miles_per_run: Mean distance.
        minimum_miles: Shortest run.
        maximum_miles: Longest run.
        unique_runners: Number of distinct runners (case-insensitive).
    """

    total_runs: int
    total_miles: float
    average_miles_per_run: float
    minimum_miles: float
    maximum_miles: float
    unique_runners: int

    @classmethod
    def empty(cls) -> "OverallMetrics":
        """Metrics for an upload without runs."""
        return cls(
            total_runs=0,
            total_miles=0.0,
            average_miles_per_run=0.0,
            minimum_miles=0.0,
            maximum_miles=0.0,
            unique_runners=0,
        )


@dataclass(frozen=True)
class RunnerStatistics:
    """
    Statistics for one runner.

    Attributes:
        runner_name: Display name from the runner's first record.
        total_miles: Sum of the runner's distances.
        average_miles: Mean distance per run.
        minimum_miles: Shortest run.
        maximum_miles: Longest run.
        run_count: Number of runs.
    """

    runner_name: str
    total_miles: float
    average_miles: float
    minimum_miles: float
    maximum_miles: float
    run_count: int


def _with_runner_key(records: Sequence[RunRecord]) -> pd.DataFrame:
    """Records as a DataFrame with the case-insensitive runner key."""
    df = records_to_dataframe(records)
    df["runner_key"] = df["person"].str.strip().str.lower()
    return df


def calculate_overall_metrics(
    records: Sequence[RunRecord],
    decimals: int = DEFAULT_DECIMALS,
) -> OverallMetrics:
    """
    Compute statistics across all run records.

    Args:
        records: Validated run records.
        decimals: Display rounding.

    Returns:
        OverallMetrics; all zeros when there are no records.
    """
    if not records:
        return OverallMetrics.empty()

    df = _with_runner_key(records)
    miles = df["miles_run"]
    total = float(miles.sum())

    return OverallMetrics(
        total_runs=len(df),
        total_miles=round_display(total, decimals),
        average_miles_per_run=round_display(total / len(df), decimals),
        minimum_miles=round_display(float(miles.min()), decimals),
        maximum_miles=round_display(float(miles.max()), decimals),
        unique_runners=int(df["runner_key"].nunique()),
    )


def calculate_runner_stats(
    records: Sequence[RunRecord],
    decimals: int = DEFAULT_DECIMALS,
) -> list[RunnerStatistics]:
    """
    Compute per-runner statistics.

    Runners are grouped by lower-cased trimmed name. The result is
    ordered by total miles descending; runners with equal totals keep
    the order in which they first appear.

    Args:
        records: Validated run records.
        decimals: Display rounding.

    Returns:
        One RunnerStatistics per runner.
    """
    if not records:
        return []

    df = _with_runner_key(records)
    grouped = df.groupby("runner_key", sort=False)["miles_run"]
    summary = pd.DataFrame(
        {
            "runner_name": df.groupby("runner_key", sort=False)["person"].first(),
            "total": grouped.sum(),
            "minimum": grouped.min(),
            "maximum": grouped.max(),
            "run_count": grouped.size(),
        }
    )

    stats = [
        RunnerStatistics(
            runner_name=str(row.runner_name),
            total_miles=round_display(float(row.total), decimals),
            average_miles=round_display(float(row.total) / int(row.run_count), decimals),
            minimum_miles=round_display(float(row.minimum), decimals),
            maximum_miles=round_display(float(row.maximum), decimals),
            run_count=int(row.run_count),
        )
        for row in summary.itertuples(index=False)
    ]

    # sorted() is stable, so ties keep first-seen order
    stats = sorted(stats, key=lambda s: s.total_miles, reverse=True)

    log.debug("Computed runner statistics", runners=len(stats), runs=len(df))
    return stats


def runner_stats_to_dataframe(stats: Sequence[RunnerStatistics]) -> pd.DataFrame:
    """
    Convert runner statistics to DataFrame.

    Args:
        stats: Runner statistics in display order.

    Returns:
        DataFrame with one row per runner. Returns empty DataFrame with
        proper columns if there are no runners.
    """
    data = [
        {
            "runner_name": s.runner_name,
            "total_miles": s.total_miles,
            "average_miles": s.average_miles,
            "minimum_miles": s.minimum_miles,
            "maximum_miles": s.maximum_miles,
            "run_count": s.run_count,
        }
        for s in stats
    ]

    if not data:
        return pd.DataFrame(columns=RUNNER_STATS_COLUMNS)

    return pd.DataFrame(data, columns=RUNNER_STATS_COLUMNS)
