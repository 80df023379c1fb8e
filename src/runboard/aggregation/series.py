"""
Chart series derived from run records.

Each function returns plain value objects a charting front end can
draw directly: daily totals for the overall bar chart, runner points
for the share chart and one runner's dated timeline.
"""

from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from runboard.aggregation.metrics import (
    DEFAULT_DECIMALS,
    RunnerStatistics,
    round_display,
)
from runboard.config.settings import ChartMode
from runboard.ingestion.base import RunRecord, records_to_dataframe
from runboard.normalization.temporal import to_date_series
from runboard.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_DAILY_WINDOW = 10


@dataclass(frozen=True)
class DailyRunData:
    """Miles and run count for one calendar date."""

    date: str
    miles: float
    runs: int


@dataclass(frozen=True)
class ChartDataPoint:
    """One named value in a chart."""

    name: str
    value: float
    label: str | None = None


@dataclass(frozen=True)
class RunnerTimelinePoint:
    """One run in a runner's timeline."""

    date: str
    miles: float


def daily_totals(
    records: Sequence[RunRecord],
    window: int = DEFAULT_DAILY_WINDOW,
    decimals: int = DEFAULT_DECIMALS,
) -> list[DailyRunData]:
    """
    Sum miles and count runs per date for the most recent dates.

    Args:
        records: Validated run records.
        window: Number of most recent dates to keep.
        decimals: Display rounding.

    Returns:
        DailyRunData in ascending date order, at most window entries.
    """
    if not records:
        return []

    df = records_to_dataframe(records)
    per_day = (
        df.groupby("date", sort=False)["miles_run"]
        .agg(miles="sum", runs="size")
        .reset_index()
    )
    per_day["day"] = to_date_series(per_day["date"])
    per_day = per_day.sort_values("day", kind="stable").tail(window)

    return [
        DailyRunData(
            date=str(row.date),
            miles=round_display(float(row.miles), decimals),
            runs=int(row.runs),
        )
        for row in per_day.itertuples(index=False)
    ]


def daily_totals_to_dataframe(days: Sequence[DailyRunData]) -> pd.DataFrame:
    """
    Convert daily totals to DataFrame.

    Args:
        days: Daily totals in date order.

    Returns:
        DataFrame with date, miles and runs columns.
    """
    return pd.DataFrame(
        [{"date": d.date, "miles": d.miles, "runs": d.runs} for d in days],
        columns=["date", "miles", "runs"],
    )


def runner_chart_data(
    stats: Sequence[RunnerStatistics],
    mode: ChartMode = ChartMode.TOTAL,
) -> list[ChartDataPoint]:
    """
    Build runner chart points from runner statistics.

    Args:
        stats: Runner statistics in display order.
        mode: Show each runner's total or average miles.

    Returns:
        One ChartDataPoint per runner, in the order given.
    """
    points = []
    for s in stats:
        value = s.total_miles if mode == ChartMode.TOTAL else s.average_miles
        runs = "run" if s.run_count == 1 else "runs"
        points.append(
            ChartDataPoint(
                name=s.runner_name,
                value=value,
                label=f"{s.run_count} {runs}",
            )
        )
    return points


def runner_timeline(
    records: Sequence[RunRecord],
    person: str,
) -> list[RunnerTimelinePoint]:
    """
    List one runner's runs in date order.

    Args:
        records: Validated run records.
        person: Runner name, matched case-insensitively.

    Returns:
        The runner's runs ascending by date; runs on the same date
        keep their input order. Empty when the runner is unknown.
    """
    key = person.strip().lower()
    matching = [r for r in records if r.runner_key == key]
    if not matching:
        log.debug("No runs for runner", person=person)
        return []

    ordered = sorted(matching, key=lambda r: r.date)
    return [RunnerTimelinePoint(date=r.date, miles=r.miles_run) for r in ordered]


def runner_names(records: Sequence[RunRecord]) -> list[str]:
    """
    List distinct runner display names.

    Args:
        records: Validated run records.

    Returns:
        First-seen display name per runner, sorted case-insensitively.
    """
    names: dict[str, str] = {}
    for r in records:
        names.setdefault(r.runner_key, r.person)
    return sorted(names.values(), key=str.lower)
