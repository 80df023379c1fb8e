"""
Pandera schemas for aggregation outputs.

Defines the tabular form of per-runner statistics and daily totals
as handed to the presentation layer.
"""

import pandera.pandas as pa
from pandera.typing import Series


class RunnerStatisticsSchema(pa.DataFrameModel):
    """Schema for per-runner statistics, one row per runner."""

    runner_name: Series[str] = pa.Field(
        str_length={"min_value": 1},
        description="Display name from the runner's first record",
    )
    total_miles: Series[float] = pa.Field(ge=0.0, description="Sum of distances")
    average_miles: Series[float] = pa.Field(ge=0.0, description="Mean distance")
    minimum_miles: Series[float] = pa.Field(ge=0.0, description="Shortest run")
    maximum_miles: Series[float] = pa.Field(ge=0.0, description="Longest run")
    run_count: Series[int] = pa.Field(ge=1, description="Number of runs")

    class Config:
        """Schema configuration."""

        name = "RunnerStatisticsSchema"
        strict = True
        coerce = True


class DailyTotalsSchema(pa.DataFrameModel):
    """Schema for distance totals per calendar date."""

    date: Series[str] = pa.Field(
        str_matches=r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$",
        unique=True,
        description="ISO calendar date key",
    )
    miles: Series[float] = pa.Field(ge=0.0, description="Miles run that day")
    runs: Series[int] = pa.Field(ge=1, description="Runs recorded that day")

    class Config:
        """Schema configuration."""

        name = "DailyTotalsSchema"
        strict = True
        coerce = True
