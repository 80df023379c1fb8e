"""
Pandera schemas for uploaded run logs.

Two stages are described: the candidate rows produced by tokenizing
the CSV, and the run records that passed row validation.
"""

import pandera.pandas as pa
from pandera.typing import Series


class RunRowSchema(pa.DataFrameModel):
    """
    Schema for candidate rows straight from the CSV.

    Values are trimmed strings; nothing has been interpreted yet.
    """

    row_number: Series[int] = pa.Field(
        ge=2,
        unique=True,
        description="1-based file row number (header is row 1)",
    )
    date: Series[str] = pa.Field(description="Raw date text")
    person: Series[str] = pa.Field(description="Raw person text")
    miles_run: Series[str] = pa.Field(description="Raw distance text")

    class Config:
        """Schema configuration."""

        name = "RunRowSchema"
        strict = True
        coerce = True


class RunRecordSchema(pa.DataFrameModel):
    """
    Schema for validated run records.

    One row per run, ready for aggregation.
    """

    date: Series[str] = pa.Field(
        str_matches=r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$",
        description="ISO calendar date key",
    )
    person: Series[str] = pa.Field(
        str_length={"min_value": 1},
        description="Runner display name",
    )
    miles_run: Series[float] = pa.Field(
        ge=0.0,
        description="Distance run in miles",
    )

    class Config:
        """Schema configuration."""

        name = "RunRecordSchema"
        strict = False  # Allow derived columns such as runner_key
        coerce = True
