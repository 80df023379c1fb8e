"""
Data ingestion layer for uploaded run logs.

All upload parsing happens through this module so structural
problems are detected at the system boundary.
"""

from runboard.ingestion.base import (
    CsvParseError,
    IngestionError,
    MissingHeadersError,
    RunRecord,
)
from runboard.ingestion.runs import RunLogLoader, load_run_rows

__all__ = [
    "CsvParseError",
    "IngestionError",
    "MissingHeadersError",
    "RunLogLoader",
    "RunRecord",
    "load_run_rows",
]
