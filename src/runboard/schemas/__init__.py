"""
Schema definitions using Pandera for data validation.

Tabular contracts for uploaded rows, validated records and the
aggregation outputs handed to presentation.
"""

from runboard.schemas.registry import DataRole, SchemaRegistry
from runboard.schemas.runs import RunRecordSchema, RunRowSchema
from runboard.schemas.statistics import DailyTotalsSchema, RunnerStatisticsSchema

__all__ = [
    "DailyTotalsSchema",
    "DataRole",
    "RunRecordSchema",
    "RunRowSchema",
    "RunnerStatisticsSchema",
    "SchemaRegistry",
]
