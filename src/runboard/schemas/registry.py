"""
Schema registry for the dashboard's tabular contracts.

Maps stable names to Pandera models with a version and a data role.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

import pandera.pandas as pa

from runboard.schemas.runs import RunRecordSchema, RunRowSchema
from runboard.schemas.statistics import DailyTotalsSchema, RunnerStatisticsSchema
from runboard.utils.logging import get_logger

if TYPE_CHECKING:
    import pandas as pd

log = get_logger(__name__)


class DataRole(Enum):
    """Classification of tables by their role in the dashboard."""

    SOURCE = "source"  # Rows as uploaded
    VALIDATED = "validated"  # Passed row validation
    OUTPUT = "output"  # Handed to presentation


@dataclass(frozen=True)
class SchemaInfo:
    """Metadata about a registered schema."""

    name: str
    schema: type[pa.DataFrameModel]
    version: str
    role: DataRole
    description: str


class SchemaRegistry:
    """
    Registry of the tabular contracts used by the dashboard.

    Each table handed between stages is checked against the schema
    registered for it, so a contract change shows up as a version bump.
    """

    _version = "1.0.0"

    _schemas: ClassVar[dict[str, SchemaInfo]] = {
        "run_row": SchemaInfo(
            name="run_row",
            schema=RunRowSchema,
            version="1.0.0",
            role=DataRole.SOURCE,
            description="Trimmed candidate rows from an uploaded CSV",
        ),
        "run_record": SchemaInfo(
            name="run_record",
            schema=RunRecordSchema,
            version="1.0.0",
            role=DataRole.VALIDATED,
            description="Run records that passed row validation",
        ),
        "runner_statistics": SchemaInfo(
            name="runner_statistics",
            schema=RunnerStatisticsSchema,
            version="1.0.0",
            role=DataRole.OUTPUT,
            description="Per-runner distance statistics",
        ),
        "daily_totals": SchemaInfo(
            name="daily_totals",
            schema=DailyTotalsSchema,
            version="1.0.0",
            role=DataRole.OUTPUT,
            description="Miles and run counts per calendar date",
        ),
    }

    @classmethod
    def registry_version(cls) -> str:
        """Get the registry version."""
        return cls._version

    @classmethod
    def get_info(cls, name: str) -> SchemaInfo:
        """
        Look up a registered schema.

        Args:
            name: Schema identifier.

        Returns:
            SchemaInfo with metadata.

        Raises:
            KeyError: If no schema is registered under name.
        """
        info = cls._schemas.get(name)
        if info is None:
            msg = f"Unknown schema '{name}'. Available: {', '.join(cls._schemas)}"
            raise KeyError(msg)
        return info

    @classmethod
    def get(cls, name: str) -> type[pa.DataFrameModel]:
        """Get the DataFrameModel class registered under name."""
        return cls.get_info(name).schema

    @classmethod
    def list_schemas(cls) -> list[str]:
        """List all registered schema names."""
        return list(cls._schemas.keys())

    @classmethod
    def list_by_role(cls, role: DataRole) -> list[str]:
        """List schemas filtered by their data role."""
        return [name for name, info in cls._schemas.items() if info.role == role]

    @classmethod
    def describe(cls) -> list[tuple[str, str, str, str]]:
        """Rows of (name, version, role, description) for display."""
        return [
            (info.name, info.version, info.role.value, info.description)
            for info in cls._schemas.values()
        ]

    @classmethod
    def validate(
        cls, df: "pd.DataFrame", schema_name: str, *, lazy: bool = False
    ) -> "pd.DataFrame":
        """
        Check a DataFrame against a registered contract.

        Args:
            df: DataFrame to check.
            schema_name: Registered schema identifier.
            lazy: Collect every failure before raising.

        Returns:
            The validated (coerced) DataFrame.

        Raises:
            pandera.errors.SchemaError: On a failed check.
            pandera.errors.SchemaErrors: When lazy, or for some
                structural failures such as unexpected columns.
        """
        validated = cls.get(schema_name).validate(df, lazy=lazy)
        log.debug("Schema check passed", schema=schema_name, rows=len(validated))
        return validated
