"""
Dashboard pipeline implementation.

Runs one parse -> validate -> aggregate pass per upload and returns
everything the presentation layer needs in a single result.
"""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

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
    daily_totals,
    daily_totals_to_dataframe,
    runner_chart_data,
)
from runboard.config.settings import DashboardConfig
from runboard.ingestion.base import RunRecord
from runboard.schemas.registry import SchemaRegistry
from runboard.utils.logging import get_logger, log_context
from runboard.validation.core import UploadValidator, ValidationResult

log = get_logger(__name__)


@dataclass(frozen=True)
class DashboardResult:
    """
    Result of processing one upload.

    Attributes:
        source: Name of the upload (file name or label).
        validation: Validation outcome.
        records: Validated run records (empty when invalid).
        overall: Overall metrics, None when invalid.
        runners: Per-runner statistics by total miles descending.
        daily: Daily totals for the most recent dates.
        runner_chart: Runner chart points in the configured mode.
    """

    source: str
    validation: ValidationResult
    records: tuple[RunRecord, ...] = ()
    overall: OverallMetrics | None = None
    runners: tuple[RunnerStatistics, ...] = ()
    daily: tuple[DailyRunData, ...] = ()
    runner_chart: tuple[ChartDataPoint, ...] = ()

    @property
    def is_valid(self) -> bool:
        """Whether the upload passed validation."""
        return self.validation.is_valid

    def to_dict(self) -> dict[str, Any]:
        """
        Build a JSON-serialisable snapshot for the presentation layer.

        Returns:
            Nested dict of plain values; run records are omitted.
        """
        return {
            "source": self.source,
            "validation": {
                "is_valid": self.validation.is_valid,
                "errors": list(self.validation.errors),
                "failure": (
                    self.validation.failure.value
                    if self.validation.failure is not None
                    else None
                ),
            },
            "overall": asdict(self.overall) if self.overall is not None else None,
            "runners": [asdict(s) for s in self.runners],
            "daily": [asdict(d) for d in self.daily],
            "runner_chart": [asdict(p) for p in self.runner_chart],
        }


class DashboardPipeline:
    """
    Upload processing pipeline.

    Validates an upload and, only when every row passes, aggregates
    it. Nothing is kept between runs.
    """

    def __init__(self, config: DashboardConfig | None = None) -> None:
        """
        Initialize dashboard pipeline.

        Args:
            config: Dashboard configuration. Defaults are used when omitted.
        """
        self.config = config or DashboardConfig()
        self.validator = UploadValidator(self.config)

    def run(self, data: bytes, source: str = "<upload>") -> DashboardResult:
        """
        Process one upload.

        Args:
            data: Raw uploaded bytes.
            source: Name used in logs and in the result.

        Returns:
            DashboardResult; aggregation fields are empty when invalid.
        """
        with log_context(upload=source):
            validated = self.validator.validate(data)
            result = validated.result

            if not result.is_valid:
                failure = result.failure.value if result.failure is not None else None
                log.warning(
                    "Skipping aggregation", failure=failure, n_errors=result.n_errors
                )
                return DashboardResult(source=source, validation=result)

            return self._aggregate(source, result, validated.records)

    def run_path(self, path: Path) -> DashboardResult:
        """
        Read a file and process it.

        Args:
            path: Path to a CSV file.

        Returns:
            DashboardResult; an unreadable file yields a structural error.
        """
        try:
            data = path.read_bytes()
        except OSError as e:
            msg = f"Could not read file {path}: {e.strerror or e}"
            log.error("Upload unreadable", path=str(path), error=str(e))
            return DashboardResult(
                source=path.name, validation=ValidationResult.structural(msg)
            )

        return self.run(data, source=path.name)

    def _aggregate(
        self,
        source: str,
        validation: ValidationResult,
        records: tuple[RunRecord, ...],
    ) -> DashboardResult:
        """Aggregate validated records into a result."""
        agg = self.config.aggregation

        overall = calculate_overall_metrics(records, agg.decimals)
        runners = calculate_runner_stats(records, agg.decimals)
        daily = daily_totals(records, agg.daily_window, agg.decimals)

        SchemaRegistry.validate(runner_stats_to_dataframe(runners), "runner_statistics")
        SchemaRegistry.validate(daily_totals_to_dataframe(daily), "daily_totals")

        log.info(
            "Aggregated upload",
            runs=overall.total_runs,
            runners=overall.unique_runners,
            total_miles=overall.total_miles,
        )

        return DashboardResult(
            source=source,
            validation=validation,
            records=records,
            overall=overall,
            runners=tuple(runners),
            daily=tuple(daily),
            runner_chart=tuple(runner_chart_data(runners, agg.chart_mode)),
        )


def process_upload(
    data: bytes,
    config: DashboardConfig | None = None,
    source: str = "<upload>",
) -> DashboardResult:
    """
    Convenience function to process one upload.

    Args:
        data: Raw uploaded bytes.
        config: Dashboard configuration.
        source: Name used in logs and in the result.

    Returns:
        DashboardResult for the upload.
    """
    return DashboardPipeline(config).run(data, source=source)
