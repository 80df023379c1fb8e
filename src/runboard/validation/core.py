"""
Core validation logic for uploaded run logs.

Checks every candidate row independently and collects all problems,
so a user can fix a file in one pass. Records are only released
when the whole upload is clean.
"""

import math
import re
from dataclasses import dataclass, field
from enum import Enum

import pandas as pd

from runboard.config.settings import DashboardConfig
from runboard.ingestion.base import IngestionError, RunRecord, records_to_dataframe
from runboard.ingestion.runs import load_run_rows
from runboard.normalization.temporal import EXPECTED_FORMATS, normalize_run_date
from runboard.schemas.registry import SchemaRegistry
from runboard.utils.logging import get_logger

log = get_logger(__name__)

EMPTY_UPLOAD_MESSAGE = "CSV file contains no valid data rows"

_NUMBER_PATTERN = re.compile(
    r"^[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$"
)

# Larger whole numbers are shown in float notation
_MAX_PLAIN_INTEGER = 1e15


class FailureKind(Enum):
    """Why an upload was rejected."""

    STRUCTURAL = "structural"  # Unreadable file or missing headers
    EMPTY = "empty"  # No data rows at all
    ROWS = "rows"  # One or more rows failed a check


@dataclass(frozen=True)
class ValidationResult:
    """
    Result of validating one upload.

    Attributes:
        is_valid: True when every row passed.
        errors: Human-readable problems in file order.
        failure: Kind of failure, None when valid.
    """

    is_valid: bool
    errors: tuple[str, ...] = ()
    failure: FailureKind | None = None

    @classmethod
    def valid(cls) -> "ValidationResult":
        """A passing result."""
        return cls(is_valid=True)

    @classmethod
    def structural(cls, message: str) -> "ValidationResult":
        """A single top-level structural error."""
        return cls(is_valid=False, errors=(message,), failure=FailureKind.STRUCTURAL)

    @classmethod
    def empty(cls) -> "ValidationResult":
        """The upload had no data rows."""
        return cls(
            is_valid=False, errors=(EMPTY_UPLOAD_MESSAGE,), failure=FailureKind.EMPTY
        )

    @property
    def n_errors(self) -> int:
        """Number of collected errors."""
        return len(self.errors)


@dataclass(frozen=True)
class ValidatedUpload:
    """
    Validation result together with the records it released.

    records is empty whenever result.is_valid is False.
    """

    result: ValidationResult
    records: tuple[RunRecord, ...] = field(default_factory=tuple)


def parse_miles(value: str) -> float | None:
    """
    Parse a distance as a finite real number.

    Args:
        value: Trimmed distance text.

    Returns:
        The distance, or None when the text is not a plain decimal number.
    """
    if not _NUMBER_PATTERN.match(value):
        return None
    miles = float(value)
    return miles if math.isfinite(miles) else None


def _format_miles(miles: float) -> str:
    """Render a distance the way it was most likely written."""
    if miles.is_integer() and abs(miles) < _MAX_PLAIN_INTEGER:
        return str(int(miles))
    return repr(miles)


def check_row(
    row_number: int,
    date: str,
    person: str,
    miles: str,
    max_miles: float,
) -> tuple[list[str], RunRecord | None]:
    """
    Apply every row check to one candidate row.

    Args:
        row_number: File row number used to tag errors.
        date: Trimmed date text.
        person: Trimmed person text.
        miles: Trimmed distance text.
        max_miles: Largest plausible distance for a single run.

    Returns:
        Tuple of (errors for this row, record when the row is clean).
    """
    errors: list[str] = []
    prefix = f"Row {row_number}"

    if not person:
        errors.append(f"{prefix}: Missing person name")

    iso_date: str | None = None
    if not date:
        errors.append(f"{prefix}: Missing date")
    else:
        iso_date = normalize_run_date(date)
        if iso_date is None:
            errors.append(
                f"{prefix}: Invalid date format '{date}' (expected {EXPECTED_FORMATS})"
            )

    miles_run = parse_miles(miles)
    if miles_run is None:
        errors.append(f"{prefix}: Invalid miles value '{miles}'")
    elif miles_run < 0:
        errors.append(f"{prefix}: Miles cannot be negative")
    elif miles_run > max_miles:
        errors.append(
            f"{prefix}: Miles value ({_format_miles(miles_run)}) seems unrealistic"
        )

    if errors or iso_date is None or miles_run is None:
        return errors, None

    return errors, RunRecord(date=iso_date, person=person, miles_run=miles_run)


def validate_rows(rows: pd.DataFrame, config: DashboardConfig) -> ValidatedUpload:
    """
    Validate candidate rows and release records only if all pass.

    Args:
        rows: Candidate rows as produced by load_run_rows.
        config: Dashboard configuration.

    Returns:
        ValidatedUpload with the result and, when valid, the records.
    """
    if rows.empty:
        log.warning("Upload has no data rows")
        return ValidatedUpload(result=ValidationResult.empty())

    max_miles = config.validation.max_miles_per_run
    errors: list[str] = []
    records: list[RunRecord] = []

    for row in rows.itertuples(index=False):
        row_errors, record = check_row(
            int(row.row_number),
            row.date,
            row.person,
            row.miles_run,
            max_miles,
        )
        errors.extend(row_errors)
        if record is not None:
            records.append(record)

    if errors:
        log.warning(
            "Row validation failed",
            rows=len(rows),
            n_errors=len(errors),
        )
        return ValidatedUpload(
            result=ValidationResult(
                is_valid=False, errors=tuple(errors), failure=FailureKind.ROWS
            )
        )

    SchemaRegistry.validate(records_to_dataframe(records), "run_record")
    log.info("Validation passed", rows=len(records))
    return ValidatedUpload(result=ValidationResult.valid(), records=tuple(records))


class UploadValidator:
    """
    Validates uploaded run logs end to end.

    Structural problems become a single error; row problems are
    collected across the whole file.
    """

    def __init__(self, config: DashboardConfig) -> None:
        """
        Initialize upload validator.

        Args:
            config: Dashboard configuration.
        """
        self.config = config

    def validate(self, data: bytes) -> ValidatedUpload:
        """
        Parse and validate one upload.

        Args:
            data: Raw uploaded bytes.

        Returns:
            ValidatedUpload; records are populated only when valid.
        """
        try:
            rows = load_run_rows(data, self.config)
        except IngestionError as e:
            log.error("Upload rejected", error=str(e))
            return ValidatedUpload(result=ValidationResult.structural(str(e)))

        log.info("Parsed upload", rows=len(rows))
        return validate_rows(rows, self.config)


def validate_upload(data: bytes, config: DashboardConfig) -> ValidatedUpload:
    """
    Convenience function to validate an upload.

    Args:
        data: Raw uploaded bytes.
        config: Dashboard configuration.

    Returns:
        ValidatedUpload for the upload.
    """
    return UploadValidator(config).validate(data)
