"""Tests for validation module."""

from pathlib import Path

import pandas as pd
import pytest

from runboard.config import DashboardConfig, ValidationConfig
from runboard.ingestion import RunRecord
from runboard.normalization.temporal import normalize_run_date, parse_run_date
from runboard.validation import (
    FailureKind,
    UploadValidator,
    ValidationResult,
    validate_upload,
)
from runboard.validation.core import check_row, parse_miles, validate_rows

DATE_ERROR_SUFFIX = "(expected YYYY-MM-DD, MM/DD/YYYY or DD-MM-YYYY)"


class TestRunDates:
    """Tests for date parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("2024-01-15", "2024-01-15"),
            ("01/15/2024", "2024-01-15"),
            ("1/5/2024", "2024-01-05"),
            ("15-01-2024", "2024-01-15"),
            ("01-02-2024", "2024-02-01"),
            ("2024-02-29", "2024-02-29"),
        ],
    )
    def test_accepted_formats(self, value: str, expected: str) -> None:
        """Test that accepted formats normalize to ISO."""
        assert normalize_run_date(value) == expected

    @pytest.mark.parametrize(
        "value",
        [
            "13/45/2024",
            "2023-02-29",
            "2024/01/15",
            "Jan 15 2024",
            "15.01.2024",
            "20240115",
            "\uff12\uff10\uff12\uff14-01-15",
            "\u0661/15/2024",
        ],
    )
    def test_rejected(self, value: str) -> None:
        """Test that other formats and impossible dates are rejected."""
        assert parse_run_date(value) is None


class TestParseMiles:
    """Tests for distance parsing."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("5", 5.0), ("5.25", 5.25), (".5", 0.5), ("-1", -1.0), ("1e1", 10.0)],
    )
    def test_numbers(self, value: str, expected: float) -> None:
        """Test that plain decimal numbers parse."""
        assert parse_miles(value) == expected

    @pytest.mark.parametrize(
        "value",
        ["", "abc", "5 miles", "nan", "inf", "1,5", "1e999", "\u0665", "\uff15.0"],
    )
    def test_not_numbers(self, value: str) -> None:
        """Test that anything else is rejected."""
        assert parse_miles(value) is None


class TestCheckRow:
    """Tests for single-row checks."""

    def test_clean_row(self) -> None:
        """Test that a clean row yields a normalized record."""
        errors, record = check_row(2, "01/15/2024", "Ann", "3.5", 200.0)
        assert errors == []
        assert record == RunRecord(date="2024-01-15", person="Ann", miles_run=3.5)

    def test_missing_person(self) -> None:
        """Test missing person message."""
        errors, record = check_row(2, "2024-01-15", "", "3", 200.0)
        assert errors == ["Row 2: Missing person name"]
        assert record is None

    def test_missing_date(self) -> None:
        """Test missing date message."""
        errors, _ = check_row(3, "", "Ann", "3", 200.0)
        assert errors == ["Row 3: Missing date"]

    def test_invalid_date(self) -> None:
        """Test invalid date message quotes the value."""
        errors, _ = check_row(4, "13/45/2024", "Ann", "3", 200.0)
        assert errors == [f"Row 4: Invalid date format '13/45/2024' {DATE_ERROR_SUFFIX}"]

    def test_invalid_miles(self) -> None:
        """Test invalid miles message quotes the value."""
        errors, _ = check_row(5, "2024-01-15", "Ann", "abc", 200.0)
        assert errors == ["Row 5: Invalid miles value 'abc'"]

    def test_negative_miles(self) -> None:
        """Test negative miles message."""
        errors, record = check_row(6, "2024-01-15", "Ann", "-1", 200.0)
        assert errors == ["Row 6: Miles cannot be negative"]
        assert record is None

    def test_unrealistic_miles(self) -> None:
        """Test plausibility threshold message."""
        errors, _ = check_row(7, "2024-01-15", "Ann", "250", 200.0)
        assert errors == ["Row 7: Miles value (250) seems unrealistic"]

    def test_huge_miles_message_stays_short(self) -> None:
        """Test that very large whole numbers are not expanded digit by digit."""
        errors, _ = check_row(7, "2024-01-15", "Ann", "1e300", 200.0)
        assert errors == ["Row 7: Miles value (1e+300) seems unrealistic"]

    def test_non_ascii_digits_rejected(self) -> None:
        """Test that digits outside ASCII are not read as distances."""
        errors, record = check_row(2, "2024-01-15", "Ann", "\u0665", 200.0)
        assert errors == ["Row 2: Invalid miles value '\u0665'"]
        assert record is None

    def test_threshold_is_inclusive(self) -> None:
        """Test that exactly the threshold is accepted."""
        errors, record = check_row(2, "2024-01-15", "Ann", "200", 200.0)
        assert errors == []
        assert record is not None

    def test_zero_miles_accepted(self) -> None:
        """Test that zero is a valid distance."""
        errors, _ = check_row(2, "2024-01-15", "Ann", "0", 200.0)
        assert errors == []

    def test_errors_accumulate_in_field_order(self) -> None:
        """Test that one row can produce several errors."""
        errors, _ = check_row(8, "", "", "", 200.0)
        assert errors == [
            "Row 8: Missing person name",
            "Row 8: Missing date",
            "Row 8: Invalid miles value ''",
        ]


class TestValidateRows:
    """Tests for validating a candidate-row frame."""

    def test_empty_frame(self, default_config: DashboardConfig) -> None:
        """Test that no rows is an empty failure."""
        rows = pd.DataFrame(columns=["row_number", "date", "person", "miles_run"])
        validated = validate_rows(rows, default_config)

        assert not validated.result.is_valid
        assert validated.result.failure is FailureKind.EMPTY
        assert validated.result.errors == ("CSV file contains no valid data rows",)
        assert validated.records == ()

    def test_records_released_in_order(self, default_config: DashboardConfig) -> None:
        """Test that valid rows become records in input order."""
        rows = pd.DataFrame(
            {
                "row_number": [2, 3],
                "date": ["2024-01-16", "2024-01-15"],
                "person": ["Bob", "Ann"],
                "miles_run": ["4", "3"],
            }
        )
        validated = validate_rows(rows, default_config)

        assert validated.result.is_valid
        assert [r.person for r in validated.records] == ["Bob", "Ann"]


class TestUploadValidator:
    """Tests for whole-upload validation."""

    def test_valid_upload(
        self, sample_csv_bytes: bytes, default_config: DashboardConfig
    ) -> None:
        """Test that a clean upload releases every record."""
        validated = UploadValidator(default_config).validate(sample_csv_bytes)

        assert validated.result == ValidationResult.valid()
        assert validated.result.failure is None
        assert len(validated.records) == 3
        assert validated.records[0] == RunRecord(
            date="2024-01-15", person="John Doe", miles_run=5.2
        )

    def test_every_error_collected(
        self, test_data_dir: Path, default_config: DashboardConfig
    ) -> None:
        """Test that all rows are checked and errors kept in file order."""
        data = (test_data_dir / "runs_invalid.csv").read_bytes()
        validated = validate_upload(data, default_config)

        assert not validated.result.is_valid
        assert validated.result.failure is FailureKind.ROWS
        assert validated.result.errors == (
            f"Row 3: Invalid date format '13/45/2024' {DATE_ERROR_SUFFIX}",
            "Row 4: Missing person name",
            "Row 4: Miles cannot be negative",
            "Row 5: Miles value (250) seems unrealistic",
            "Row 6: Missing date",
            "Row 6: Invalid miles value 'abc'",
        )
        assert validated.records == ()

    def test_one_bad_row_rejects_batch(self, default_config: DashboardConfig) -> None:
        """Test that no records are released when any row fails."""
        data = b"date,person,miles run\n2024-01-15,Ann,3\n2024-01-16,Bob,-1\n"
        validated = validate_upload(data, default_config)

        assert not validated.result.is_valid
        assert any("negative" in e for e in validated.result.errors)
        assert validated.records == ()

    def test_missing_distance_header(self, default_config: DashboardConfig) -> None:
        """Test that a missing header is one structural error and no row errors."""
        data = b"date,person\n2024-01-15,\n,Bob\n"
        validated = validate_upload(data, default_config)

        assert validated.result.failure is FailureKind.STRUCTURAL
        assert validated.result.errors == ("Missing required headers: miles run",)

    def test_unparseable_upload(self, default_config: DashboardConfig) -> None:
        """Test that a tokenizer failure is one structural error."""
        data = b'date,person,miles run\n"2024-01-15,Ann,3\n'
        validated = validate_upload(data, default_config)

        assert validated.result.failure is FailureKind.STRUCTURAL
        assert validated.result.n_errors == 1
        assert validated.result.errors[0].startswith("CSV parsing failed")

    @pytest.mark.parametrize(
        "data",
        [b"", b"\n\n", b"  \n", b"date,person,miles run\n"],
    )
    def test_empty_upload(self, data: bytes, default_config: DashboardConfig) -> None:
        """Test that uploads without data rows are reported as empty."""
        validated = validate_upload(data, default_config)

        assert validated.result.failure is FailureKind.EMPTY
        assert validated.result.errors == ("CSV file contains no valid data rows",)

    def test_blank_cell_rows_rejected(self, default_config: DashboardConfig) -> None:
        """Test that a row of blank cells is checked, not dropped."""
        data = b"date,person,miles run\n2024-01-15,Ann,3\n , , \n2024-01-16,Bob,4\n"
        validated = validate_upload(data, default_config)

        assert validated.result.failure is FailureKind.ROWS
        assert validated.result.errors == (
            "Row 3: Missing person name",
            "Row 3: Missing date",
            "Row 3: Invalid miles value ''",
        )
        assert validated.records == ()

    def test_row_with_only_extra_column_rejected(
        self, default_config: DashboardConfig
    ) -> None:
        """Test that filling only an ignored column still fails the row."""
        data = b"date,person,miles run,note\n2024-01-15,Ann,3,\n,,,forgot to fill\n"
        validated = validate_upload(data, default_config)

        assert not validated.result.is_valid
        assert "Row 3: Missing person name" in validated.result.errors
        assert validated.records == ()

    def test_only_comma_rows_rejected(self, default_config: DashboardConfig) -> None:
        """Test that comma-only rows are row errors rather than an empty file."""
        validated = validate_upload(b"date,person,miles run\n,,\n", default_config)

        assert validated.result.failure is FailureKind.ROWS
        assert validated.result.n_errors == 3

    def test_configured_threshold(self) -> None:
        """Test that the plausibility threshold comes from config."""
        config = DashboardConfig(validation=ValidationConfig(max_miles_per_run=300))
        data = b"date,person,miles run\n2024-01-15,Ann,250\n"
        assert validate_upload(data, config).result.is_valid

    def test_mixed_date_formats_normalized(self, default_config: DashboardConfig) -> None:
        """Test that every accepted format lands on the same ISO key."""
        data = (
            b"date,person,miles run\n"
            b"2024-01-15,Ann,1\n"
            b"01/15/2024,Ann,1\n"
            b"15-01-2024,Ann,1\n"
        )
        validated = validate_upload(data, default_config)
        assert {r.date for r in validated.records} == {"2024-01-15"}
