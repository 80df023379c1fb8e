"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from runboard.config import DashboardConfig
from runboard.ingestion import RunRecord


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def test_data_dir(project_root: Path) -> Path:
    """Return the test data directory."""
    return project_root / "tests" / "data"


@pytest.fixture
def default_config() -> DashboardConfig:
    """Return a configuration with every default."""
    return DashboardConfig()


@pytest.fixture
def sample_csv_bytes() -> bytes:
    """Three clean runs by two runners."""
    return (
        b"date,person,miles run\n"
        b"2024-01-15,John Doe,5.2\n"
        b"2024-01-16,Jane Smith,3.8\n"
        b"2024-01-17,John Doe,4.5\n"
    )


@pytest.fixture
def sample_records() -> list[RunRecord]:
    """Validated records matching sample_csv_bytes."""
    return [
        RunRecord(date="2024-01-15", person="John Doe", miles_run=5.2),
        RunRecord(date="2024-01-16", person="Jane Smith", miles_run=3.8),
        RunRecord(date="2024-01-17", person="John Doe", miles_run=4.5),
    ]


@pytest.fixture
def sample_csv_file(tmp_path: Path, sample_csv_bytes: bytes) -> Path:
    """Write sample_csv_bytes to a temporary file."""
    path = tmp_path / "runs.csv"
    path.write_bytes(sample_csv_bytes)
    return path
