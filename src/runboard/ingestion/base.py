"""
Base classes and utilities for data ingestion.

Provides the run record type, ingestion errors and the CSV
tokenizing shared by all loaders.
"""

import io
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd
import pandera.pandas as pa

from runboard.config.settings import DashboardConfig
from runboard.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class RunRecord:
    """
    One validated run.

    Attributes:
        date: Calendar date as an ISO 'YYYY-MM-DD' key.
        person: Trimmed display name.
        miles_run: Non-negative distance in miles.
    """

    date: str
    person: str
    miles_run: float

    @property
    def runner_key(self) -> str:
        """Case-insensitive identity used for grouping."""
        return self.person.strip().lower()


class IngestionError(Exception):
    """Base class for structural problems with an upload."""


class CsvParseError(IngestionError):
    """The upload could not be read, decoded or tokenized."""


class MissingHeadersError(IngestionError):
    """The header row lacks one or more required columns."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing required headers: {', '.join(self.missing)}")


def decode_csv_bytes(data: bytes) -> str:
    """
    Decode uploaded bytes to text.

    Tries UTF-8 (dropping a byte order mark) first and falls back to
    Latin-1, which spreadsheet exports on Windows commonly use.

    Args:
        data: Raw file contents.

    Returns:
        Decoded text.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        log.warning("UTF-8 decode failed, retrying with Latin-1", size=len(data))
        return data.decode("latin-1")


def read_csv_text(text: str) -> pd.DataFrame:
    """
    Tokenize comma-separated text into a string DataFrame.

    Every cell is read as a string with empty cells kept as ''.
    Blank lines are skipped.

    Args:
        text: Decoded CSV text including the header line.

    Returns:
        DataFrame with the file's own headers and one row per data line.

    Raises:
        CsvParseError: If the text cannot be tokenized.
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            sep=",",
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            index_col=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        msg = f"CSV parsing failed: {e}"
        raise CsvParseError(msg) from e

    return df.fillna("").reset_index(drop=True)


class DataLoader(ABC):
    """
    Abstract base class for upload loaders.

    All loaders inherit from this class so tabular contracts are
    checked at the ingestion boundary.
    """

    def __init__(self, config: DashboardConfig, schema: type[pa.DataFrameModel]) -> None:
        """
        Initialize data loader.

        Args:
            config: Dashboard configuration.
            schema: Pandera schema for validation.
        """
        self.config = config
        self.schema = schema

    @abstractmethod
    def _load_raw(self) -> pd.DataFrame:
        """Load raw data from source. Implemented by subclasses."""
        ...

    def load(self, *, validate: bool = True) -> pd.DataFrame:
        """
        Load and optionally validate data.

        Args:
            validate: Whether to validate against schema.

        Returns:
            Loaded (and optionally validated) DataFrame.

        Raises:
            IngestionError: If the upload is structurally unusable.
            pandera.errors.SchemaError: If validation fails.
        """
        log.debug("Loading data", loader=self.__class__.__name__)

        df = self._load_raw()
        log.info("Loaded raw data", rows=len(df), columns=list(df.columns))

        if validate:
            df = self.schema.validate(df)

        return df


def records_to_dataframe(records: Sequence[RunRecord]) -> pd.DataFrame:
    """
    Convert run records to a DataFrame.

    Args:
        records: Run records in input order.

    Returns:
        DataFrame with date, person and miles_run columns.
    """
    return pd.DataFrame(
        {
            "date": pd.Series([r.date for r in records], dtype=object),
            "person": pd.Series([r.person for r in records], dtype=object),
            "miles_run": pd.Series([r.miles_run for r in records], dtype=float),
        }
    )
