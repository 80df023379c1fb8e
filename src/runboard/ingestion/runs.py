"""
Run log ingestion.

Turns uploaded CSV bytes into trimmed candidate rows keyed by their
file row number. Nothing is interpreted here; row checks belong to
the validation module.
"""

import numpy as np
import pandas as pd

from runboard.config.settings import DashboardConfig
from runboard.ingestion.base import (
    DataLoader,
    MissingHeadersError,
    decode_csv_bytes,
    read_csv_text,
)
from runboard.normalization.columns import (
    REQUIRED_COLUMNS,
    build_header_aliases,
    find_missing_columns,
    normalize_headers,
)
from runboard.schemas.runs import RunRowSchema
from runboard.utils.logging import get_logger

log = get_logger(__name__)

# Row 1 is the header, so data index 0 is file row 2.
HEADER_OFFSET = 2


class RunLogLoader(DataLoader):
    """Loader for an uploaded run log (date, person, miles run)."""

    def __init__(self, config: DashboardConfig, data: bytes) -> None:
        """
        Initialize run log loader.

        Args:
            config: Dashboard configuration.
            data: Raw uploaded bytes.
        """
        super().__init__(config, RunRowSchema)
        self.data = data

    def _load_raw(self) -> pd.DataFrame:
        """Decode, tokenize and normalize the upload."""
        text = decode_csv_bytes(self.data)

        if not text.strip():
            log.info("Upload is empty")
            return _empty_rows()

        raw = read_csv_text(text)
        aliases = build_header_aliases(self.config.validation.distance_headers)
        df = normalize_headers(raw, aliases)

        missing = find_missing_columns(df)
        if missing:
            raise MissingHeadersError(missing)

        for column in REQUIRED_COLUMNS:
            df[column] = df[column].astype(str).str.strip()

        df.insert(0, "row_number", np.arange(len(df)) + HEADER_OFFSET)

        return df.reset_index(drop=True)


def _empty_rows() -> pd.DataFrame:
    """Candidate-row frame with no rows."""
    return pd.DataFrame(
        {
            "row_number": pd.Series(dtype=int),
            **{column: pd.Series(dtype=str) for column in REQUIRED_COLUMNS},
        }
    )


def load_run_rows(
    data: bytes,
    config: DashboardConfig,
    *,
    validate: bool = True,
) -> pd.DataFrame:
    """
    Convenience function to load candidate rows from an upload.

    Args:
        data: Raw uploaded bytes.
        config: Dashboard configuration.
        validate: Whether to validate against the row schema.

    Returns:
        DataFrame with row_number, date, person and miles_run columns.

    Raises:
        CsvParseError: If the upload cannot be tokenized.
        MissingHeadersError: If required headers are absent.
    """
    loader = RunLogLoader(config, data)
    return loader.load(validate=validate)
