"""
Header normalization.

Maps the header spellings found in uploaded CSV files onto the
canonical column names used throughout the package.
"""

import pandas as pd

from runboard.utils.logging import get_logger

log = get_logger(__name__)

DATE_COLUMN = "date"
PERSON_COLUMN = "person"
MILES_COLUMN = "miles_run"

REQUIRED_COLUMNS: tuple[str, ...] = (DATE_COLUMN, PERSON_COLUMN, MILES_COLUMN)

# Canonical column -> display name used in error messages
DISPLAY_NAMES: dict[str, str] = {
    DATE_COLUMN: "date",
    PERSON_COLUMN: "person",
    MILES_COLUMN: "miles run",
}


def header_key(header: object) -> str:
    """
    Reduce a header to its comparison key.

    Case and all whitespace are ignored, so ' Miles  Run ' and
    'milesrun' share the key 'milesrun'.
    """
    return "".join(str(header).split()).lower()


def build_header_aliases(distance_headers: list[str]) -> dict[str, str]:
    """
    Build the header-key -> canonical column mapping.

    Args:
        distance_headers: Accepted spellings of the distance header.

    Returns:
        Mapping from header key to canonical column name.
    """
    aliases = {
        header_key("date"): DATE_COLUMN,
        header_key("person"): PERSON_COLUMN,
    }
    for spelling in distance_headers:
        aliases[header_key(spelling)] = MILES_COLUMN
    return aliases


def normalize_headers(
    df: pd.DataFrame,
    aliases: dict[str, str],
) -> pd.DataFrame:
    """
    Rename recognised headers to canonical names and drop the rest.

    When several headers map to the same canonical column the
    leftmost one wins.

    Args:
        df: Raw DataFrame as tokenized from the CSV.
        aliases: Mapping from header key to canonical column.

    Returns:
        DataFrame holding only the recognised canonical columns,
        in canonical order.
    """
    rename_dict: dict[object, str] = {}
    for column in df.columns:
        canonical = aliases.get(header_key(column))
        if canonical is not None and canonical not in rename_dict.values():
            rename_dict[column] = canonical

    ignored = [str(c) for c in df.columns if c not in rename_dict]
    if ignored:
        log.debug("Ignoring extra columns", columns=ignored)

    out = df[list(rename_dict)].rename(columns=rename_dict)
    return out[[c for c in REQUIRED_COLUMNS if c in out.columns]].copy()


def find_missing_columns(
    df: pd.DataFrame,
    required: tuple[str, ...] = REQUIRED_COLUMNS,
) -> list[str]:
    """
    List required canonical columns absent from a normalized frame.

    Args:
        df: DataFrame after normalize_headers.
        required: Canonical column names that must be present.

    Returns:
        Display names of the missing columns, in canonical order.
    """
    missing = [DISPLAY_NAMES.get(c, c) for c in required if c not in df.columns]

    if missing:
        log.warning("Missing required headers", missing=missing)

    return missing
