"""
Run date parsing.

Accepts ISO (YYYY-MM-DD), US (M/D/YYYY) and EU (D-M-YYYY) dates and
normalizes them to ISO strings so records from mixed formats group
onto the same calendar day.
"""

import re
from datetime import date

import pandas as pd

from runboard.utils.logging import get_logger

log = get_logger(__name__)

ISO_PATTERN = re.compile(
    r"^(?P<year>[0-9]{4})-(?P<month>[0-9]{2})-(?P<day>[0-9]{2})$"
)
US_PATTERN = re.compile(
    r"^(?P<month>[0-9]{1,2})/(?P<day>[0-9]{1,2})/(?P<year>[0-9]{4})$"
)
EU_PATTERN = re.compile(
    r"^(?P<day>[0-9]{1,2})-(?P<month>[0-9]{1,2})-(?P<year>[0-9]{4})$"
)

# Order matters only for readability; the three patterns are disjoint.
DATE_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("iso", ISO_PATTERN),
    ("us", US_PATTERN),
    ("eu", EU_PATTERN),
)

EXPECTED_FORMATS = "YYYY-MM-DD, MM/DD/YYYY or DD-MM-YYYY"


def parse_run_date(value: str) -> date | None:
    """
    Parse a run date in one of the accepted formats.

    Slash-separated dates are read month-first and dash-separated
    short dates day-first, so '01-02-2024' is 1 February.

    Args:
        value: Trimmed date string.

    Returns:
        The calendar date, or None when the string matches no accepted
        format or names a day that does not exist.
    """
    for _, pattern in DATE_PATTERNS:
        match = pattern.match(value)
        if match is None:
            continue
        try:
            return date(
                int(match.group("year")),
                int(match.group("month")),
                int(match.group("day")),
            )
        except ValueError:
            return None
    return None


def normalize_run_date(value: str) -> str | None:
    """Return the ISO form of an accepted date string, or None."""
    parsed = parse_run_date(value)
    return parsed.isoformat() if parsed is not None else None


def to_date_series(values: pd.Series) -> pd.Series:
    """
    Convert ISO date keys to a datetime64 series for ordering.

    Args:
        values: Series of normalized ISO date strings.

    Returns:
        Series of timestamps (NaT where unparsable).
    """
    converted = pd.to_datetime(values, format="%Y-%m-%d", errors="coerce")
    n_bad = int(converted.isna().sum())
    if n_bad:
        log.warning("Unparsable date keys", count=n_bad)
    return converted
