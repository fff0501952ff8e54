"""Date parsing utilities for catalog records.

Catalog dates are loosely formatted strings. Parsing never raises: an
unparsable value simply yields None so the affected field stays unset.
"""

from __future__ import annotations

from datetime import date, datetime


def parse_air_date(value: str | None) -> date | None:
    """Parse a catalog date string.

    Accepts plain dates ("2020-05-01") and ISO-8601 datetimes
    ("2020-05-01T20:00:00+00:00").

    Args:
        value: Date string from the catalog, possibly empty or None.

    Returns:
        Parsed date, or None if the value is missing or malformed.
    """
    if not value:
        return None
    value = value.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def parse_premiere_year(value: str | None) -> int | None:
    """Get the year of a catalog premiere date.

    Args:
        value: Premiere date string, possibly empty or None.

    Returns:
        Year, or None if the date cannot be parsed.
    """
    parsed = parse_air_date(value)
    return parsed.year if parsed is not None else None
