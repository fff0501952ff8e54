"""Core utilities package.

Pure helper functions with no external dependencies, shared by the catalog
client, the matching engine and the providers.
"""

from tvmaze_metadata.core.datetime_utils import (
    parse_air_date,
    parse_premiere_year,
)
from tvmaze_metadata.core.string_utils import (
    EPISODE_NAME_SEPARATORS,
    contains_ci,
    normalize_episode_name,
    parse_series_name,
    strip_summary_html,
)

__all__ = [
    "EPISODE_NAME_SEPARATORS",
    "contains_ci",
    "normalize_episode_name",
    "parse_air_date",
    "parse_premiere_year",
    "parse_series_name",
    "strip_summary_html",
]
