"""Pick the best show among catalog search results."""

from __future__ import annotations

from collections.abc import Sequence

from tvmaze_metadata.catalog.models import Show, ShowSearchResult
from tvmaze_metadata.core.datetime_utils import parse_premiere_year

# Year distance assumed for results whose premiere date cannot be parsed
UNKNOWN_YEAR_DISTANCE = 1


def _year_distance(result: ShowSearchResult, year: int) -> int:
    premiere_year = parse_premiere_year(result.show.premiered)
    if premiere_year is None:
        return UNKNOWN_YEAR_DISTANCE
    return abs(premiere_year - year)


def identify_show(
    results: Sequence[ShowSearchResult], year: int | None = None
) -> Show | None:
    """Choose the show a local series most likely refers to.

    Without a year hint the catalog's own first hit wins. With one, hits
    are ranked by distance between premiere year and hint, then by
    relevance score (highest first).

    Args:
        results: Search results in catalog relevance order.
        year: Optional production year known locally.

    Returns:
        Best matching show, or None for an empty result list.
    """
    if not results:
        return None
    if year is None:
        return results[0].show
    ranked = sorted(results, key=lambda r: (_year_distance(r, year), -r.score))
    return ranked[0].show
