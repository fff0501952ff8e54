"""Provider id keys and helpers.

Hosts keep external ids as a mapping of provider name to id string.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

logger = logging.getLogger(__name__)

PROVIDER_NAME = "TVmaze"

TVMAZE = "TvMaze"
IMDB = "Imdb"
TVRAGE = "TvRage"
TVDB = "Tvdb"


def get_int_id(provider_ids: Mapping[str, str], key: str) -> int | None:
    """Get a numeric provider id, or None if missing or not a number."""
    value = provider_ids.get(key)
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.debug("Ignoring non-numeric %s id: %r", key, value)
        return None


def get_tvmaze_id(provider_ids: Mapping[str, str]) -> int | None:
    """Get the TVmaze id from a provider id mapping."""
    return get_int_id(provider_ids, TVMAZE)
