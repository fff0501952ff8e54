"""Episode matching engine: cache, resolver, specials and identification."""

from tvmaze_metadata.matching.cache import CachedEpisodeList, EpisodeListCache
from tvmaze_metadata.matching.models import (
    AmbiguousMatch,
    LocalEpisodeSignal,
    MatchOutcome,
    NoMatch,
    SeasonPosition,
    UniqueMatch,
)
from tvmaze_metadata.matching.resolver import EpisodeResolver
from tvmaze_metadata.matching.series import identify_show
from tvmaze_metadata.matching.specials import compute_position, special_index

__all__ = [
    "AmbiguousMatch",
    "CachedEpisodeList",
    "EpisodeListCache",
    "EpisodeResolver",
    "LocalEpisodeSignal",
    "MatchOutcome",
    "NoMatch",
    "SeasonPosition",
    "UniqueMatch",
    "compute_position",
    "identify_show",
    "special_index",
]
