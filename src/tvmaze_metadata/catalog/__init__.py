"""TVmaze catalog client and response models."""

from tvmaze_metadata.catalog.client import (
    TvMazeClient,
    TvMazeConnectionError,
    TvMazeError,
    TvMazeRateLimitError,
)
from tvmaze_metadata.catalog.models import (
    CastMember,
    EpisodeKind,
    RemoteEpisode,
    Season,
    Show,
    ShowSearchResult,
)
from tvmaze_metadata.catalog.retry import RetryPolicy

__all__ = [
    "CastMember",
    "EpisodeKind",
    "RemoteEpisode",
    "RetryPolicy",
    "Season",
    "Show",
    "ShowSearchResult",
    "TvMazeClient",
    "TvMazeConnectionError",
    "TvMazeError",
    "TvMazeRateLimitError",
]
