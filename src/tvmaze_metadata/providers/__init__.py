"""Episode, season and series metadata providers."""

from tvmaze_metadata.providers.episode import EpisodeProvider
from tvmaze_metadata.providers.models import (
    EpisodeInfo,
    EpisodeMetadata,
    MetadataResult,
    PersonInfo,
    RemoteSearchResult,
    SeasonInfo,
    SeasonMetadata,
    SeriesInfo,
    SeriesMetadata,
    SeriesStatus,
)
from tvmaze_metadata.providers.season import SeasonProvider
from tvmaze_metadata.providers.series import SeriesProvider
from tvmaze_metadata.providers.service import TvMazeMetadataService

__all__ = [
    "EpisodeInfo",
    "EpisodeMetadata",
    "EpisodeProvider",
    "MetadataResult",
    "PersonInfo",
    "RemoteSearchResult",
    "SeasonInfo",
    "SeasonMetadata",
    "SeasonProvider",
    "SeriesInfo",
    "SeriesMetadata",
    "SeriesProvider",
    "SeriesStatus",
    "TvMazeMetadataService",
]
