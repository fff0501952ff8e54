"""Lookup inputs and metadata results exchanged with the host.

Inputs describe what the host library knows about an item; results carry
the fields filled in from the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class SeriesStatus(Enum):
    """Airing status of a series."""

    CONTINUING = "continuing"
    ENDED = "ended"


@dataclass(frozen=True)
class EpisodeInfo:
    """What the host knows about an episode file."""

    path: str | None = None
    name: str | None = None
    season_number: int | None = None
    episode_number: int | None = None
    series_provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SeasonInfo:
    """What the host knows about a season folder."""

    index_number: int | None = None
    name: str | None = None
    series_provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SeriesInfo:
    """What the host knows about a series folder."""

    name: str | None = None
    year: int | None = None
    provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class EpisodeMetadata:
    """Episode fields filled in from the catalog."""

    name: str
    season_number: int | None = None
    episode_number: int | None = None
    airs_before_season: int | None = None
    airs_before_episode: int | None = None
    airs_after_season: int | None = None
    premiere_date: date | None = None
    production_year: int | None = None
    runtime_minutes: int | None = None
    overview: str | None = None
    provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class SeasonMetadata:
    """Season fields filled in from the catalog."""

    name: str
    index_number: int
    premiere_date: date | None = None
    production_year: int | None = None
    provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class SeriesMetadata:
    """Series fields filled in from the catalog."""

    name: str
    genres: list[str] = field(default_factory=list)
    studios: list[str] = field(default_factory=list)
    premiere_date: date | None = None
    production_year: int | None = None
    community_rating: float | None = None
    runtime_minutes: int | None = None
    status: SeriesStatus | None = None
    overview: str | None = None
    homepage_url: str | None = None
    provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class PersonInfo:
    """Cast member of a series."""

    name: str
    role: str | None = None
    type: str = "Actor"
    image_url: str | None = None
    provider_ids: dict[str, str] = field(default_factory=dict)


@dataclass
class RemoteSearchResult:
    """One candidate offered to the host's identify dialog."""

    name: str
    search_provider_name: str
    provider_ids: dict[str, str] = field(default_factory=dict)
    season_number: int | None = None
    index_number: int | None = None
    premiere_date: date | None = None
    production_year: int | None = None
    image_url: str | None = None


@dataclass
class MetadataResult(Generic[T]):
    """Result of a metadata lookup.

    item is None and has_metadata False when nothing was found.
    """

    item: T | None = None
    has_metadata: bool = False
    people: list[PersonInfo] = field(default_factory=list)

    @classmethod
    def found(
        cls, item: T, people: list[PersonInfo] | None = None
    ) -> MetadataResult[T]:
        return cls(item=item, has_metadata=True, people=people or [])
