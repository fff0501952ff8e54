"""TVmaze API response models.

Frozen dataclasses for the subset of catalog fields the providers use.
Records are immutable once fetched; the matching engine only reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EpisodeKind(Enum):
    """Episode type as classified by the catalog."""

    REGULAR = "regular"
    SIGNIFICANT_SPECIAL = "significant_special"
    INSIGNIFICANT_SPECIAL = "insignificant_special"
    UNKNOWN = "unknown"

    @classmethod
    def from_api(cls, value: str | None) -> EpisodeKind:
        """Map the API "type" string, falling back to UNKNOWN."""
        if value:
            try:
                return cls(value.casefold())
            except ValueError:
                pass
        return cls.UNKNOWN

    @property
    def is_special(self) -> bool:
        """True for either special kind."""
        return self in (
            EpisodeKind.SIGNIFICANT_SPECIAL,
            EpisodeKind.INSIGNIFICANT_SPECIAL,
        )


@dataclass(frozen=True)
class RemoteEpisode:
    """Episode object from the TVmaze API."""

    id: int
    name: str
    season: int | None = None
    # None for specials
    number: int | None = None
    kind: EpisodeKind = EpisodeKind.REGULAR
    # Raw "airdate" value, compared literally against filename dates
    airdate: str = ""
    runtime: int | None = None  # minutes
    summary: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class Country:
    """Network country."""

    name: str
    code: str | None = None


@dataclass(frozen=True)
class Network:
    """Broadcast network or web channel of a show."""

    id: int
    name: str
    country: Country | None = None


@dataclass(frozen=True)
class Externals:
    """Cross-reference ids to other catalogs."""

    imdb: str | None = None
    tvrage: int | None = None
    thetvdb: int | None = None


@dataclass(frozen=True)
class Image:
    """Image URLs in the two sizes TVmaze serves."""

    medium: str | None = None
    original: str | None = None


@dataclass(frozen=True)
class Show:
    """Show object from the TVmaze API (subset of fields)."""

    id: int
    name: str
    url: str | None = None
    genres: tuple[str, ...] = ()
    status: str | None = None  # "Running", "Ended", "To Be Determined", ...
    runtime: int | None = None  # minutes
    premiered: str | None = None
    rating: float | None = None
    network: Network | None = None
    externals: Externals = field(default_factory=Externals)
    image: Image | None = None
    summary: str | None = None


@dataclass(frozen=True)
class ShowSearchResult:
    """One hit from the show search endpoint."""

    score: float
    show: Show


@dataclass(frozen=True)
class Season:
    """Season object from the TVmaze API."""

    id: int
    number: int
    name: str = ""
    premiere_date: str | None = None
    end_date: str | None = None
    episode_order: int | None = None


@dataclass(frozen=True)
class Person:
    """Cast person."""

    id: int
    name: str
    image: Image | None = None


@dataclass(frozen=True)
class Character:
    """Character played by a cast member."""

    id: int
    name: str


@dataclass(frozen=True)
class CastMember:
    """Entry of a show's cast list."""

    person: Person
    character: Character
