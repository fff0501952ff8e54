"""Data types exchanged with the episode matching engine."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath, PurePosixPath, PureWindowsPath

from tvmaze_metadata.catalog.models import RemoteEpisode


def _host_path(path: str) -> PurePath:
    """Parse a host path; backslashes mean a Windows host."""
    if "\\" in path:
        return PureWindowsPath(path)
    return PurePosixPath(path)


@dataclass(frozen=True)
class LocalEpisodeSignal:
    """What is known locally about an episode file.

    The filename is untrusted and only used as a fallback heuristic.
    """

    show_id: int | None
    season: int | None = None
    episode: int | None = None
    path: str | None = None

    @property
    def filename_stem(self) -> str:
        """Filename without directory and extension, or "" without a path."""
        if not self.path:
            return ""
        return _host_path(self.path).stem

    @property
    def filename_suffix(self) -> str:
        """Extension including the dot, or "" without a path."""
        if not self.path:
            return ""
        return _host_path(self.path).suffix


@dataclass(frozen=True)
class SeasonPosition:
    """Where a special sits relative to regular episodes.

    Either the airs-before pair or airs_after_season is set, never both.
    """

    airs_before_season: int | None = None
    airs_before_episode: int | None = None
    airs_after_season: int | None = None


@dataclass(frozen=True)
class UniqueMatch:
    """Exactly one catalog episode matched.

    season/episode are the numbers to show locally: copied for regular
    episodes, synthesized (season 0) for specials. Unknown kinds keep the catalog
    numbers only when matched by number.
    """

    episode: RemoteEpisode
    season: int | None
    number: int | None
    position: SeasonPosition | None = None


@dataclass(frozen=True)
class NoMatch:
    """No catalog episode matched."""

    reason: str


@dataclass(frozen=True)
class AmbiguousMatch:
    """Several catalog episodes remain plausible.

    Carries enough detail for a human to rename the file and retry.
    """

    # (name, id) of at most MAX_AMBIGUOUS_EXAMPLES candidates
    candidates: tuple[tuple[str, int], ...]
    total: int
    suggested_filename: str
    path: str | None = None

    def describe(self) -> str:
        """Human-readable diagnostic for logs and CLI output."""
        examples = ", ".join(f"{name}(ID: {ep_id})" for name, ep_id in self.candidates)
        return (
            f"Found multiple possible episodes in TVmaze for file '{self.path}': "
            f"{examples}. Include the name or the ID of the correct episode in "
            "the file name to make the match unique. TVmaze IDs have to be in "
            f"brackets and prefixed with 'tvmazeid-' (e.g. "
            f"'{self.suggested_filename}')"
        )


MatchOutcome = UniqueMatch | NoMatch | AmbiguousMatch
