"""Episode resolution engine.

Turns a show's catalog episode list and a local file's weak signals
(season/episode numbers, filename) into at most one catalog episode.

The cascade, first unique result wins:

1. numeric match on (season, episode), season 0 excluded;
2. air date in the filename (YYYY-MM-DD) narrows the candidates;
3. "[tvmazeid-<id>]" tag in the filename picks an id;
4. episode names contained in the filename narrow the candidates.

Anything still ambiguous afterwards is reported, never guessed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence

from tvmaze_metadata.catalog.models import EpisodeKind, RemoteEpisode
from tvmaze_metadata.core.string_utils import contains_ci, normalize_episode_name
from tvmaze_metadata.matching.cache import EpisodeFetcher, EpisodeListCache
from tvmaze_metadata.matching.models import (
    AmbiguousMatch,
    LocalEpisodeSignal,
    MatchOutcome,
    NoMatch,
    UniqueMatch,
)
from tvmaze_metadata.matching.specials import compute_position, special_index

logger = logging.getLogger(__name__)

ID_TAG_PREFIX = "tvmazeid-"
FILENAME_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
FILENAME_ID_PATTERN = re.compile(rf"\[{ID_TAG_PREFIX}([0-9]+)\]", re.IGNORECASE)

# Candidates listed in an ambiguity report
MAX_AMBIGUOUS_EXAMPLES = 10

Candidates = tuple[RemoteEpisode, ...]
# A filename stage gets the surviving candidates and the filename stem and
# returns the (possibly narrowed) candidates plus a match, if it found one.
FilenameStage = Callable[[Candidates, str], tuple[Candidates, RemoteEpisode | None]]


def match_by_number(
    episodes: Sequence[RemoteEpisode], season: int | None, number: int | None
) -> RemoteEpisode | None:
    """Find the episode with the given season and episode number.

    Season 0 is never matched numerically: local season-0 numbering has no
    counterpart in the catalog, where specials are unnumbered.
    """
    if season is None or number is None or season == 0:
        return None
    return next(
        (e for e in episodes if e.season == season and e.number == number),
        None,
    )


def narrow_by_airdate(
    candidates: Candidates, stem: str
) -> tuple[Candidates, RemoteEpisode | None]:
    """Keep candidates whose air date equals the date found in the filename.

    A date that matches nothing is ignored. Several matches keep the
    narrowed set for the following stages.
    """
    date_match = FILENAME_DATE_PATTERN.search(stem)
    if date_match is None:
        return candidates, None

    narrowed = tuple(e for e in candidates if e.airdate == date_match.group(0))
    if not narrowed:
        return candidates, None
    if len(narrowed) == 1:
        return narrowed, narrowed[0]
    return narrowed, None


def match_by_id_tag(
    candidates: Candidates, stem: str
) -> tuple[Candidates, RemoteEpisode | None]:
    """Pick the candidate whose id is given as "[tvmazeid-<id>]"."""
    id_match = FILENAME_ID_PATTERN.search(stem)
    if id_match is None:
        return candidates, None

    episode_id = int(id_match.group(1))
    return candidates, next((e for e in candidates if e.id == episode_id), None)


def narrow_by_name(
    candidates: Candidates, stem: str
) -> tuple[Candidates, RemoteEpisode | None]:
    """Keep candidates whose name appears in the filename.

    Both sides are normalized and compared case-insensitively. If no name
    appears, the candidates are kept as they are.
    """
    normalized_stem = normalize_episode_name(stem)
    narrowed = tuple(
        e
        for e in candidates
        if contains_ci(normalized_stem, normalize_episode_name(e.name))
    )
    return (narrowed or candidates), None


FILENAME_STAGES: tuple[FilenameStage, ...] = (
    narrow_by_airdate,
    match_by_id_tag,
    narrow_by_name,
)


def describe_ambiguity(
    candidates: Candidates, signal: LocalEpisodeSignal
) -> AmbiguousMatch:
    """Build the ambiguity report for a candidate set of two or more."""
    first = candidates[0]
    return AmbiguousMatch(
        candidates=tuple(
            (e.name, e.id) for e in candidates[:MAX_AMBIGUOUS_EXAMPLES]
        ),
        total=len(candidates),
        suggested_filename=(
            f"{first.name}[{ID_TAG_PREFIX}{first.id}]{signal.filename_suffix}"
        ),
        path=signal.path,
    )


def match_by_filename(
    episodes: Candidates, signal: LocalEpisodeSignal
) -> RemoteEpisode | NoMatch | AmbiguousMatch:
    """Run the filename stages over the full episode list.

    Returns:
        The matched episode, NoMatch, or AmbiguousMatch.
    """
    stem = signal.filename_stem
    if not stem:
        return NoMatch("no numeric match and no filename to match against")

    candidates = episodes
    for stage in FILENAME_STAGES:
        candidates, episode = stage(candidates, stem)
        if episode is not None:
            logger.debug("Matched '%s' by %s", stem, stage.__name__)
            return episode

    if not candidates:
        return NoMatch("show has no episodes")
    if len(candidates) > 1:
        return describe_ambiguity(candidates, signal)
    return candidates[0]


def build_match(
    all_episodes: Candidates, episode: RemoteEpisode, by_number: bool = False
) -> UniqueMatch:
    """Derive local numbering and position for a matched episode.

    An episode of unknown kind keeps its catalog numbers only when it was
    found by those numbers; it never gets a position.
    """
    kind = episode.kind
    if kind is EpisodeKind.REGULAR:
        return UniqueMatch(
            episode=episode, season=episode.season, number=episode.number
        )
    if kind is EpisodeKind.SIGNIFICANT_SPECIAL:
        return UniqueMatch(
            episode=episode,
            season=0,
            number=special_index(all_episodes, episode),
            position=compute_position(all_episodes, episode),
        )
    if kind is EpisodeKind.INSIGNIFICANT_SPECIAL:
        return UniqueMatch(
            episode=episode,
            season=0,
            number=special_index(all_episodes, episode),
        )
    logger.warning(
        "Episode %d ('%s') has unknown episode type, leaving position unset",
        episode.id,
        episode.name,
        extra={"episode_id": episode.id},
    )
    if by_number:
        return UniqueMatch(
            episode=episode, season=episode.season, number=episode.number
        )
    return UniqueMatch(episode=episode, season=None, number=None)


class EpisodeResolver:
    """Resolves local episode files against a show's catalog episode list.

    Collaborators are passed in explicitly: the fetch function (usually
    TvMazeClient.get_show_episodes) and the cache shared between lookups.
    Catalog failures and cancellation propagate to the caller.

    Usage:
        resolver = EpisodeResolver(client.get_show_episodes, EpisodeListCache())
        outcome = await resolver.resolve(
            LocalEpisodeSignal(show_id=82, path="/tv/GoT/Winter.Is.Coming.mkv")
        )
    """

    def __init__(
        self,
        fetch_episodes: EpisodeFetcher,
        cache: EpisodeListCache | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            fetch_episodes: Coroutine function returning a show's episodes
                in catalog order.
            cache: Episode list cache. A private one is created if omitted.
        """
        self._fetch_episodes = fetch_episodes
        self._cache = cache if cache is not None else EpisodeListCache()

    async def get_episodes(self, show_id: int) -> Candidates:
        """Get a show's episode list through the cache."""
        return await self._cache.get_episodes(show_id, self._fetch_episodes)

    async def resolve(self, signal: LocalEpisodeSignal) -> MatchOutcome:
        """Resolve a local episode signal to at most one catalog episode.

        Args:
            signal: Local identifying signals; show_id is required.

        Returns:
            UniqueMatch, NoMatch or AmbiguousMatch.
        """
        if signal.show_id is None:
            return NoMatch("no TVmaze show id")

        all_episodes = await self.get_episodes(signal.show_id)

        episode = match_by_number(all_episodes, signal.season, signal.episode)
        by_number = episode is not None
        if not by_number:
            result = match_by_filename(all_episodes, signal)
            if isinstance(result, AmbiguousMatch):
                logger.warning(
                    "%s",
                    result.describe(),
                    extra={
                        "candidates": [ep_id for _, ep_id in result.candidates],
                        "total": result.total,
                        "suggested_filename": result.suggested_filename,
                    },
                )
                return result
            if isinstance(result, NoMatch):
                logger.debug(
                    "No episode match for show %d: %s", signal.show_id, result.reason
                )
                return result
            episode = result

        return build_match(all_episodes, episode, by_number)
