"""Episode metadata provider.

Resolves an episode file against the show's catalog episode list and
maps the matched record to EpisodeMetadata.
"""

from __future__ import annotations

import logging

from tvmaze_metadata.catalog.client import TvMazeError
from tvmaze_metadata.core.datetime_utils import parse_air_date
from tvmaze_metadata.core.string_utils import strip_summary_html
from tvmaze_metadata.logging.context import lookup_context
from tvmaze_metadata.matching.models import LocalEpisodeSignal, UniqueMatch
from tvmaze_metadata.matching.resolver import EpisodeResolver
from tvmaze_metadata.providers.ids import PROVIDER_NAME, TVMAZE, get_tvmaze_id
from tvmaze_metadata.providers.models import (
    EpisodeInfo,
    EpisodeMetadata,
    MetadataResult,
    RemoteSearchResult,
)

logger = logging.getLogger(__name__)


def episode_metadata_from_match(match: UniqueMatch) -> EpisodeMetadata:
    """Map a resolved episode to host metadata fields.

    Args:
        match: Resolver outcome for a single episode.

    Returns:
        EpisodeMetadata. Unparsable air dates leave the date unset.
    """
    episode = match.episode
    premiere_date = parse_air_date(episode.airdate)
    metadata = EpisodeMetadata(
        name=episode.name,
        season_number=match.season,
        episode_number=match.number,
        premiere_date=premiere_date,
        production_year=premiere_date.year if premiere_date else None,
        runtime_minutes=episode.runtime,
        overview=strip_summary_html(episode.summary),
        provider_ids={TVMAZE: str(episode.id)},
    )
    if match.position is not None:
        metadata.airs_before_season = match.position.airs_before_season
        metadata.airs_before_episode = match.position.airs_before_episode
        metadata.airs_after_season = match.position.airs_after_season
    return metadata


class EpisodeProvider:
    """Episode metadata provider backed by the episode resolver.

    Requires the series' TVmaze id among the episode's series provider ids.
    Catalog failures are logged and reported as "no metadata".
    """

    name: str = PROVIDER_NAME

    def __init__(self, resolver: EpisodeResolver) -> None:
        self._resolver = resolver

    async def _get_episode(self, info: EpisodeInfo) -> EpisodeMetadata | None:
        show_id = get_tvmaze_id(info.series_provider_ids)
        if show_id is None:
            logger.debug("No TVmaze series id for %s, skipping", info.path)
            return None

        with lookup_context(show_id, info.path):
            outcome = await self._resolver.resolve(
                LocalEpisodeSignal(
                    show_id=show_id,
                    season=info.season_number,
                    episode=info.episode_number,
                    path=info.path,
                )
            )
        if not isinstance(outcome, UniqueMatch):
            return None
        return episode_metadata_from_match(outcome)

    async def get_metadata(self, info: EpisodeInfo) -> MetadataResult[EpisodeMetadata]:
        """Look up metadata for an episode file.

        Args:
            info: Episode lookup info from the host.

        Returns:
            MetadataResult with the episode, or an empty result.
        """
        try:
            episode = await self._get_episode(info)
        except TvMazeError as e:
            logger.warning("Episode lookup failed for %s: %s", info.path, e)
            return MetadataResult()

        if episode is None:
            return MetadataResult()
        return MetadataResult.found(episode)

    async def get_search_results(self, info: EpisodeInfo) -> list[RemoteSearchResult]:
        """Offer the resolved episode, if any, as a search result."""
        try:
            episode = await self._get_episode(info)
        except TvMazeError as e:
            logger.warning("Episode search failed for %s: %s", info.path, e)
            return []

        if episode is None:
            return []
        return [
            RemoteSearchResult(
                name=episode.name,
                search_provider_name=self.name,
                provider_ids=dict(episode.provider_ids),
                season_number=episode.season_number,
                index_number=episode.episode_number,
                premiere_date=episode.premiere_date,
                production_year=episode.production_year,
            )
        ]
