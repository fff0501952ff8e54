"""Season metadata provider."""

from __future__ import annotations

import logging

from tvmaze_metadata.catalog.client import TvMazeClient, TvMazeError
from tvmaze_metadata.core.datetime_utils import parse_air_date
from tvmaze_metadata.logging.context import lookup_context
from tvmaze_metadata.providers.ids import PROVIDER_NAME, TVMAZE, get_tvmaze_id
from tvmaze_metadata.providers.models import (
    MetadataResult,
    RemoteSearchResult,
    SeasonInfo,
    SeasonMetadata,
)

logger = logging.getLogger(__name__)


class SeasonProvider:
    """Looks up a season by number in the series' catalog season list."""

    name: str = PROVIDER_NAME

    def __init__(self, client: TvMazeClient) -> None:
        self._client = client

    async def _get_season(self, info: SeasonInfo) -> SeasonMetadata | None:
        show_id = get_tvmaze_id(info.series_provider_ids)
        if show_id is None or info.index_number is None:
            return None

        with lookup_context(show_id):
            seasons = await self._client.get_show_seasons(show_id)
            if seasons is None:
                logger.debug("Show %d not found in TVmaze", show_id)
                return None

            season = next((s for s in seasons if s.number == info.index_number), None)
            if season is None:
                logger.debug(
                    "Season %d not found for show %d", info.index_number, show_id
                )
                return None

        premiere_date = parse_air_date(season.premiere_date)
        return SeasonMetadata(
            name=season.name,
            index_number=season.number,
            premiere_date=premiere_date,
            production_year=premiere_date.year if premiere_date else None,
            provider_ids={TVMAZE: str(season.id)},
        )

    async def get_metadata(self, info: SeasonInfo) -> MetadataResult[SeasonMetadata]:
        """Look up season metadata; requires season number and series id."""
        try:
            season = await self._get_season(info)
        except TvMazeError as e:
            logger.warning("Season lookup failed: %s", e)
            return MetadataResult()
        if season is None:
            return MetadataResult()
        return MetadataResult.found(season)

    async def get_search_results(self, info: SeasonInfo) -> list[RemoteSearchResult]:
        """Offer the matching season, if any, as a search result."""
        try:
            season = await self._get_season(info)
        except TvMazeError as e:
            logger.warning("Season search failed: %s", e)
            return []
        if season is None:
            return []
        return [
            RemoteSearchResult(
                name=season.name,
                search_provider_name=self.name,
                provider_ids=dict(season.provider_ids),
                index_number=season.index_number,
                premiere_date=season.premiere_date,
                production_year=season.production_year,
            )
        ]
