"""Wiring of client, cache, resolver and providers.

The host creates one service per process and shares it between lookups,
so the episode list cache is shared too.
"""

from __future__ import annotations

import httpx

from tvmaze_metadata.catalog.client import TvMazeClient
from tvmaze_metadata.config.models import TvMazeConfig
from tvmaze_metadata.matching.cache import EpisodeListCache
from tvmaze_metadata.matching.resolver import EpisodeResolver
from tvmaze_metadata.providers.episode import EpisodeProvider
from tvmaze_metadata.providers.season import SeasonProvider
from tvmaze_metadata.providers.series import SeriesProvider


class TvMazeMetadataService:
    """Provider bundle backed by one catalog client and one cache.

    Usage:
        async with TvMazeMetadataService(get_config()) as service:
            result = await service.episodes.get_metadata(info)
    """

    def __init__(
        self,
        config: TvMazeConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.client = TvMazeClient(config.catalog, http_client=http_client)
        self.cache = EpisodeListCache.from_config(config.cache)
        self.resolver = EpisodeResolver(self.client.get_show_episodes, self.cache)
        self.episodes = EpisodeProvider(self.resolver)
        self.seasons = SeasonProvider(self.client)
        self.series = SeriesProvider(self.client)

    async def __aenter__(self) -> TvMazeMetadataService:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Release the catalog client."""
        await self.client.aclose()
