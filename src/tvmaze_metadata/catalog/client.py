"""TVmaze API client for metadata retrieval.

This module provides an async HTTP client for the public TVmaze REST API:
show, season, episode and cast lookups, name search, and lookups by
external ids (IMDb, TheTVDB, TVRage).
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from tvmaze_metadata.catalog.models import (
    CastMember,
    Character,
    Country,
    EpisodeKind,
    Externals,
    Image,
    Network,
    Person,
    RemoteEpisode,
    Season,
    Show,
    ShowSearchResult,
)
from tvmaze_metadata.catalog.retry import RATE_LIMITED, RetryPolicy
from tvmaze_metadata.config.models import CatalogConfig

logger = logging.getLogger(__name__)


class TvMazeError(Exception):
    """Base class for catalog failures."""


class TvMazeConnectionError(TvMazeError):
    """Raised when the catalog cannot be reached or answers with an error."""


class TvMazeRateLimitError(TvMazeError):
    """Raised when requests are still rate limited after all retries."""


class TvMazeClient:
    """Async HTTP client for the TVmaze API.

    Single-record lookups return None when the catalog answers 404. All
    other failures raise TvMazeError subclasses; nothing is retried except
    rate-limited responses, which go through the RetryPolicy.

    Usage:
        async with TvMazeClient(CatalogConfig()) as client:
            episodes = await client.get_show_episodes(82)
    """

    def __init__(
        self,
        config: CatalogConfig,
        retry_policy: RetryPolicy | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Catalog connection configuration.
            retry_policy: Policy for 429 responses. Defaults to one built
                from config.retry.
            http_client: Pre-built httpx client (used by tests). When
                given, the caller owns its lifecycle.
        """
        self._base_url = config.base_url.rstrip("/")
        self._timeout = config.timeout_seconds
        self._user_agent = config.user_agent
        self._retry = retry_policy or RetryPolicy.from_config(config.retry)
        self._client = http_client
        self._owns_client = http_client is None

    async def __aenter__(self) -> TvMazeClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def _headers(self) -> dict[str, str]:
        return {"User-Agent": self._user_agent, "Accept": "application/json"}

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers(),
                follow_redirects=True,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def _get_json(
        self, path: str, params: dict[str, Any] | None = None
    ) -> Any | None:
        """GET a catalog resource and decode its JSON body.

        Args:
            path: API path, e.g. "/shows/82".
            params: Optional query parameters.

        Returns:
            Decoded JSON, or None if the resource does not exist (404).

        Raises:
            TvMazeRateLimitError: If still rate limited after retries.
            TvMazeConnectionError: On transport, HTTP or decoding errors.
        """
        client = self._get_client()
        try:
            response = await self._retry.send(lambda: client.get(path, params=params))
            if response.status_code == 404:
                logger.debug("TVmaze: %s not found", path)
                return None
            if response.status_code == RATE_LIMITED:
                raise TvMazeRateLimitError(f"Rate limited requesting {path}")
            response.raise_for_status()
            return response.json()
        except httpx.ConnectError as e:
            raise TvMazeConnectionError(f"Cannot connect to TVmaze: {e}") from e
        except httpx.TimeoutException as e:
            raise TvMazeConnectionError(f"Connection timeout: {e}") from e
        except httpx.HTTPStatusError as e:
            raise TvMazeConnectionError(f"HTTP error: {e}") from e
        except httpx.HTTPError as e:
            raise TvMazeConnectionError(f"Request to {path} failed: {e}") from e
        except ValueError as e:
            raise TvMazeConnectionError(f"Invalid JSON from {path}: {e}") from e

    def _records(self, data: Any, path: str) -> list[dict[str, Any]]:
        """Check that a list endpoint answered with a list of objects.

        Raises:
            TvMazeConnectionError: On any other JSON shape.
        """
        if not isinstance(data, list) or not all(isinstance(i, dict) for i in data):
            raise TvMazeConnectionError(
                f"Unexpected response shape from {path}: {type(data).__name__}"
            )
        return data

    def _record(self, data: Any, path: str) -> dict[str, Any]:
        """Check that a single-record endpoint answered with an object."""
        if not isinstance(data, dict):
            raise TvMazeConnectionError(
                f"Unexpected response shape from {path}: {type(data).__name__}"
            )
        return data

    async def get_show_episodes(
        self, show_id: int, include_specials: bool = True
    ) -> tuple[RemoteEpisode, ...]:
        """Fetch the full episode list of a show in catalog air order.

        Args:
            show_id: TVmaze show id.
            include_specials: Include special episodes in the list.

        Returns:
            Episodes in catalog order; empty if the show does not exist.
        """
        params = {"specials": 1} if include_specials else None
        path = f"/shows/{show_id}/episodes"
        data = await self._get_json(path, params)
        if data is None:
            return ()
        return tuple(
            self._parse_episode_response(e) for e in self._records(data, path)
        )

    async def get_show(self, show_id: int) -> Show | None:
        """Fetch a show's main information by TVmaze id."""
        path = f"/shows/{show_id}"
        data = await self._get_json(path)
        if data is None:
            return None
        return self._parse_show_response(self._record(data, path))

    async def get_show_seasons(self, show_id: int) -> tuple[Season, ...] | None:
        """Fetch the season list of a show, or None if the show is unknown."""
        path = f"/shows/{show_id}/seasons"
        data = await self._get_json(path)
        if data is None:
            return None
        return tuple(
            self._parse_season_response(s) for s in self._records(data, path)
        )

    async def get_show_cast(self, show_id: int) -> tuple[CastMember, ...]:
        """Fetch the cast of a show."""
        path = f"/shows/{show_id}/cast"
        data = await self._get_json(path)
        if data is None:
            return ()
        return tuple(self._parse_cast_response(c) for c in self._records(data, path))

    async def search_shows(self, name: str) -> list[ShowSearchResult]:
        """Search shows by name, in the catalog's relevance order."""
        data = await self._get_json("/search/shows", {"q": name.strip()})
        if data is None:
            return []
        return [
            ShowSearchResult(
                score=float(item.get("score") or 0.0),
                show=self._parse_show_response(item["show"]),
            )
            for item in self._records(data, "/search/shows")
            if isinstance(item.get("show"), dict)
        ]

    async def lookup_show(
        self,
        *,
        imdb: str | None = None,
        thetvdb: int | None = None,
        tvrage: int | None = None,
    ) -> Show | None:
        """Look up a show by exactly one external id.

        Raises:
            ValueError: If not exactly one id is given.
        """
        params = {
            key: value
            for key, value in (("imdb", imdb), ("thetvdb", thetvdb), ("tvrage", tvrage))
            if value is not None
        }
        if len(params) != 1:
            raise ValueError("lookup_show requires exactly one external id")
        data = await self._get_json("/lookup/shows", params)
        if data is None:
            return None
        return self._parse_show_response(self._record(data, "/lookup/shows"))

    def _parse_episode_response(self, data: dict[str, Any]) -> RemoteEpisode:
        """Parse episode JSON response to RemoteEpisode.

        Raises:
            TvMazeConnectionError: If the response has no 'id'.
        """
        episode_id = data.get("id")
        if episode_id is None:
            raise TvMazeConnectionError("Episode response missing required 'id' field")

        return RemoteEpisode(
            id=episode_id,
            name=data.get("name") or "",
            season=data.get("season"),
            number=data.get("number"),
            kind=EpisodeKind.from_api(data.get("type")),
            airdate=data.get("airdate") or "",
            runtime=data.get("runtime"),
            summary=data.get("summary"),
            url=data.get("url"),
        )

    def _parse_image(self, data: dict[str, Any] | None) -> Image | None:
        if not data:
            return None
        return Image(medium=data.get("medium"), original=data.get("original"))

    def _parse_network(self, data: dict[str, Any] | None) -> Network | None:
        if not data:
            return None
        country = None
        if country_data := data.get("country"):
            country = Country(
                name=country_data.get("name", ""),
                code=country_data.get("code"),
            )
        return Network(id=data.get("id", 0), name=data.get("name", ""), country=country)

    def _parse_show_response(self, data: dict[str, Any]) -> Show:
        """Parse show JSON response to Show.

        Raises:
            TvMazeConnectionError: If the response has no 'id'.
        """
        show_id = data.get("id")
        if show_id is None:
            raise TvMazeConnectionError("Show response missing required 'id' field")

        externals_data = data.get("externals") or {}
        rating_data = data.get("rating") or {}

        return Show(
            id=show_id,
            name=data.get("name") or "",
            url=data.get("url"),
            genres=tuple(data.get("genres") or ()),
            status=data.get("status"),
            runtime=data.get("runtime") or data.get("averageRuntime"),
            premiered=data.get("premiered"),
            rating=rating_data.get("average"),
            network=self._parse_network(data.get("network") or data.get("webChannel")),
            externals=Externals(
                imdb=externals_data.get("imdb"),
                tvrage=externals_data.get("tvrage"),
                thetvdb=externals_data.get("thetvdb"),
            ),
            image=self._parse_image(data.get("image")),
            summary=data.get("summary"),
        )

    def _parse_season_response(self, data: dict[str, Any]) -> Season:
        return Season(
            id=data.get("id", 0),
            number=data.get("number", 0),
            name=data.get("name") or "",
            premiere_date=data.get("premiereDate"),
            end_date=data.get("endDate"),
            episode_order=data.get("episodeOrder"),
        )

    def _parse_cast_response(self, data: dict[str, Any]) -> CastMember:
        person_data = data.get("person") or {}
        character_data = data.get("character") or {}
        return CastMember(
            person=Person(
                id=person_data.get("id", 0),
                name=person_data.get("name", ""),
                image=self._parse_image(person_data.get("image")),
            ),
            character=Character(
                id=character_data.get("id", 0),
                name=character_data.get("name", ""),
            ),
        )
