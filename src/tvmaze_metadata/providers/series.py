"""Series metadata provider.

Finds the catalog show for a local series by TVmaze id, then by external
ids (IMDb, TVRage, TheTVDB), then by name search, and maps show and cast.
"""

from __future__ import annotations

import logging

from tvmaze_metadata.catalog.client import TvMazeClient, TvMazeError
from tvmaze_metadata.catalog.models import CastMember, Show
from tvmaze_metadata.core.datetime_utils import parse_air_date
from tvmaze_metadata.core.string_utils import parse_series_name, strip_summary_html
from tvmaze_metadata.logging.context import lookup_context
from tvmaze_metadata.matching.series import identify_show
from tvmaze_metadata.providers.ids import (
    IMDB,
    PROVIDER_NAME,
    TVDB,
    TVMAZE,
    TVRAGE,
    get_int_id,
    get_tvmaze_id,
)
from tvmaze_metadata.providers.models import (
    MetadataResult,
    PersonInfo,
    RemoteSearchResult,
    SeriesInfo,
    SeriesMetadata,
    SeriesStatus,
)

logger = logging.getLogger(__name__)

_STATUS_MAP: dict[str, SeriesStatus] = {
    "running": SeriesStatus.CONTINUING,
    "ended": SeriesStatus.ENDED,
}


def show_provider_ids(show: Show) -> dict[str, str]:
    """TVmaze id plus every external id the show carries."""
    ids = {TVMAZE: str(show.id)}
    if show.externals.imdb:
        ids[IMDB] = show.externals.imdb
    if show.externals.tvrage is not None:
        ids[TVRAGE] = str(show.externals.tvrage)
    if show.externals.thetvdb is not None:
        ids[TVDB] = str(show.externals.thetvdb)
    return ids


def series_metadata_from_show(show: Show) -> SeriesMetadata:
    """Map a catalog show to host series metadata."""
    studios: list[str] = []
    if show.network is not None and show.network.name.strip():
        network_name = show.network.name
        if show.network.country is not None and show.network.country.code:
            network_name = f"{network_name} ({show.network.country.code})"
        studios.append(network_name)

    premiere_date = parse_air_date(show.premiered)
    status = _STATUS_MAP.get(show.status.casefold()) if show.status else None

    return SeriesMetadata(
        name=show.name,
        genres=list(show.genres),
        studios=studios,
        premiere_date=premiere_date,
        production_year=premiere_date.year if premiere_date else None,
        community_rating=show.rating,
        runtime_minutes=show.runtime,
        status=status,
        overview=strip_summary_html(show.summary),
        homepage_url=show.url,
        provider_ids=show_provider_ids(show),
    )


def person_from_cast_member(member: CastMember) -> PersonInfo:
    """Map a cast entry to an actor."""
    image = member.person.image
    return PersonInfo(
        name=member.person.name,
        role=member.character.name,
        image_url=(image.original or image.medium) if image else None,
        provider_ids={TVMAZE: str(member.person.id)},
    )


class SeriesProvider:
    """Series metadata provider."""

    name: str = PROVIDER_NAME

    def __init__(self, client: TvMazeClient) -> None:
        self._client = client

    async def _find_show(self, info: SeriesInfo) -> Show | None:
        """Find the show by ids first, then by name."""
        show: Show | None = None

        tvmaze_id = get_tvmaze_id(info.provider_ids)
        if tvmaze_id is not None:
            show = await self._client.get_show(tvmaze_id)

        imdb_id = info.provider_ids.get(IMDB)
        if show is None and imdb_id:
            show = await self._client.lookup_show(imdb=imdb_id)

        tvrage_id = get_int_id(info.provider_ids, TVRAGE)
        if show is None and tvrage_id is not None:
            show = await self._client.lookup_show(tvrage=tvrage_id)

        tvdb_id = get_int_id(info.provider_ids, TVDB)
        if show is None and tvdb_id is not None:
            show = await self._client.lookup_show(thetvdb=tvdb_id)

        if show is None and info.name:
            name, parsed_year = parse_series_name(info.name)
            year = info.year if info.year is not None else parsed_year
            logger.debug("No TVmaze id, searching by name %r (year %s)", name, year)
            results = await self._client.search_shows(name)
            show = identify_show(results, year)

        return show

    async def get_metadata(self, info: SeriesInfo) -> MetadataResult[SeriesMetadata]:
        """Look up series metadata and cast.

        Args:
            info: Series lookup info from the host.

        Returns:
            MetadataResult with the series and its cast, or an empty result.
        """
        try:
            show = await self._find_show(info)
            if show is None:
                logger.debug("No TVmaze result found for %s", info.name)
                return MetadataResult()

            with lookup_context(show.id):
                cast = await self._client.get_show_cast(show.id)
                people = [person_from_cast_member(m) for m in cast]
                logger.debug("Matched '%s' to show %d", info.name, show.id)
        except TvMazeError as e:
            logger.warning("Series lookup failed for %s: %s", info.name, e)
            return MetadataResult()

        return MetadataResult.found(series_metadata_from_show(show), people)

    async def get_search_results(self, info: SeriesInfo) -> list[RemoteSearchResult]:
        """Search the catalog by name and offer every hit."""
        if not info.name:
            return []
        name, _ = parse_series_name(info.name)
        try:
            results = await self._client.search_shows(name)
        except TvMazeError as e:
            logger.warning("Series search failed for %s: %s", info.name, e)
            return []

        logger.debug("Result count for %s: %d", info.name, len(results))
        search_results = []
        for result in results:
            show = result.show
            premiere_date = parse_air_date(show.premiered)
            search_results.append(
                RemoteSearchResult(
                    name=show.name,
                    search_provider_name=self.name,
                    provider_ids=show_provider_ids(show),
                    premiere_date=premiere_date,
                    production_year=premiere_date.year if premiere_date else None,
                    image_url=show.image.original if show.image else None,
                )
            )
        return search_results
