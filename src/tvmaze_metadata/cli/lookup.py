"""CLI lookup commands: episode, season and series."""

from __future__ import annotations

import asyncio
import logging

import click

from tvmaze_metadata.catalog.client import TvMazeError
from tvmaze_metadata.cli.formatters import (
    format_human,
    format_json,
    outcome_to_dict,
    to_dict,
)
from tvmaze_metadata.config.models import TvMazeConfig
from tvmaze_metadata.logging.context import lookup_context
from tvmaze_metadata.matching.models import (
    AmbiguousMatch,
    LocalEpisodeSignal,
    MatchOutcome,
    NoMatch,
)
from tvmaze_metadata.providers.episode import episode_metadata_from_match
from tvmaze_metadata.providers.ids import IMDB, TVMAZE
from tvmaze_metadata.providers.models import (
    MetadataResult,
    SeasonInfo,
    SeasonMetadata,
    SeriesInfo,
    SeriesMetadata,
)
from tvmaze_metadata.providers.service import TvMazeMetadataService

logger = logging.getLogger(__name__)

_json_option = click.option(
    "--json", "as_json", is_flag=True, help="Output result as JSON."
)


def _echo_result(data: dict, human: str, as_json: bool) -> None:
    click.echo(format_json(data) if as_json else human)


async def _resolve_episode(
    config: TvMazeConfig, signal: LocalEpisodeSignal
) -> MatchOutcome:
    async with TvMazeMetadataService(config) as service:
        with lookup_context(signal.show_id, signal.path):
            return await service.resolver.resolve(signal)


@click.command("episode")
@click.argument("path")
@click.option("--show-id", type=int, required=True, help="TVmaze show id.")
@click.option("--season", type=int, default=None, help="Local season number.")
@click.option("--episode", type=int, default=None, help="Local episode number.")
@_json_option
@click.pass_context
def episode_command(
    ctx: click.Context,
    path: str,
    show_id: int,
    season: int | None,
    episode: int | None,
    as_json: bool,
) -> None:
    """Resolve an episode file against a show's TVmaze episode list.

    PATH is the episode file name or path; it is not opened.
    """
    config: TvMazeConfig = ctx.obj["config"]
    signal = LocalEpisodeSignal(
        show_id=show_id, season=season, episode=episode, path=path
    )
    try:
        outcome = asyncio.run(_resolve_episode(config, signal))
    except TvMazeError as e:
        raise click.ClickException(str(e)) from e

    if isinstance(outcome, AmbiguousMatch):
        _echo_result(outcome_to_dict(outcome), outcome.describe(), as_json)
        ctx.exit(1)
    if isinstance(outcome, NoMatch):
        _echo_result(outcome_to_dict(outcome), f"No match: {outcome.reason}", as_json)
        ctx.exit(1)

    metadata = episode_metadata_from_match(outcome)
    _echo_result(
        {"status": "matched", "episode": to_dict(metadata)},
        format_human(metadata, f"Episode: {metadata.name}"),
        as_json,
    )


@click.command("season")
@click.option("--show-id", type=int, required=True, help="TVmaze show id.")
@click.option("--season", type=int, required=True, help="Season number.")
@_json_option
@click.pass_context
def season_command(
    ctx: click.Context, show_id: int, season: int, as_json: bool
) -> None:
    """Look up a season of a TVmaze show."""
    config: TvMazeConfig = ctx.obj["config"]
    info = SeasonInfo(index_number=season, series_provider_ids={TVMAZE: str(show_id)})

    async def run() -> MetadataResult[SeasonMetadata]:
        async with TvMazeMetadataService(config) as service:
            return await service.seasons.get_metadata(info)

    result = asyncio.run(run())
    if not result.has_metadata:
        _echo_result({"status": "no_match"}, "No match", as_json)
        ctx.exit(1)

    _echo_result(
        {"status": "matched", "season": to_dict(result.item)},
        format_human(result.item, f"Season: {result.item.name}"),
        as_json,
    )


@click.command("series")
@click.argument("name", required=False)
@click.option("--year", type=int, default=None, help="Premiere year hint.")
@click.option("--tvmaze-id", type=int, default=None, help="Known TVmaze id.")
@click.option("--imdb-id", default=None, help="Known IMDb id (tt...).")
@_json_option
@click.pass_context
def series_command(
    ctx: click.Context,
    name: str | None,
    year: int | None,
    tvmaze_id: int | None,
    imdb_id: str | None,
    as_json: bool,
) -> None:
    """Look up a series by id or by NAME.

    NAME may carry a trailing year, e.g. "Doctor Who (2005)".
    """
    if not (name or tvmaze_id or imdb_id):
        raise click.UsageError("Give a NAME, --tvmaze-id or --imdb-id.")

    config: TvMazeConfig = ctx.obj["config"]
    provider_ids: dict[str, str] = {}
    if tvmaze_id is not None:
        provider_ids[TVMAZE] = str(tvmaze_id)
    if imdb_id:
        provider_ids[IMDB] = imdb_id
    info = SeriesInfo(name=name, year=year, provider_ids=provider_ids)

    async def run() -> MetadataResult[SeriesMetadata]:
        async with TvMazeMetadataService(config) as service:
            return await service.series.get_metadata(info)

    result = asyncio.run(run())
    if not result.has_metadata:
        _echo_result({"status": "no_match"}, "No match", as_json)
        ctx.exit(1)

    data = {
        "status": "matched",
        "series": to_dict(result.item),
        "people": [to_dict(p) for p in result.people],
    }
    human = format_human(result.item, f"Series: {result.item.name}")
    if result.people:
        cast = ", ".join(f"{p.name} ({p.role})" for p in result.people[:10])
        human += f"\n  cast: {cast}"
    _echo_result(data, human, as_json)
