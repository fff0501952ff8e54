"""CLI module for tvmaze-metadata."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from tvmaze_metadata.config.loader import ConfigFileError, get_config
from tvmaze_metadata.config.logging_factory import build_logging_config
from tvmaze_metadata.logging import configure_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(package_name="tvmaze-metadata")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Config file (default: ~/.tvmaze-metadata/config.toml).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override log level (default: info).",
)
@click.option(
    "--log-file",
    type=click.Path(path_type=Path),
    default=None,
    help="Override log file path.",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Use JSON log format.",
)
@click.pass_context
def main(
    ctx: click.Context,
    config_path: Path | None,
    log_level: str | None,
    log_file: Path | None,
    log_json: bool,
) -> None:
    """Look up TVmaze metadata for local episodes, seasons and series."""
    ctx.ensure_object(dict)

    # Preserve a config injected by tests
    if "config" not in ctx.obj:
        try:
            ctx.obj["config"] = get_config(config_path, strict=config_path is not None)
        except (ConfigFileError, ValueError) as e:
            raise click.ClickException(f"Invalid configuration: {e}") from e

    config = ctx.obj["config"]
    configure_logging(
        build_logging_config(
            config.logging,
            level=log_level,
            file=log_file,
            format="json" if log_json else None,
        )
    )
    logger.debug("Catalog: %s", config.catalog.base_url)


def _register_commands() -> None:
    from tvmaze_metadata.cli.lookup import (
        episode_command,
        season_command,
        series_command,
    )

    main.add_command(episode_command)
    main.add_command(season_command)
    main.add_command(series_command)


_register_commands()
