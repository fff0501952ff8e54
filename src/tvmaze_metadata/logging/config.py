"""Root logger setup used by the CLI."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from tvmaze_metadata.logging.context import LookupContextFilter
from tvmaze_metadata.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from tvmaze_metadata.config.models import LoggingConfig

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s %(levelname)-7s %(lookup_tag)s%(name)s: %(message)s"


def _open_log_file(config: LoggingConfig) -> logging.Handler:
    path = Path(config.file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )


def configure_logging(config: LoggingConfig) -> None:
    """Replace the root logger's handlers according to config.

    Logs go to the configured file, to stderr, or both. An unusable log
    file falls back to stderr with a warning.
    """
    handlers: list[logging.Handler] = []
    file_error: OSError | None = None
    if config.file is not None:
        try:
            handlers.append(_open_log_file(config))
        except OSError as e:
            file_error = e
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    if config.format.casefold() == "json":
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)
    context_filter = LookupContextFilter()

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(config.level.upper())
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root.addHandler(handler)

    if file_error is not None:
        logger.warning(
            "Cannot write log file %s, logging to stderr: %s", config.file, file_error
        )
