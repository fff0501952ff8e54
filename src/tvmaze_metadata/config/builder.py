"""Configuration builder with explicit layering.

ConfigBuilder composes TvMazeConfig from several ConfigSources. Later
sources override earlier ones for every value they actually specify.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from tvmaze_metadata.config.env import EnvReader
from tvmaze_metadata.config.models import (
    DEFAULT_BASE_URL,
    CacheConfig,
    CatalogConfig,
    LoggingConfig,
    RetryConfig,
    TvMazeConfig,
)


@dataclass
class ConfigSource:
    """Configuration values from a single source.

    None values mean "not specified in this source" and never override
    values from lower-precedence sources.
    """

    # Catalog
    base_url: str | None = None
    timeout_seconds: int | None = None
    user_agent: str | None = None
    retry_max_attempts: int | None = None
    retry_delay_seconds: float | None = None
    retry_max_delay_seconds: float | None = None

    # Cache
    cache_absolute_ttl_seconds: float | None = None
    cache_sliding_ttl_seconds: float | None = None

    # Logging
    logging_level: str | None = None
    logging_file: Path | None = None
    logging_format: str | None = None
    logging_include_stderr: bool | None = None
    logging_max_bytes: int | None = None
    logging_backup_count: int | None = None


class ConfigBuilder:
    """Builds TvMazeConfig by layering ConfigSources with precedence.

    Example:
        builder = ConfigBuilder()
        builder.apply(source_from_file(file_config))
        builder.apply(source_from_env(reader))
        config = builder.build()
    """

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def apply(self, source: ConfigSource) -> None:
        """Apply a source, overriding previously applied values.

        Args:
            source: Configuration source to apply.
        """
        for field_obj in fields(source):
            value = getattr(source, field_obj.name)
            if value is not None:
                self._values[field_obj.name] = value

    def _get(self, key: str, default: Any) -> Any:
        return self._values.get(key, default)

    def build(self) -> TvMazeConfig:
        """Build the final configuration with defaults for unset values.

        Returns:
            Complete TvMazeConfig.

        Raises:
            ValueError: If a resolved value fails model validation.
        """
        retry = RetryConfig(
            max_attempts=self._get("retry_max_attempts", 3),
            delay_seconds=self._get("retry_delay_seconds", 2.0),
            max_delay_seconds=self._get("retry_max_delay_seconds", 60.0),
        )
        catalog = CatalogConfig(
            base_url=self._get("base_url", DEFAULT_BASE_URL),
            timeout_seconds=self._get("timeout_seconds", 30),
            user_agent=self._get("user_agent", "tvmaze-metadata"),
            retry=retry,
        )
        cache = CacheConfig(
            absolute_ttl_seconds=self._get("cache_absolute_ttl_seconds", 15 * 60),
            sliding_ttl_seconds=self._get("cache_sliding_ttl_seconds", 2 * 60),
        )
        logging_config = LoggingConfig(
            level=self._get("logging_level", "info"),
            file=self._get("logging_file", None),
            format=self._get("logging_format", "text"),
            include_stderr=self._get("logging_include_stderr", False),
            max_bytes=self._get("logging_max_bytes", 10_485_760),
            backup_count=self._get("logging_backup_count", 5),
        )
        return TvMazeConfig(catalog=catalog, cache=cache, logging=logging_config)


def source_from_file(file_config: dict[str, Any]) -> ConfigSource:
    """Create ConfigSource from a parsed TOML config file.

    Expected layout::

        [catalog]
        base_url = "https://api.tvmaze.com"
        timeout_seconds = 30

        [catalog.retry]
        max_attempts = 3
        delay_seconds = 2.0
        max_delay_seconds = 60.0

        [cache]
        absolute_ttl_seconds = 900
        sliding_ttl_seconds = 120

        [logging]
        level = "info"

    Args:
        file_config: Parsed configuration dictionary.

    Returns:
        ConfigSource with values from the config file.
    """
    catalog = file_config.get("catalog", {})
    retry = catalog.get("retry", {})
    cache = file_config.get("cache", {})
    logging_conf = file_config.get("logging", {})

    log_file_str = logging_conf.get("file")
    log_file = Path(log_file_str).expanduser() if log_file_str else None

    return ConfigSource(
        base_url=catalog.get("base_url"),
        timeout_seconds=catalog.get("timeout_seconds"),
        user_agent=catalog.get("user_agent"),
        retry_max_attempts=retry.get("max_attempts"),
        retry_delay_seconds=retry.get("delay_seconds"),
        retry_max_delay_seconds=retry.get("max_delay_seconds"),
        cache_absolute_ttl_seconds=cache.get("absolute_ttl_seconds"),
        cache_sliding_ttl_seconds=cache.get("sliding_ttl_seconds"),
        logging_level=logging_conf.get("level"),
        logging_file=log_file,
        logging_format=logging_conf.get("format"),
        logging_include_stderr=logging_conf.get("include_stderr"),
        logging_max_bytes=logging_conf.get("max_bytes"),
        logging_backup_count=logging_conf.get("backup_count"),
    )


def source_from_env(reader: EnvReader) -> ConfigSource:
    """Create ConfigSource from TVMAZE_* environment variables.

    Args:
        reader: EnvReader instance for reading environment variables.

    Returns:
        ConfigSource with values from environment variables.
    """
    return ConfigSource(
        base_url=reader.get_str("TVMAZE_BASE_URL"),
        timeout_seconds=reader.get_int("TVMAZE_TIMEOUT_SECONDS"),
        user_agent=reader.get_str("TVMAZE_USER_AGENT"),
        retry_max_attempts=reader.get_int("TVMAZE_RETRY_MAX_ATTEMPTS"),
        retry_delay_seconds=reader.get_float("TVMAZE_RETRY_DELAY_SECONDS"),
        retry_max_delay_seconds=reader.get_float(
            "TVMAZE_RETRY_MAX_DELAY_SECONDS"
        ),
        cache_absolute_ttl_seconds=reader.get_float("TVMAZE_CACHE_ABSOLUTE_TTL"),
        cache_sliding_ttl_seconds=reader.get_float("TVMAZE_CACHE_SLIDING_TTL"),
        logging_level=reader.get_str("TVMAZE_LOG_LEVEL"),
        logging_file=reader.get_path("TVMAZE_LOG_FILE"),
        logging_format=reader.get_str("TVMAZE_LOG_FORMAT"),
        logging_include_stderr=reader.get_bool("TVMAZE_LOG_INCLUDE_STDERR"),
    )
