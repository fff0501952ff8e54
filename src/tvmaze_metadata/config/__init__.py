"""Configuration management for tvmaze-metadata.

Precedence (highest to lowest): CLI flags, TVMAZE_* environment variables,
the TOML config file, then defaults.
"""

from tvmaze_metadata.config.builder import (
    ConfigBuilder,
    ConfigSource,
    source_from_env,
    source_from_file,
)
from tvmaze_metadata.config.env import EnvReader
from tvmaze_metadata.config.loader import (
    ConfigFileError,
    clear_config_cache,
    get_config,
    get_default_config_path,
    load_config_file,
)
from tvmaze_metadata.config.logging_factory import (
    build_logging_config,
)
from tvmaze_metadata.config.models import (
    CacheConfig,
    CatalogConfig,
    LoggingConfig,
    RetryConfig,
    TvMazeConfig,
)

__all__ = [
    # Models
    "CacheConfig",
    "CatalogConfig",
    "LoggingConfig",
    "RetryConfig",
    "TvMazeConfig",
    # Loader
    "ConfigFileError",
    "clear_config_cache",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    # Layering
    "EnvReader",
    "ConfigBuilder",
    "ConfigSource",
    "source_from_env",
    "source_from_file",
    "build_logging_config",
]
