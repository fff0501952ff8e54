"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (applied by the caller through build_logging_config etc.)
2. Environment variables (TVMAZE_*)
3. Config file (~/.tvmaze-metadata/config.toml)
4. Default values

Environment variables:
- TVMAZE_CONFIG_PATH: Path to config file (overrides default location)
- TVMAZE_BASE_URL: Catalog API base URL
- TVMAZE_TIMEOUT_SECONDS: Request timeout
- TVMAZE_USER_AGENT: User-Agent header
- TVMAZE_RETRY_MAX_ATTEMPTS / TVMAZE_RETRY_DELAY_SECONDS: 429 retry policy
- TVMAZE_RETRY_MAX_DELAY_SECONDS: cap on any wait, including Retry-After
- TVMAZE_CACHE_ABSOLUTE_TTL / TVMAZE_CACHE_SLIDING_TTL: cache expiry (seconds)
- TVMAZE_LOG_LEVEL, TVMAZE_LOG_FILE, TVMAZE_LOG_FORMAT,
  TVMAZE_LOG_INCLUDE_STDERR: logging overrides
"""

from __future__ import annotations

import logging
import os
import threading
import tomllib
from pathlib import Path
from typing import Any

from tvmaze_metadata.config.builder import (
    ConfigBuilder,
    source_from_env,
    source_from_file,
)
from tvmaze_metadata.config.env import EnvReader
from tvmaze_metadata.config.models import TvMazeConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path.home() / ".tvmaze-metadata"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"

# path -> (parsed dict, mtime); reloaded when the file changes
_config_cache: dict[Path, tuple[dict[str, Any], float]] = {}
_config_cache_lock = threading.Lock()


class ConfigFileError(Exception):
    """Raised when a config file cannot be read or parsed in strict mode."""


def get_default_config_path() -> Path:
    """Get the default config file path.

    Can be overridden by the TVMAZE_CONFIG_PATH environment variable.
    """
    env_path = os.environ.get("TVMAZE_CONFIG_PATH")
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_toml_file(path: Path, *, strict: bool = False) -> dict[str, Any]:
    """Load and parse a TOML file.

    Args:
        path: Path to the TOML file.
        strict: If True, raise ConfigFileError on read or parse failures.

    Returns:
        Parsed dictionary. Empty if the file doesn't exist, or on errors
        when not strict.

    Raises:
        ConfigFileError: When strict=True and the file cannot be parsed.
    """
    if not path.exists():
        logger.debug("Config file not found: %s", path)
        return {}

    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigFileError(f"Cannot load config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Results are cached with mtime-based invalidation. Thread-safe.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigFileError on parse failures.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.
    """
    if path is None:
        path = get_default_config_path()

    try:
        current_mtime = path.stat().st_mtime
    except FileNotFoundError:
        current_mtime = 0.0

    with _config_cache_lock:
        if path in _config_cache:
            cached_config, cached_mtime = _config_cache[path]
            if current_mtime == cached_mtime:
                return cached_config

        result = load_toml_file(path, strict=strict)
        _config_cache[path] = (result, current_mtime)
        return result


def clear_config_cache() -> None:
    """Clear the config file cache. Primarily useful for testing."""
    with _config_cache_lock:
        _config_cache.clear()


def get_config(
    config_path: Path | None = None,
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> TvMazeConfig:
    """Get configuration with file and environment layering applied.

    Args:
        config_path: Path to config file (overrides TVMAZE_CONFIG_PATH).
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigFileError on config file parse failures.

    Returns:
        TvMazeConfig with merged configuration.

    Raises:
        ConfigFileError: When strict=True and the config file is unreadable.
        ValueError: When a resolved value fails validation.
    """
    reader = env_reader or EnvReader()
    file_config = load_config_file(config_path, strict=strict)

    builder = ConfigBuilder()
    builder.apply(source_from_file(file_config))
    builder.apply(source_from_env(reader))
    return builder.build()
