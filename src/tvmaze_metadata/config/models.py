"""Configuration data models.

This module defines dataclasses for tvmaze-metadata configuration options.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_BASE_URL = "https://api.tvmaze.com"


@dataclass(frozen=True)
class RetryConfig:
    """Retry behaviour for rate-limited catalog requests (HTTP 429)."""

    max_attempts: int = 3
    """Total attempts per request, including the first one (1-10)."""

    delay_seconds: float = 2.0
    """Delay between attempts when the response carries no Retry-After."""

    max_delay_seconds: float = 60.0
    """Upper bound on any single wait, including server-sent Retry-After."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not 1 <= self.max_attempts <= 10:
            raise ValueError("max_attempts must be between 1 and 10")
        if self.delay_seconds < 0:
            raise ValueError("delay_seconds must not be negative")
        if self.max_delay_seconds < self.delay_seconds:
            raise ValueError("max_delay_seconds must not be less than delay_seconds")


@dataclass(frozen=True)
class CatalogConfig:
    """Configuration for connecting to the TVmaze catalog."""

    base_url: str = DEFAULT_BASE_URL
    """Base URL of the TVmaze API."""

    timeout_seconds: int = 30
    """Request timeout in seconds (1-300)."""

    user_agent: str = "tvmaze-metadata"
    """User-Agent header sent with every request."""

    retry: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        if not 1 <= self.timeout_seconds <= 300:
            raise ValueError("Timeout must be between 1 and 300 seconds")


@dataclass(frozen=True)
class CacheConfig:
    """Expiry settings for the per-show episode list cache."""

    absolute_ttl_seconds: float = 15 * 60
    """Lifetime of an entry measured from creation."""

    sliding_ttl_seconds: float = 2 * 60
    """Idle lifetime of an entry measured from its last read."""

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.absolute_ttl_seconds <= 0 or self.sliding_ttl_seconds <= 0:
            raise ValueError("Cache TTLs must be positive")
        if self.sliding_ttl_seconds > self.absolute_ttl_seconds:
            raise ValueError(
                "sliding_ttl_seconds must not exceed absolute_ttl_seconds"
            )


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )


@dataclass
class TvMazeConfig:
    """Top-level configuration."""

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
