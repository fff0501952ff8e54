"""Structured logging for tvmaze-metadata.

Configurable text or JSON output with file rotation, plus a lookup
context that tags records with the show being resolved.
"""

from tvmaze_metadata.logging.config import configure_logging
from tvmaze_metadata.logging.context import (
    LookupContext,
    LookupContextFilter,
    clear_lookup_context,
    get_lookup_context,
    lookup_context,
    set_lookup_context,
)
from tvmaze_metadata.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "LookupContext",
    "LookupContextFilter",
    "clear_lookup_context",
    "configure_logging",
    "get_lookup_context",
    "lookup_context",
    "set_lookup_context",
]
