"""Lookup context for log records.

The show id and file path of the lookup in progress live in a single
context variable, so every asyncio task resolving an episode carries its
own snapshot and concurrent lookups never mix up their log tags.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class LookupContext:
    """Show and file a lookup is working on."""

    show_id: int | None = None
    file_path: str | None = None

    @property
    def tag(self) -> str:
        """Prefix for text log lines, e.g. "[show:82] "."""
        return f"[show:{self.show_id}] " if self.show_id is not None else ""


_EMPTY = LookupContext()
_current: contextvars.ContextVar[LookupContext] = contextvars.ContextVar(
    "tvmaze_lookup", default=_EMPTY
)


def _make(show_id: int | None, file_path: Path | str | None) -> LookupContext:
    return LookupContext(
        show_id=show_id,
        file_path=str(file_path) if file_path is not None else None,
    )


def set_lookup_context(
    show_id: int | None, file_path: Path | str | None = None
) -> None:
    """Replace the lookup context of the current task."""
    _current.set(_make(show_id, file_path))


def clear_lookup_context() -> None:
    _current.set(_EMPTY)


def get_lookup_context() -> tuple[int | None, str | None]:
    """Current context as (show_id, file_path)."""
    context = _current.get()
    return context.show_id, context.file_path


@contextmanager
def lookup_context(
    show_id: int | None, file_path: Path | str | None = None
) -> Iterator[LookupContext]:
    """Tag log records emitted inside the block with a show and file.

    The previous context comes back on exit, also when the block raises.

    Example:
        with lookup_context(82, "/tv/Show/S01E01.mkv"):
            logger.info("Resolving episode")  # "[show:82] ..."
    """
    token = _current.set(_make(show_id, file_path))
    try:
        yield _current.get()
    finally:
        _current.reset(token)


class LookupContextFilter(logging.Filter):
    """Copies the lookup context onto every record it sees.

    Sets ``show_id``, ``file_path`` and ``lookup_tag`` so both the text
    format and JSONFormatter can use them.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        context = _current.get()
        record.show_id = context.show_id
        record.file_path = context.file_path
        record.lookup_tag = context.tag
        return True
