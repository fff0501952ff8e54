"""Formatters for lookup results.

Render metadata results as human-readable lines or JSON.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from typing import Any

from tvmaze_metadata.matching.models import AmbiguousMatch, NoMatch


def _json_default(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_dict(item: Any) -> dict[str, Any]:
    """Convert a metadata dataclass to a dict without None values."""
    if not is_dataclass(item):
        raise TypeError(f"Expected a dataclass instance, got {type(item).__name__}")
    return {key: value for key, value in asdict(item).items() if value is not None}


def format_json(data: dict[str, Any]) -> str:
    """Serialize a result dict to indented JSON."""
    return json.dumps(data, indent=2, default=_json_default)


def format_human(item: Any, title: str) -> str:
    """Format a metadata dataclass as "key: value" lines.

    Args:
        item: Metadata dataclass instance.
        title: Heading line.

    Returns:
        Formatted string for terminal output.
    """
    lines = [title]
    for key, value in to_dict(item).items():
        if isinstance(value, (list, tuple)):
            if not value:
                continue
            value = ", ".join(str(v) for v in value)
        elif isinstance(value, dict):
            if not value:
                continue
            value = ", ".join(f"{k}={v}" for k, v in value.items())
        elif isinstance(value, Enum):
            value = value.value
        elif isinstance(value, str) and "\n" in value:
            value = value.replace("\n", " ")
        lines.append(f"  {key.replace('_', ' ')}: {value}")
    return "\n".join(lines)


def outcome_to_dict(outcome: NoMatch | AmbiguousMatch) -> dict[str, Any]:
    """Describe an unsuccessful episode resolution."""
    if isinstance(outcome, AmbiguousMatch):
        return {
            "status": "ambiguous",
            "total": outcome.total,
            "candidates": [
                {"name": name, "id": ep_id} for name, ep_id in outcome.candidates
            ],
            "suggested_filename": outcome.suggested_filename,
        }
    return {"status": "no_match", "reason": outcome.reason}
