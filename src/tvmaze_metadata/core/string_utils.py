"""String manipulation utilities.

Case-insensitive operations use casefold() for proper Unicode handling.
"""

from __future__ import annotations

import re

# Characters ignored when comparing episode names against filenames
EPISODE_NAME_SEPARATORS: frozenset[str] = frozenset({" ", "+", ".", "-", "_"})

# Inline markup removed from catalog summaries. <br> becomes a newline,
# everything else is dropped.
_SUMMARY_LINE_BREAK = re.compile(re.escape("<br>"), re.IGNORECASE)
_SUMMARY_TAGS = re.compile(
    "|".join(
        re.escape(tag)
        for tag in (
            "<p>",
            "</p>",
            "<i>",
            "</i>",
            "<b>",
            "</b>",
            "<li>",
            "</li>",
            "<ul>",
            "</ul>",
            "<div>",
            "<br />",
            "<br/>",
            "<em>",
            "<em/>",
        )
    ),
    re.IGNORECASE,
)

# "Show Name (2004)" as produced by most library folder layouts
_NAME_WITH_YEAR = re.compile(r"^(?P<name>.*?)\s*\((?P<year>\d{4})\)\s*$")


def normalize_episode_name(text: str) -> str:
    """Remove separator characters from an episode name or filename.

    Character order and case are preserved, so the result is suitable for
    a case-insensitive substring test done by the caller.

    Args:
        text: Episode display name or filename stem.

    Returns:
        Text with every space, '+', '.', '-' and '_' removed.

    Example:
        >>> normalize_episode_name("The.Big.One")
        'TheBigOne'
        >>> normalize_episode_name("the big one")
        'thebigone'
    """
    return "".join(c for c in text if c not in EPISODE_NAME_SEPARATORS)


def contains_ci(haystack: str, needle: str) -> bool:
    """Check if string contains substring (case-insensitive).

    Args:
        haystack: String to search in.
        needle: Substring to search for.

    Returns:
        True if haystack contains needle (case-insensitive).
    """
    return needle.casefold() in haystack.casefold()


def strip_summary_html(text: str | None) -> str | None:
    """Strip the inline markup TVmaze uses in summaries.

    Only a fixed set of tags is handled; anything else is left untouched.

    Args:
        text: Summary as returned by the catalog, or None.

    Returns:
        Plain-text summary, or None when no summary was given.
    """
    if text is None:
        return None
    text = _SUMMARY_LINE_BREAK.sub("\n", text)
    return _SUMMARY_TAGS.sub("", text)


def parse_series_name(name: str) -> tuple[str, int | None]:
    """Split a trailing "(YYYY)" year hint off a series name.

    Args:
        name: Series name as known locally, e.g. "Doctor Who (2005)".

    Returns:
        Tuple of (name without the year, year or None).
    """
    match = _NAME_WITH_YEAR.match(name)
    if match and match.group("name"):
        return match.group("name").strip(), int(match.group("year"))
    return name.strip(), None
