"""Placement of special episodes relative to regular ones.

Specials carry no meaningful season/episode numbers in the catalog, so
their local numbering and their airs-before/airs-after position are
derived from where they sit in the catalog's air-order episode list.
"""

from __future__ import annotations

from collections.abc import Sequence

from tvmaze_metadata.catalog.models import EpisodeKind, RemoteEpisode
from tvmaze_metadata.matching.models import SeasonPosition


def special_index(
    all_episodes: Sequence[RemoteEpisode], special: RemoteEpisode
) -> int:
    """Zero-based ordinal of a special among all specials of the show.

    Counts specials of either kind that precede `special` in catalog
    order. The value shifts when the catalog later gains older specials,
    so callers must tolerate renumbering.

    Args:
        all_episodes: Full episode list in catalog order.
        special: The matched special episode.

    Returns:
        Number of specials listed before it.
    """
    count = 0
    for episode in all_episodes:
        if episode.id == special.id:
            break
        if episode.kind.is_special:
            count += 1
    return count


def compute_position(
    all_episodes: Sequence[RemoteEpisode], special: RemoteEpisode
) -> SeasonPosition:
    """Compute where a significant special airs within its season.

    - First record overall, or previous record from another season:
      airs before the special's own season.
    - Otherwise, if the next regular episode is in the same season: airs
      before that episode.
    - Otherwise: airs after the special's own season.

    Args:
        all_episodes: Full episode list in catalog order.
        special: The matched special episode.

    Returns:
        SeasonPosition with exactly one of airs-before/airs-after set, or an
        empty position if the special is not in the list.
    """
    for i, episode in enumerate(all_episodes):
        if episode.id != special.id:
            continue

        if i == 0 or all_episodes[i - 1].season != special.season:
            return SeasonPosition(airs_before_season=special.season)

        next_regular = next(
            (e for e in all_episodes[i + 1 :] if e.kind is EpisodeKind.REGULAR),
            None,
        )
        if next_regular is not None and next_regular.season == special.season:
            return SeasonPosition(
                airs_before_season=next_regular.season,
                airs_before_episode=next_regular.number,
            )
        return SeasonPosition(airs_after_season=special.season)

    return SeasonPosition()
