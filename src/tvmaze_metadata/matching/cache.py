"""Time-bounded cache of per-show episode lists.

Bounds the number of full episode-list fetches while still picking up
catalog edits. Each entry expires on an absolute TTL measured from
creation or a sliding TTL measured from the last read, whichever comes
first. Eviction is lazy: entries are checked when accessed.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass

from tvmaze_metadata.catalog.models import RemoteEpisode
from tvmaze_metadata.config.models import CacheConfig

logger = logging.getLogger(__name__)

EpisodeFetcher = Callable[[int], Awaitable[Iterable[RemoteEpisode]]]

DEFAULT_ABSOLUTE_TTL_SECONDS = 15 * 60
DEFAULT_SLIDING_TTL_SECONDS = 2 * 60


@dataclass
class CachedEpisodeList:
    """Episode list of one show in catalog order, with access bookkeeping."""

    episodes: tuple[RemoteEpisode, ...]
    created_at: float
    last_access: float

    def is_expired(self, now: float, absolute_ttl: float, sliding_ttl: float) -> bool:
        return (
            now - self.created_at >= absolute_ttl
            or now - self.last_access >= sliding_ttl
        )


class EpisodeListCache:
    """Memoizes "all episodes of show N" lookups.

    Cold fetches for the same show are serialized by a per-show lock, so
    concurrent resolutions share one fetch. A lock lives only while some
    task holds or waits on it. Failed or cancelled fetches leave no entry
    behind, and expired entries of other shows are pruned on every insert.
    """

    def __init__(
        self,
        absolute_ttl: float = DEFAULT_ABSOLUTE_TTL_SECONDS,
        sliding_ttl: float = DEFAULT_SLIDING_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            absolute_ttl: Seconds an entry lives after creation.
            sliding_ttl: Seconds an entry lives after its last read.
            clock: Monotonic time source (injected in tests).
        """
        self._absolute_ttl = absolute_ttl
        self._sliding_ttl = sliding_ttl
        self._clock = clock
        self._entries: dict[int, CachedEpisodeList] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        # Tasks holding or waiting on each lock; a lock is dropped at zero
        self._lock_users: dict[int, int] = {}

    @classmethod
    def from_config(
        cls, config: CacheConfig, clock: Callable[[], float] = time.monotonic
    ) -> EpisodeListCache:
        """Create a cache from CacheConfig."""
        return cls(
            absolute_ttl=config.absolute_ttl_seconds,
            sliding_ttl=config.sliding_ttl_seconds,
            clock=clock,
        )

    def __len__(self) -> int:
        return len(self._entries)

    def _live_entry(self, show_id: int) -> CachedEpisodeList | None:
        """Return the live entry for show_id, refreshing its last access.

        Expired entries are dropped.
        """
        entry = self._entries.get(show_id)
        if entry is None:
            return None
        now = self._clock()
        if entry.is_expired(now, self._absolute_ttl, self._sliding_ttl):
            logger.debug("Episode list cache expired for show %d", show_id)
            del self._entries[show_id]
            return None
        entry.last_access = now
        return entry

    async def get_episodes(
        self, show_id: int, fetch: EpisodeFetcher
    ) -> tuple[RemoteEpisode, ...]:
        """Get the episode list of a show, fetching it on miss or expiry.

        Args:
            show_id: TVmaze show id.
            fetch: Coroutine function returning the show's episodes.

        Returns:
            Episodes in catalog order. A live hit returns the same tuple
            object that was stored.

        Raises:
            Whatever fetch raises; nothing is cached in that case.
        """
        entry = self._live_entry(show_id)
        if entry is not None:
            return entry.episodes

        lock = self._locks.setdefault(show_id, asyncio.Lock())
        self._lock_users[show_id] = self._lock_users.get(show_id, 0) + 1
        try:
            async with lock:
                # Another task may have filled the entry while we waited
                entry = self._live_entry(show_id)
                if entry is not None:
                    return entry.episodes

                logger.debug("Fetching episode list for show %d", show_id)
                episodes = tuple(await fetch(show_id))
                now = self._clock()
                self._prune(now)
                self._entries[show_id] = CachedEpisodeList(
                    episodes=episodes, created_at=now, last_access=now
                )
                return episodes
        finally:
            self._release_lock(show_id)

    def _release_lock(self, show_id: int) -> None:
        users = self._lock_users.pop(show_id, 1) - 1
        if users > 0:
            self._lock_users[show_id] = users
        else:
            self._locks.pop(show_id, None)

    def _prune(self, now: float) -> None:
        """Drop every expired entry."""
        expired = [
            show_id
            for show_id, entry in self._entries.items()
            if entry.is_expired(now, self._absolute_ttl, self._sliding_ttl)
        ]
        for show_id in expired:
            del self._entries[show_id]
        if expired:
            logger.debug("Pruned %d expired episode lists", len(expired))

    def invalidate(self, show_id: int) -> None:
        """Drop the entry for one show, if any."""
        self._entries.pop(show_id, None)

    def clear(self) -> None:
        """Drop every entry.

        Locks of fetches still in flight are kept; they go away when those
        fetches finish.
        """
        self._entries.clear()
