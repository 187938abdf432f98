"""
In-memory channel cache with strong typing.
"""
import threading
from typing import Optional

from cachetools import LRUCache

from app.core.constants import LiveCacheConfig
from app.models.live import CachedChannels


def get_cache_key(source_key: str) -> str:
    """Generate a namespaced cache key for a live source."""
    return f"{LiveCacheConfig.KEY_PREFIX}{source_key}"


class ChannelCache:
    """
    Maps live source keys to their last successfully fetched channel list.

    Entries never expire inside the cache: freshness is decided by the
    reader from CachedChannels.expire_time. The LRU bound only caps memory.
    Writes replace the previous entry for a key wholesale.
    """

    def __init__(self, maxsize: int):
        """
        Initialize the cache.

        Args:
            maxsize: Maximum number of sources kept before LRU eviction.
        """
        self._entries: LRUCache[str, CachedChannels] = LRUCache(maxsize=maxsize)
        # LRUCache reorders on read, so reads take the lock too
        self._lock = threading.Lock()

    def get(self, source_key: str) -> Optional[CachedChannels]:
        """
        Retrieve the cached channels for a source.

        Args:
            source_key: The live source key.

        Returns:
            The cached entry if present (fresh or stale), None otherwise.
        """
        with self._lock:
            return self._entries.get(get_cache_key(source_key))

    def set(self, source_key: str, value: CachedChannels) -> None:
        """
        Store channels for a source, replacing any previous entry.

        Args:
            source_key: The live source key.
            value: The complete entry to store.
        """
        with self._lock:
            self._entries[get_cache_key(source_key)] = value

    def invalidate(self, source_key: str) -> None:
        """Drop the cached channels for a source, if any."""
        with self._lock:
            self._entries.pop(get_cache_key(source_key), None)

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
