"""
Private cache storage for category pages with LRU eviction.

Keys are ``(folder_key, category_id)`` tuples, so invalidation can target
one category, one folder, or everything.
"""

from collections import OrderedDict
from typing import Any, Dict, Optional, Tuple


class _CategoryCacheStore:
    """
    Private cache storage with LRU eviction by entry count.

    This class encapsulates all cache storage operations including:
    - Get/put with LRU ordering
    - Entry count limits
    - Folder and category invalidation
    - Statistics tracking

    A ``max_entries`` of 0 disables the limit.
    """

    def __init__(self, max_entries: int = 500):
        """
        Initialize cache storage.

        Args:
            max_entries: Maximum number of cached category pages (0 = unlimited)
        """
        self.cache: "OrderedDict[Tuple[str, str], Any]" = OrderedDict()
        self.max_entries = max_entries if max_entries > 0 else float('inf')
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def get(self, key: Tuple[str, str]) -> Optional[Any]:
        """
        Get a cache entry, updating LRU order.

        Args:
            key: (folder_key, category_id) tuple

        Returns:
            Cached entry or None if not found
        """
        if key not in self.cache:
            self.misses += 1
            return None

        self.cache.move_to_end(key)
        self.hits += 1
        return self.cache[key]

    def peek(self, key: Tuple[str, str]) -> Optional[Any]:
        """Get an entry without touching LRU order or statistics."""
        return self.cache.get(key)

    def put(self, key: Tuple[str, str], entry: Any) -> None:
        if key in self.cache:
            self.cache.move_to_end(key)
        self.cache[key] = entry

        while len(self.cache) > self.max_entries:
            self._evict_oldest()

    def invalidate(self, folder_key: Optional[str] = None, category_id: Optional[str] = None) -> int:
        """
        Invalidate cache entries.

        Args:
            folder_key: Folder to invalidate (None = every folder)
            category_id: Category within the folder (None = every category)

        Returns:
            Number of entries invalidated
        """
        if folder_key is None and category_id is None:
            count = len(self.cache)
            self.clear()
            return count

        to_remove = [
            key for key in self.cache
            if (folder_key is None or key[0] == folder_key)
            and (category_id is None or key[1] == category_id)
        ]
        for key in to_remove:
            del self.cache[key]
        return len(to_remove)

    def clear(self):
        """Clear all cache entries."""
        self.cache.clear()

    def get_stats(self) -> Dict[str, Any]:
        stats = {
            'entries': len(self.cache),
            'hits': self.hits,
            'misses': self.misses,
            'evictions': self.evictions,
        }

        total_attempts = self.hits + self.misses
        if total_attempts > 0:
            stats['hit_rate'] = self.hits / total_attempts

        return stats

    def _evict_oldest(self):
        """Evict the least recently used entry."""
        if len(self.cache) == 0:
            return
        self.cache.popitem(last=False)
        self.evictions += 1

    def __len__(self) -> int:
        return len(self.cache)

    def __contains__(self, key: Tuple[str, str]) -> bool:
        return key in self.cache
