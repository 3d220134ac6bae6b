"""Tree model: cached, paginated pull request pages per category.

The model answers two kinds of questions. ``cached_pull_requests`` never
touches the network, ``get_pull_requests`` fetches when nothing is cached
(or when the next page is requested). Concurrent requests for the same
category share a single in-flight fetch.
"""

import asyncio
import logging
from typing import Any, Dict, Optional, Tuple

from ..config import Category
from ..events import EventEmitter
from ..interfaces import FolderRepositoryManager, PullRequestPage
from ._cache_store import _CategoryCacheStore

logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]


def category_cache_id(category: Category) -> str:
    return f"{category.type.value}:{category.label}"


class PrsTreeModel:
    """Addressable store of fetched category pages.

    Each cache key carries a version number. Invalidating a key bumps its
    version, and a fetch that started under an older version returns its
    result to the callers that were waiting for it without storing it.
    """

    def __init__(self, max_entries: int = 500):
        """
        Args:
            max_entries: Maximum cached category pages (0 = unlimited)
        """
        self._store = _CategoryCacheStore(max_entries=max_entries)
        self._inflight: Dict[Tuple[CacheKey, bool], "asyncio.Future[PullRequestPage]"] = {}
        self._versions: Dict[CacheKey, int] = {}
        self._fetch_count = 0
        self._on_did_change_data: EventEmitter[str] = EventEmitter()
        self.on_did_change_data = self._on_did_change_data.event

    @staticmethod
    def _key(folder_manager: FolderRepositoryManager, category: Category) -> CacheKey:
        return (folder_manager.repository.root_uri, category_cache_id(category))

    def cached_pull_requests(self, folder_manager: FolderRepositoryManager,
                             category: Category) -> Optional[PullRequestPage]:
        """Return the cached page for a category without fetching."""
        return self._store.peek(self._key(folder_manager, category))

    async def get_pull_requests(self, folder_manager: FolderRepositoryManager,
                                category: Category,
                                fetch_next_page: bool = False) -> PullRequestPage:
        """Get the pull requests of a category, fetching if needed.

        Args:
            folder_manager: Folder the category belongs to
            category: Category to fetch
            fetch_next_page: Fetch and append the next page even if cached

        Returns:
            Accumulated page of pull requests
        """
        key = self._key(folder_manager, category)
        if not fetch_next_page:
            cached = self._store.get(key)
            if cached is not None:
                return cached

        task_key = (key, fetch_next_page)
        task = self._inflight.get(task_key)
        if task is None:
            version = self._versions.setdefault(key, 0)
            task = asyncio.ensure_future(
                self._fetch(key, version, folder_manager, category, fetch_next_page)
            )
            self._inflight[task_key] = task
            task.add_done_callback(lambda done: self._forget(task_key, done))
        else:
            logger.debug("Joining in-flight fetch for %s", key)

        return await asyncio.shield(task)

    def _forget(self, task_key: Tuple[CacheKey, bool], task: "asyncio.Future[PullRequestPage]") -> None:
        if self._inflight.get(task_key) is task:
            del self._inflight[task_key]

    async def _fetch(self, key: CacheKey, version: int, folder_manager: FolderRepositoryManager,
                     category: Category, fetch_next_page: bool) -> PullRequestPage:
        previous = self._store.peek(key) if fetch_next_page else None
        if previous is not None and not previous.has_more_pages:
            return previous

        page_number = previous.page + 1 if previous is not None else 0
        self._fetch_count += 1
        items, has_more = await folder_manager.fetch_pull_requests(category, page_number)

        merged = list(previous.items) if previous is not None else []
        known = {pr.key for pr in merged}
        for pr in items:
            if pr.key not in known:
                known.add(pr.key)
                merged.append(pr)
        result = PullRequestPage(items=merged, has_more_pages=has_more, page=page_number)

        if self._versions.get(key, 0) != version:
            logger.debug("Discarding fetch for %s completed after invalidation", key)
            return result

        self._store.put(key, result)
        self._on_did_change_data.fire(key[0])
        return result

    def invalidate(self, folder_manager: Optional[FolderRepositoryManager] = None,
                   category: Optional[Category] = None) -> int:
        """Drop cached pages.

        Args:
            folder_manager: Folder to invalidate (None = all folders)
            category: Category to invalidate (None = all categories)

        Returns:
            Number of cached pages removed
        """
        folder_key = folder_manager.repository.root_uri if folder_manager is not None else None
        category_id = category_cache_id(category) if category is not None else None

        fetching = {task_key[0] for task_key in self._inflight}
        for key in list(self._versions):
            if (folder_key is None or key[0] == folder_key) and \
                    (category_id is None or key[1] == category_id):
                # Only a running fetch still holds the old version
                if key in fetching:
                    self._versions[key] += 1
                else:
                    del self._versions[key]

        count = self._store.invalidate(folder_key, category_id)
        logger.debug("Invalidated %d cached category page(s)", count)
        return count

    def get_stats(self) -> Dict[str, Any]:
        stats = self._store.get_stats()
        stats['in_flight'] = len(self._inflight)
        stats['fetches'] = self._fetch_count
        return stats

    def dispose(self) -> None:
        for task in list(self._inflight.values()):
            task.cancel()
        self._inflight.clear()
        self._versions.clear()
        self._on_did_change_data.dispose()
        self._store.clear()
