"""Workspace-scoped interaction state: expanded categories and viewed files.

Both objects wrap a Memento and write through on every mutation. The
expansion set is read back once per root-set construction through
``snapshot()``; category nodes consult that snapshot for their initial
collapsible state.
"""

import logging
from typing import Dict, FrozenSet, List

from .config import EXPANDED_QUERIES_STATE, VIEWED_FILES_STATE
from .interfaces import Memento

logger = logging.getLogger(__name__)


class ExpandedQueriesState:
    """Durable set of expanded category identities."""

    def __init__(self, memento: Memento, key: str = EXPANDED_QUERIES_STATE):
        self._memento = memento
        self._key = key

    def _load(self) -> List[str]:
        stored = self._memento.get(self._key, [])
        return list(stored) if stored else []

    def snapshot(self) -> FrozenSet[str]:
        """Read the persisted set once."""
        return frozenset(self._load())

    def is_expanded(self, category_id: str) -> bool:
        return category_id in self._load()

    def set_expanded(self, category_id: str, expanded: bool) -> None:
        """Add or remove a category identity and persist immediately.

        Both directions are idempotent; the stored order of the remaining
        identities is preserved.
        """
        ids = self._load()
        if expanded:
            if category_id not in ids:
                ids.append(category_id)
        else:
            ids = [existing for existing in ids if existing != category_id]
        self._memento.update(self._key, ids)
        logger.debug("Category %s %s", category_id, "expanded" if expanded else "collapsed")


class ViewedFilesState:
    """Durable checkbox state: which files of a pull request were viewed."""

    def __init__(self, memento: Memento, key: str = VIEWED_FILES_STATE):
        self._memento = memento
        self._key = key

    def _load(self) -> Dict[str, List[str]]:
        stored = self._memento.get(self._key, {})
        return {pr: list(files) for pr, files in (stored or {}).items()}

    def is_viewed(self, pull_request_key: str, file_name: str) -> bool:
        return file_name in self._load().get(pull_request_key, [])

    def set_viewed(self, pull_request_key: str, file_name: str, viewed: bool) -> bool:
        """Record a file as viewed or not viewed.

        Returns:
            True if the stored state changed
        """
        state = self._load()
        files = set(state.get(pull_request_key, []))
        if (file_name in files) == viewed:
            return False

        if viewed:
            files.add(file_name)
        else:
            files.discard(file_name)

        if files:
            state[pull_request_key] = sorted(files)
        else:
            state.pop(pull_request_key, None)
        self._memento.update(self._key, state)
        return True
