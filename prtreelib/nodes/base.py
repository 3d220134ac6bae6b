"""Tree node abstraction.

Defines the capability every node in the pull requests tree shares.
Nodes are created top-down by their parent (or by the provider for the
root set), hold only a weak reference back up, and are disposed exactly
once by whoever owns them.
"""

import weakref
from abc import ABC, abstractmethod
from typing import Any, Awaitable, List, Optional, Union

from ..config import NodeKind
from ..events import Disposable
from ..interfaces import TreeItem


class TreeNode(ABC):
    """Abstract base class for tree nodes.

    ``tree`` is the provider the node belongs to. It supplies the current
    generation and shared services (tree model, persisted state, reveal).
    A node captures the generation at creation. An async completion that
    finds the node disposed or the generation moved on discards its result.
    """

    kind: NodeKind

    def __init__(self, tree: Any, parent: Any = None):
        self._tree = tree
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._generation = tree.generation
        self._children: Optional[List["TreeNode"]] = None
        self._disposables: List[Disposable] = []
        self._disposed = False

    @property
    @abstractmethod
    def id(self) -> str:
        """Stable identity used for host reconciliation and persistence."""
        pass

    @abstractmethod
    def get_tree_item(self) -> Union[TreeItem, Awaitable[TreeItem]]:
        """Describe this node for the host.

        May return the item directly or an awaitable resolving to it.
        """
        pass

    # Optional methods with default implementations

    async def get_children(self) -> List["TreeNode"]:
        """Resolve children, fetching if needed. Leaves have none."""
        return []

    def cached_children(self) -> List["TreeNode"]:
        """Children materialized so far, without fetching."""
        return list(self._children) if self._children is not None else []

    def get_parent(self) -> Optional["TreeNode"]:
        """Logical parent, or None for root-level nodes."""
        if self._parent_ref is None:
            return None
        parent = self._parent_ref()
        return parent if isinstance(parent, TreeNode) else None

    @property
    def tree(self) -> Any:
        return self._tree

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    @property
    def children_loaded(self) -> bool:
        return self._children is not None

    def is_stale(self) -> bool:
        """True if results computed for this node should be discarded."""
        return self._disposed or self._generation != self._tree.generation

    def _set_children(self, children: List["TreeNode"]) -> List["TreeNode"]:
        """Install a new child list, disposing the previous one first."""
        previous = self._children
        self._children = None
        if previous:
            for child in previous:
                child.dispose()
        self._children = children
        return children

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        for disposable in self._disposables:
            disposable.dispose()
        self._disposables = []
        if self._children:
            for child in self._children:
                child.dispose()
        self._children = None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.id!r})"
