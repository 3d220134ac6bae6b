"""Category nodes: one per query or built-in grouping of a folder."""

import logging
from typing import AbstractSet, Any, List

from ..config import Category, NodeKind, PRCategoryActionType, PRType, TreeItemCollapsibleState
from ..interfaces import FolderRepositoryManager, PullRequest, TreeItem
from .action import PRCategoryActionNode
from .base import TreeNode
from .pull_request import PullRequestNode

logger = logging.getLogger(__name__)


class CategoryTreeNode(TreeNode):
    """Pull requests of one category, fetched through the tree model.

    Setting ``fetch_next_page`` before a scoped refresh makes the next
    ``get_children`` call append one more page; the flag is consumed by
    that call whether or not the fetch succeeds.
    """

    kind = NodeKind.CATEGORY

    def __init__(self, tree: Any, parent: Any, folder_manager: FolderRepositoryManager,
                 category: Category, expanded_ids: AbstractSet[str] = frozenset()):
        super().__init__(tree, parent)
        self._folder_manager = folder_manager
        self.category = category
        self.fetch_next_page = False
        self._id = f"{folder_manager.repository.root_uri}/{category.label}"
        self._initially_expanded = self._id in expanded_ids

    @property
    def id(self) -> str:
        return self._id

    @property
    def type(self) -> PRType:
        return self.category.type

    @property
    def folder_manager(self) -> FolderRepositoryManager:
        return self._folder_manager

    def get_tree_item(self) -> TreeItem:
        state = (TreeItemCollapsibleState.EXPANDED if self._initially_expanded
                 else TreeItemCollapsibleState.COLLAPSED)
        return TreeItem(
            label=self.category.label,
            id=self.id,
            collapsible_state=state,
            tooltip=self.category.query,
            context_value="query" if self.category.type == PRType.QUERY else self.category.type.value,
        )

    async def get_children(self) -> List[TreeNode]:
        fetch_next_page = self.fetch_next_page
        self.fetch_next_page = False
        page = await self._tree.tree_model.get_pull_requests(
            self._folder_manager, self.category, fetch_next_page=fetch_next_page
        )
        if self.is_stale():
            logger.debug("Discarding pull requests for stale category %s", self.id)
            return []

        nodes: List[TreeNode] = []
        reused = {child.pull_request.key: child for child in (self._children or [])
                  if isinstance(child, PullRequestNode)}
        keep = set()
        for pr in page.items:
            node = reused.get(pr.key)
            if node is None or node.is_disposed:
                node = PullRequestNode(self._tree, self, self._folder_manager, pr)
            keep.add(pr.key)
            nodes.append(node)

        if not nodes:
            nodes.append(PRCategoryActionNode(self._tree, self, PRCategoryActionType.EMPTY))
        elif page.has_more_pages:
            nodes.append(PRCategoryActionNode(self._tree, self, PRCategoryActionType.MORE))

        # Dispose only what is not carried over into the new list
        previous = self._children or []
        self._children = None
        for child in previous:
            if not (isinstance(child, PullRequestNode) and child.pull_request.key in keep):
                child.dispose()
        self._children = nodes
        return list(nodes)

    async def expand_pull_request(self, target: PullRequest) -> bool:
        """Reveal and expand the node for ``target`` if it is already loaded.

        Only cached children are searched; nothing is fetched. On a category
        whose children were never resolved this returns False without
        revealing anything.

        Returns:
            True if a matching node was revealed
        """
        for child in self.cached_children():
            if isinstance(child, PullRequestNode) and child.represents(target):
                await self._tree.reveal(child, expand=True, select=True)
                return True
        return False
