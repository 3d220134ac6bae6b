"""Workspace folder nodes, used when more than one folder is open."""

import posixpath
from typing import AbstractSet, Any, List

from ..config import NodeKind, PRType, TreeItemCollapsibleState, load_categories
from ..interfaces import FolderRepositoryManager, PullRequest, TreeItem
from .base import TreeNode
from .category import CategoryTreeNode


class WorkspaceFolderNode(TreeNode):

    kind = NodeKind.WORKSPACE_FOLDER

    def __init__(self, tree: Any, parent: Any, folder_manager: FolderRepositoryManager,
                 expanded_ids: AbstractSet[str] = frozenset()):
        super().__init__(tree, parent)
        self._folder_manager = folder_manager
        self._expanded_ids = expanded_ids

    @property
    def id(self) -> str:
        return self._folder_manager.repository.root_uri

    @property
    def folder_manager(self) -> FolderRepositoryManager:
        return self._folder_manager

    def get_tree_item(self) -> TreeItem:
        root_uri = self._folder_manager.repository.root_uri
        return TreeItem(
            label=posixpath.basename(root_uri.rstrip("/")) or root_uri,
            id=self.id,
            collapsible_state=TreeItemCollapsibleState.EXPANDED,
            tooltip=root_uri,
            resource_uri=root_uri,
            context_value="workspacefolder",
        )

    @staticmethod
    def get_category_tree_nodes(tree: Any, parent: Any, folder_manager: FolderRepositoryManager,
                                expanded_ids: AbstractSet[str] = frozenset()) -> List[CategoryTreeNode]:
        """Build the category nodes of a folder from the queries setting."""
        return [
            CategoryTreeNode(tree, parent, folder_manager, category, expanded_ids)
            for category in load_categories(tree.settings)
        ]

    async def get_children(self) -> List[TreeNode]:
        if self._children is not None:
            return list(self._children)
        nodes = self.get_category_tree_nodes(self._tree, self, self._folder_manager, self._expanded_ids)
        return list(self._set_children(nodes))

    async def expand_pull_request(self, target: PullRequest) -> bool:
        """Delegate to the loaded "All Open" category.

        Searches only categories and pull requests already materialized, so a
        folder that was never expanded reveals nothing and returns False.
        """
        for child in self.cached_children():
            if isinstance(child, CategoryTreeNode) and child.type == PRType.ALL:
                if await child.expand_pull_request(target):
                    return True
        return False
