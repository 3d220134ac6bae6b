"""Pull request nodes inside a category."""

import logging
from typing import Any, List

from ..config import NodeKind, TreeItemCollapsibleState, load_file_list_layout
from ..interfaces import FolderRepositoryManager, PullRequest, TreeItem
from .base import TreeNode
from .file_change import InMemFileChangeNode

logger = logging.getLogger(__name__)


class PullRequestNode(TreeNode):

    kind = NodeKind.PULL_REQUEST

    def __init__(self, tree: Any, parent: Any, folder_manager: FolderRepositoryManager,
                 pull_request: PullRequest):
        super().__init__(tree, parent)
        self._folder_manager = folder_manager
        self.pull_request = pull_request
        parent_id = parent.id if isinstance(parent, TreeNode) else "root"
        self._id = f"{parent_id}/{pull_request.key}"

    @property
    def id(self) -> str:
        return self._id

    def represents(self, target: PullRequest) -> bool:
        return self.pull_request.key == target.key

    def get_tree_item(self) -> TreeItem:
        label = f"#{self.pull_request.number}: {self.pull_request.title}"
        if self.pull_request.is_draft:
            label = f"[DRAFT] {label}"
        return TreeItem(
            label=label,
            id=self.id,
            collapsible_state=TreeItemCollapsibleState.COLLAPSED,
            description=self.pull_request.author or None,
            tooltip=self.pull_request.url or None,
            context_value="pullrequest:draft" if self.pull_request.is_draft else "pullrequest",
        )

    async def get_children(self) -> List[TreeNode]:
        if self._children is not None:
            return list(self._children)

        changes = await self._folder_manager.get_file_changes(self.pull_request)
        if self.is_stale():
            logger.debug("Discarding file changes for disposed node %s", self.id)
            return []

        layout = load_file_list_layout(self._tree.settings)
        # Sorted so tree layout groups files of the same directory together
        ordered = sorted({c.file_name: c for c in changes}.values(), key=lambda c: c.file_name)
        nodes = [
            InMemFileChangeNode(self._tree, self, self._folder_manager, self.pull_request, change, layout)
            for change in ordered
        ]
        return list(self._set_children(nodes))
