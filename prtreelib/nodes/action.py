"""Placeholder nodes: category actions and degraded error entries."""

from typing import Any

from ..config import (
    EXTENSION_ID,
    NodeKind,
    PRCategoryActionType,
    REMOTES,
)
from ..interfaces import Command, TreeItem
from .base import TreeNode


_ACTION_LABELS = {
    PRCategoryActionType.EMPTY: "0 pull requests in this category",
    PRCategoryActionType.MORE: "Load more",
    PRCategoryActionType.TRY_OTHER_REMOTES: "Continue fetching from other remotes",
    PRCategoryActionType.LOGIN: "Sign in",
    PRCategoryActionType.LOGIN_ENTERPRISE: "Sign in with GitHub Enterprise...",
    PRCategoryActionType.NO_REMOTES: "No GitHub repositories found.",
    PRCategoryActionType.NO_MATCHING_REMOTES: "No remotes match the current setting.",
    PRCategoryActionType.CONFIGURE_REMOTES: "Configure remotes...",
}


class PRCategoryActionNode(TreeNode):
    """Non-data node telling the user about a gap or offering an action."""

    kind = NodeKind.CATEGORY_ACTION

    def __init__(self, tree: Any, parent: Any, action_type: PRCategoryActionType):
        super().__init__(tree, parent)
        self.action_type = action_type
        parent_id = parent.id if isinstance(parent, TreeNode) else "root"
        self._id = f"{parent_id}/action:{action_type.value}"
        self._children = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def label(self) -> str:
        return _ACTION_LABELS[self.action_type]

    def _command(self):
        if self.action_type == PRCategoryActionType.MORE:
            return Command("pr.loadMore", "Load more", (self.get_parent(),))
        if self.action_type == PRCategoryActionType.LOGIN:
            return Command("pr.signinNoEnterprise", "Sign in")
        if self.action_type == PRCategoryActionType.LOGIN_ENTERPRISE:
            return Command("pr.signinenterprise", "Sign in with GitHub Enterprise")
        if self.action_type == PRCategoryActionType.CONFIGURE_REMOTES:
            return Command(
                "workbench.action.openSettings",
                "Configure remotes",
                (f"@ext:{EXTENSION_ID} {REMOTES}",),
            )
        return None

    def get_tree_item(self) -> TreeItem:
        return TreeItem(
            label=self.label,
            id=self.id,
            context_value=self.action_type.value,
            command=self._command(),
        )


class ErrorNode(TreeNode):
    """Degraded stand-in for children that failed to load."""

    kind = NodeKind.ERROR

    def __init__(self, tree: Any, parent: Any, error: Exception):
        super().__init__(tree, parent)
        self.error = error
        parent_id = parent.id if isinstance(parent, TreeNode) else "root"
        self._id = f"{parent_id}/error"
        self._children = []

    @property
    def id(self) -> str:
        return self._id

    def get_tree_item(self) -> TreeItem:
        return TreeItem(
            label="Error loading items",
            id=self.id,
            description=type(self.error).__name__,
            tooltip=str(self.error) or type(self.error).__name__,
            context_value="error",
        )
