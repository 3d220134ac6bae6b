"""File change leaves under a pull request."""

import posixpath
from typing import Any, Optional

from ..config import CheckboxState, FileListLayout, NodeKind
from ..interfaces import FileChange, FolderRepositoryManager, PullRequest, TreeItem
from .base import TreeNode


class InMemFileChangeNode(TreeNode):
    """A changed file of a pull request, with a "viewed" checkbox.

    The tooltip is expensive to compute and is filled in lazily by
    ``resolve()`` when the host asks for it.
    """

    kind = NodeKind.FILE_CHANGE

    def __init__(self, tree: Any, parent: Any, folder_manager: FolderRepositoryManager,
                 pull_request: PullRequest, change: FileChange,
                 layout: FileListLayout = FileListLayout.TREE):
        super().__init__(tree, parent)
        self._folder_manager = folder_manager
        self.pull_request = pull_request
        self.change = change
        self.layout = layout
        self.tooltip: Optional[str] = None
        parent_id = parent.id if isinstance(parent, TreeNode) else "root"
        self._id = f"{parent_id}/{change.file_name}"
        self._resolved = False
        self._children = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def resource_uri(self) -> str:
        return f"pr://{self.pull_request.key}/{self.change.file_name}"

    @property
    def checkbox_state(self) -> CheckboxState:
        viewed = self._tree.viewed_files.is_viewed(self.pull_request.key, self.change.file_name)
        return CheckboxState.CHECKED if viewed else CheckboxState.UNCHECKED

    def get_tree_item(self) -> TreeItem:
        if self.layout == FileListLayout.FLAT:
            label = self.change.file_name
            description = None
        else:
            label = posixpath.basename(self.change.file_name)
            description = posixpath.dirname(self.change.file_name) or None

        return TreeItem(
            label=label,
            id=self.id,
            description=description,
            tooltip=self.tooltip,
            context_value=f"filechange:{self.change.status}",
            resource_uri=self.resource_uri,
            checkbox_state=self.checkbox_state,
        )

    async def resolve(self) -> None:
        if self._resolved:
            return
        tooltip = await self._folder_manager.resolve_file_change(self.pull_request, self.change)
        if self._disposed:
            return
        self._resolved = True
        self.tooltip = tooltip or (
            f"{self.change.file_name} (+{self.change.additions} -{self.change.deletions})"
        )

    def update_from_checkbox_changed(self, new_state: CheckboxState) -> None:
        """Apply a host checkbox toggle.

        Repeating the current state is a no-op. A real change is persisted
        and announced on the decoration stream only; the tree is not
        refreshed.
        """
        viewed = new_state == CheckboxState.CHECKED
        changed = self._tree.viewed_files.set_viewed(
            self.pull_request.key, self.change.file_name, viewed
        )
        if changed:
            self._tree.notify_item_changed(self.resource_uri)
