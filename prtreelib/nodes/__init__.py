"""Node variants of the pull requests tree.

Every variant implements the TreeNode capability; the set is closed.
"""

from .base import TreeNode
from .action import ErrorNode, PRCategoryActionNode
from .category import CategoryTreeNode
from .file_change import InMemFileChangeNode
from .pull_request import PullRequestNode
from .workspace_folder import WorkspaceFolderNode

__all__ = [
    'TreeNode',
    'CategoryTreeNode',
    'ErrorNode',
    'InMemFileChangeNode',
    'PRCategoryActionNode',
    'PullRequestNode',
    'WorkspaceFolderNode',
]
