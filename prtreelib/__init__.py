"""prtreelib - Pull request tree synchronization engine.

prtreelib turns push-style change events from repositories, review models,
settings and the host view into a lazily materialized, cached tree of pull
requests that a host view can pull from on demand.

    from prtreelib import PullRequestsTreeDataProvider

    provider = PullRequestsTreeDataProvider(host, workspace_state, settings)
    provider.initialize(repos_manager, review_models, credential_store)
    roots = await provider.get_children()
"""

__version__ = "0.1.0"

from .config import (
    Category,
    CheckboxState,
    NodeKind,
    PRCategoryActionType,
    PRType,
    ReposManagerState,
    TreeProviderConfig,
)
from .errors import TreeAlreadyInitializedError, TreeError
from .events import Disposable, EventEmitter
from .model import PrsTreeModel
from .nodes import (
    CategoryTreeNode,
    ErrorNode,
    InMemFileChangeNode,
    PRCategoryActionNode,
    PullRequestNode,
    TreeNode,
    WorkspaceFolderNode,
)
from .provider import PullRequestsTreeDataProvider
from .readiness import resolve_placeholder_actions

__all__ = [
    "__version__",
    # Provider
    "PullRequestsTreeDataProvider",
    "TreeProviderConfig",
    # Model
    "PrsTreeModel",
    # Nodes
    "TreeNode",
    "CategoryTreeNode",
    "ErrorNode",
    "InMemFileChangeNode",
    "PRCategoryActionNode",
    "PullRequestNode",
    "WorkspaceFolderNode",
    # Enums and records
    "Category",
    "CheckboxState",
    "NodeKind",
    "PRCategoryActionType",
    "PRType",
    "ReposManagerState",
    # Events and errors
    "Disposable",
    "EventEmitter",
    "TreeError",
    "TreeAlreadyInitializedError",
    # Gate
    "resolve_placeholder_actions",
]
