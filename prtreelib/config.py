"""Configuration system for prtreelib.

This module defines the enums shared by every layer of the tree, the
setting keys the provider reacts to, and the provider-level configuration
dataclass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


EXTENSION_ID = "GitHub.vscode-pull-request-github"

# Settings namespace and keys
PR_SETTINGS_NAMESPACE = "githubPullRequests"
FILE_LIST_LAYOUT = "fileListLayout"
QUERIES = "queries"
REMOTES = "remotes"

# Workspace-scoped persistence keys
EXPANDED_QUERIES_STATE = "expandedQueries"
VIEWED_FILES_STATE = "viewedFiles"

# Context keys set on the host
LOADING_PRS_TREE_CONTEXT = "github:loadingPrsTree"

LOCAL_PULL_REQUESTS_LABEL = "Local Pull Request Branches"
ALL_OPEN_LABEL = "All Open"

DEFAULT_QUERIES: List[Dict[str, str]] = [
    {"label": "Waiting For My Review", "query": "is:open review-requested:${user}"},
    {"label": "Assigned To Me", "query": "is:open assignee:${user}"},
    {"label": "Created By Me", "query": "is:open author:${user}"},
]


class ReposManagerState(Enum):
    """Coarse status of the repositories manager.

    Drives whether the real tree or a placeholder set is shown.
    """
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    NEEDS_AUTHENTICATION = "needs_authentication"
    READY_WITH_REMOTES = "ready_with_remotes"
    READY_WITHOUT_REMOTES = "ready_without_remotes"


class AuthProvider(Enum):
    """Authentication providers known to the credential store."""
    GITHUB = "github"
    GITHUB_ENTERPRISE = "github-enterprise"


class NodeKind(Enum):
    """Closed set of node variants in the tree."""
    WORKSPACE_FOLDER = "workspace_folder"
    CATEGORY = "category"
    CATEGORY_ACTION = "category_action"
    PULL_REQUEST = "pull_request"
    FILE_CHANGE = "file_change"
    ERROR = "error"


class PRType(Enum):
    """Built-in and query-backed category types."""
    QUERY = "query"
    ALL = "all"
    LOCAL_PULL_REQUEST = "local_pull_request"


class PRCategoryActionType(Enum):
    """Placeholder/action nodes standing in for real data."""
    EMPTY = "empty"
    MORE = "more"
    TRY_OTHER_REMOTES = "try_other_remotes"
    LOGIN = "login"
    LOGIN_ENTERPRISE = "login_enterprise"
    NO_REMOTES = "no_remotes"
    NO_MATCHING_REMOTES = "no_matching_remotes"
    CONFIGURE_REMOTES = "configure_remotes"


class TreeItemCollapsibleState(Enum):
    NONE = 0
    COLLAPSED = 1
    EXPANDED = 2


class CheckboxState(Enum):
    UNCHECKED = 0
    CHECKED = 1


class FileListLayout(Enum):
    FLAT = "flat"
    TREE = "tree"


@dataclass(frozen=True)
class Category:
    """A named grouping of pull requests fetched and cached together."""

    type: PRType
    label: str
    query: Optional[str] = None


def load_categories(settings: Any) -> List[Category]:
    """Build the ordered category list for a folder.

    The local pull request branches category comes first, then the
    configured queries (or the defaults when the setting is absent), and
    the "All Open" category last. Queries without a label or query, or
    whose label is already taken (built-in labels included), are skipped.

    Args:
        settings: A SettingsStore

    Returns:
        Ordered list of categories
    """
    queries = settings.get(PR_SETTINGS_NAMESPACE, QUERIES)
    if queries is None:
        queries = DEFAULT_QUERIES

    categories = [Category(PRType.LOCAL_PULL_REQUEST, LOCAL_PULL_REQUESTS_LABEL)]
    seen = {LOCAL_PULL_REQUESTS_LABEL, ALL_OPEN_LABEL}
    for entry in queries:
        label = entry.get("label") if isinstance(entry, dict) else None
        query = entry.get("query") if isinstance(entry, dict) else None
        # Labels double as identities, skip malformed and duplicate entries
        if not label or not query or label in seen:
            continue
        seen.add(label)
        categories.append(Category(PRType.QUERY, label, query))
    categories.append(Category(PRType.ALL, ALL_OPEN_LABEL))
    return categories


def load_file_list_layout(settings: Any) -> FileListLayout:
    value = settings.get(PR_SETTINGS_NAMESPACE, FILE_LIST_LAYOUT, FileListLayout.TREE.value)
    try:
        return FileListLayout(value)
    except ValueError:
        return FileListLayout.TREE


def _default_error_policy():
    from .error_policies import ShowErrorNodePolicy
    return ShowErrorNodePolicy()


@dataclass
class TreeProviderConfig:
    """Configuration for the pull requests tree provider."""

    view_id: str = "pr:github"
    show_collapse_all: bool = True

    # Tree model cache bound (number of category pages kept)
    max_cached_categories: int = 500

    # Factory for the policy applied when a node's children fail to load
    error_policy_factory: Callable[[], Any] = field(default=_default_error_policy)
