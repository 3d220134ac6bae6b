"""Interfaces of the collaborators the tree engine consumes.

The tree never fetches pull request data, obtains credentials, stores
settings or renders anything itself. It reaches those subsystems only
through the narrow abstract classes defined here. The records at the top
of the module are the data shapes that flow across those seams.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .config import AuthProvider, CheckboxState, ReposManagerState, TreeItemCollapsibleState
from .events import Disposable


Event = Callable[[Callable[[Any], Any]], Disposable]


@dataclass(frozen=True)
class GitHubRemote:
    """A git remote that points at a GitHub (or GitHub Enterprise) host."""

    remote_name: str
    owner: str
    repository_name: str
    host: str = "github.com"

    @property
    def is_enterprise(self) -> bool:
        return self.host.lower() not in ("github.com", "www.github.com", "ssh.github.com")


@dataclass(frozen=True)
class PullRequest:
    number: int
    title: str
    author: str = ""
    url: str = ""
    is_draft: bool = False
    owner: str = ""
    repository_name: str = ""

    @property
    def key(self) -> str:
        """Identity of the pull request across remotes."""
        return f"{self.owner}/{self.repository_name}#{self.number}"


@dataclass(frozen=True)
class FileChange:
    file_name: str
    status: str = "modified"
    additions: int = 0
    deletions: int = 0


@dataclass
class PullRequestPage:
    """Accumulated result of fetching a category.

    ``items`` holds every pull request fetched so far across pages, and
    ``has_more_pages`` tells whether a "load more" is possible.
    """

    items: List[PullRequest] = field(default_factory=list)
    has_more_pages: bool = False
    page: int = 0


@dataclass(frozen=True)
class Command:
    command: str
    title: str
    arguments: Tuple[Any, ...] = ()


@dataclass
class TreeItem:
    """Host-displayable description of a node."""

    label: str
    id: Optional[str] = None
    collapsible_state: TreeItemCollapsibleState = TreeItemCollapsibleState.NONE
    description: Optional[str] = None
    tooltip: Optional[str] = None
    context_value: Optional[str] = None
    command: Optional[Command] = None
    resource_uri: Optional[str] = None
    checkbox_state: Optional[CheckboxState] = None


@dataclass(frozen=True)
class ConfigurationChangeEvent:
    """Carries the setting paths touched by a configuration change."""

    affected: Tuple[str, ...] = ()

    def affects_configuration(self, section: str) -> bool:
        for path in self.affected:
            if path == section or path.startswith(section + ".") or section.startswith(path + "."):
                return True
        return False


class Repository(ABC):
    """Native (git) repository backing a workspace folder."""

    @property
    @abstractmethod
    def root_uri(self) -> str:
        pass

    @property
    @abstractmethod
    def remotes(self) -> Sequence[str]:
        """Names of every configured git remote, GitHub or not."""
        pass


class CredentialStore(ABC):

    @abstractmethod
    def is_authenticated(self, provider: AuthProvider) -> bool:
        pass


class FolderRepositoryManager(ABC):
    """Per workspace folder access to repositories and pull request data."""

    @property
    @abstractmethod
    def repository(self) -> Repository:
        pass

    @property
    @abstractmethod
    def on_did_change_repositories(self) -> Event:
        pass

    @abstractmethod
    async def get_github_remotes(self) -> List[GitHubRemote]:
        """GitHub remotes after applying the remotes allowlist setting."""
        pass

    @abstractmethod
    async def get_all_github_remotes(self) -> List[GitHubRemote]:
        """Every GitHub remote, ignoring the allowlist setting."""
        pass

    @abstractmethod
    async def fetch_pull_requests(self, category: Any, page: int) -> Tuple[List[PullRequest], bool]:
        """Fetch one page of a category.

        Args:
            category: The Category being fetched
            page: Zero-based page number

        Returns:
            Tuple of (pull requests on that page, whether more pages exist)
        """
        pass

    @abstractmethod
    async def get_file_changes(self, pull_request: PullRequest) -> List[FileChange]:
        pass

    async def resolve_file_change(self, pull_request: PullRequest, change: FileChange) -> Optional[str]:
        """Compute the expensive part of a file change item (its tooltip).

        Default implementation has nothing extra to show.
        """
        return None


class RepositoriesManager(ABC):

    @property
    @abstractmethod
    def state(self) -> ReposManagerState:
        pass

    @property
    @abstractmethod
    def on_did_change_state(self) -> Event:
        pass

    @property
    @abstractmethod
    def folder_managers(self) -> List[FolderRepositoryManager]:
        pass

    @property
    @abstractmethod
    def credential_store(self) -> CredentialStore:
        pass


class ReviewModel(ABC):
    """Local file changes of the checked out pull request of one folder."""

    @property
    @abstractmethod
    def on_did_change_local_file_changes(self) -> Event:
        pass


class SettingsStore(ABC):

    @abstractmethod
    def get(self, section: str, key: str, default: Any = None) -> Any:
        pass

    @property
    @abstractmethod
    def on_did_change_configuration(self) -> Event:
        """Fires ConfigurationChangeEvent instances."""
        pass


class Memento(ABC):
    """Workspace-scoped key/value persistence."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        pass

    @abstractmethod
    def update(self, key: str, value: Any) -> None:
        pass


class TreeView(ABC):
    """The host's view onto a tree provider."""

    @abstractmethod
    async def reveal(self, element: Any, select: Optional[bool] = None,
                     focus: Optional[bool] = None, expand: Optional[bool] = None) -> None:
        pass

    @property
    @abstractmethod
    def on_did_expand_element(self) -> Event:
        """Fires the expanded node."""
        pass

    @property
    @abstractmethod
    def on_did_collapse_element(self) -> Event:
        """Fires the collapsed node."""
        pass

    @property
    @abstractmethod
    def on_did_change_checkbox_state(self) -> Event:
        """Fires a list of (node, CheckboxState) pairs."""
        pass

    def dispose(self) -> None:
        pass


class Host(ABC):
    """Editor host services: views, commands and context keys."""

    @abstractmethod
    def create_tree_view(self, view_id: str, provider: Any, show_collapse_all: bool = True) -> TreeView:
        pass

    @abstractmethod
    def register_command(self, command_id: str, callback: Callable[..., Any]) -> Disposable:
        pass

    @abstractmethod
    async def execute_command(self, command_id: str, *args: Any) -> Any:
        pass

    @abstractmethod
    def set_context(self, key: str, value: Any) -> None:
        pass

    @abstractmethod
    async def show_quick_pick(self, items: List[str]) -> Optional[str]:
        pass
