"""In-memory collaborators for prtreelib consumers.

These fixtures implement every interface the provider consumes without a
real editor, git or network. They are used by the test suite and are
handy for driving the tree from scripts: fire the upstream events, then
assert on what ``get_children`` returns.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..config import AuthProvider, Category, ReposManagerState
from ..events import Disposable, EventEmitter
from ..interfaces import (
    ConfigurationChangeEvent,
    CredentialStore,
    FileChange,
    FolderRepositoryManager,
    GitHubRemote,
    Host,
    Memento,
    PullRequest,
    RepositoriesManager,
    Repository,
    ReviewModel,
    SettingsStore,
    TreeView,
)
from ..provider import PullRequestsTreeDataProvider


class InMemoryMemento(Memento):
    """Dict-backed persistence that counts writes."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self.values: Dict[str, Any] = dict(initial or {})
        self.update_count = 0

    def get(self, key: str, default: Any = None) -> Any:
        return self.values.get(key, default)

    def update(self, key: str, value: Any) -> None:
        self.update_count += 1
        self.values[key] = value


class InMemorySettings(SettingsStore):

    def __init__(self, values: Optional[Dict[Tuple[str, str], Any]] = None):
        self.values: Dict[Tuple[str, str], Any] = dict(values or {})
        self._on_did_change = EventEmitter()

    def get(self, section: str, key: str, default: Any = None) -> Any:
        return self.values.get((section, key), default)

    @property
    def on_did_change_configuration(self):
        return self._on_did_change.event

    def set(self, section: str, key: str, value: Any) -> None:
        """Change a setting and announce it."""
        if value is None:
            self.values.pop((section, key), None)
        else:
            self.values[(section, key)] = value
        self._on_did_change.fire(ConfigurationChangeEvent((f"{section}.{key}",)))

    @property
    def listener_count(self) -> int:
        return self._on_did_change.listener_count


class FakeRepository(Repository):

    def __init__(self, root_uri: str, remotes: Sequence[str] = ("origin",)):
        self._root_uri = root_uri
        self.remote_names = list(remotes)

    @property
    def root_uri(self) -> str:
        return self._root_uri

    @property
    def remotes(self) -> Sequence[str]:
        return self.remote_names


class FakeCredentialStore(CredentialStore):

    def __init__(self, authenticated: Sequence[AuthProvider] = (AuthProvider.GITHUB,)):
        self.authenticated = set(authenticated)

    def is_authenticated(self, provider: AuthProvider) -> bool:
        return provider in self.authenticated


class FakeFolderRepositoryManager(FolderRepositoryManager):
    """Serves pull requests from in-memory pages.

    ``pages`` maps a category label to a list of pages; each page is a list
    of pull requests. Set ``fetch_error`` to make fetches fail, or
    ``fetch_gate`` to an asyncio.Event to hold fetches until it is set.
    """

    def __init__(self, root_uri: str,
                 github_remotes: Optional[List[GitHubRemote]] = None,
                 all_github_remotes: Optional[List[GitHubRemote]] = None,
                 native_remotes: Sequence[str] = ("origin",),
                 pages: Optional[Dict[str, List[List[PullRequest]]]] = None,
                 file_changes: Optional[Dict[int, List[FileChange]]] = None):
        self._repository = FakeRepository(root_uri, native_remotes)
        if github_remotes is None:
            github_remotes = [GitHubRemote("origin", "octo", root_uri.rsplit("/", 1)[-1])]
        self.github_remotes = list(github_remotes)
        self.all_github_remotes = list(all_github_remotes) if all_github_remotes is not None \
            else list(self.github_remotes)
        self.pages = pages or {}
        self.file_changes = file_changes or {}
        self.fetch_calls: List[Tuple[str, int]] = []
        self.fetch_error: Optional[Exception] = None
        self.fetch_gate: Optional[asyncio.Event] = None
        self._on_did_change_repositories = EventEmitter()

    @property
    def repository(self) -> FakeRepository:
        return self._repository

    @property
    def on_did_change_repositories(self):
        return self._on_did_change_repositories.event

    def fire_repositories_changed(self) -> None:
        self._on_did_change_repositories.fire(None)

    async def get_github_remotes(self) -> List[GitHubRemote]:
        return list(self.github_remotes)

    async def get_all_github_remotes(self) -> List[GitHubRemote]:
        return list(self.all_github_remotes)

    async def fetch_pull_requests(self, category: Category, page: int) -> Tuple[List[PullRequest], bool]:
        self.fetch_calls.append((category.label, page))
        if self.fetch_gate is not None:
            await self.fetch_gate.wait()
        if self.fetch_error is not None:
            raise self.fetch_error
        pages = self.pages.get(category.label, [])
        items = list(pages[page]) if page < len(pages) else []
        return items, page + 1 < len(pages)

    async def get_file_changes(self, pull_request: PullRequest) -> List[FileChange]:
        return list(self.file_changes.get(pull_request.number, []))

    async def resolve_file_change(self, pull_request: PullRequest, change: FileChange) -> Optional[str]:
        return f"{pull_request.key}:{change.file_name}"


class FakeRepositoriesManager(RepositoriesManager):

    def __init__(self, folder_managers: Optional[List[FolderRepositoryManager]] = None,
                 state: ReposManagerState = ReposManagerState.READY_WITH_REMOTES,
                 credential_store: Optional[CredentialStore] = None):
        self._folder_managers = list(folder_managers or [])
        self._state = state
        self._credential_store = credential_store or FakeCredentialStore()
        self._on_did_change_state = EventEmitter()

    @property
    def state(self) -> ReposManagerState:
        return self._state

    def set_state(self, state: ReposManagerState) -> None:
        self._state = state
        self._on_did_change_state.fire(state)

    @property
    def on_did_change_state(self):
        return self._on_did_change_state.event

    @property
    def folder_managers(self) -> List[FolderRepositoryManager]:
        return self._folder_managers

    @property
    def credential_store(self) -> CredentialStore:
        return self._credential_store


class FakeReviewModel(ReviewModel):

    def __init__(self):
        self._on_did_change = EventEmitter()

    @property
    def on_did_change_local_file_changes(self):
        return self._on_did_change.event

    def fire_local_file_changes(self) -> None:
        self._on_did_change.fire(None)

    @property
    def listener_count(self) -> int:
        return self._on_did_change.listener_count


class FakeTreeView(TreeView):
    """Records reveals and lets tests fire the host's view events."""

    def __init__(self, view_id: str, provider: Any):
        self.view_id = view_id
        self.provider = provider
        self.revealed: List[Tuple[Any, Dict[str, Optional[bool]]]] = []
        self.disposed = False
        self._on_expand = EventEmitter()
        self._on_collapse = EventEmitter()
        self._on_checkbox = EventEmitter()

    async def reveal(self, element: Any, select: Optional[bool] = None,
                     focus: Optional[bool] = None, expand: Optional[bool] = None) -> None:
        self.revealed.append((element, {"select": select, "focus": focus, "expand": expand}))

    @property
    def on_did_expand_element(self):
        return self._on_expand.event

    @property
    def on_did_collapse_element(self):
        return self._on_collapse.event

    @property
    def on_did_change_checkbox_state(self):
        return self._on_checkbox.event

    def expand(self, element: Any) -> None:
        self._on_expand.fire(element)

    def collapse(self, element: Any) -> None:
        self._on_collapse.fire(element)

    def change_checkboxes(self, items: List[Tuple[Any, Any]]) -> None:
        self._on_checkbox.fire(items)

    def dispose(self) -> None:
        self.disposed = True


class FakeHost(Host):

    def __init__(self, quick_pick_answer: Optional[str] = None):
        self.views: List[FakeTreeView] = []
        self.commands: Dict[str, Callable[..., Any]] = {}
        self.executed: List[Tuple[str, Tuple[Any, ...]]] = []
        self.context: Dict[str, Any] = {}
        self.quick_pick_answer = quick_pick_answer

    @property
    def view(self) -> FakeTreeView:
        return self.views[-1]

    def create_tree_view(self, view_id: str, provider: Any, show_collapse_all: bool = True) -> FakeTreeView:
        view = FakeTreeView(view_id, provider)
        self.views.append(view)
        return view

    def register_command(self, command_id: str, callback: Callable[..., Any]) -> Disposable:
        self.commands[command_id] = callback
        return Disposable(lambda: self.commands.pop(command_id, None))

    async def execute_command(self, command_id: str, *args: Any) -> Any:
        self.executed.append((command_id, args))
        return None

    def set_context(self, key: str, value: Any) -> None:
        self.context[key] = value

    async def show_quick_pick(self, items: List[str]) -> Optional[str]:
        return self.quick_pick_answer


def make_pull_request(number: int, title: Optional[str] = None, owner: str = "octo",
                      repository_name: str = "repo", **kwargs: Any) -> PullRequest:
    return PullRequest(
        number=number,
        title=title or f"Pull request {number}",
        owner=owner,
        repository_name=repository_name,
        **kwargs,
    )


class TreeHarness:
    """A provider wired to in-memory collaborators.

    Example:
        harness = TreeHarness([FakeFolderRepositoryManager("file:///ws/app")])
        harness.initialize()
        roots = await harness.provider.get_children()
    """

    def __init__(self, folder_managers: Optional[List[FolderRepositoryManager]] = None,
                 settings: Optional[InMemorySettings] = None,
                 memento: Optional[InMemoryMemento] = None,
                 state: ReposManagerState = ReposManagerState.READY_WITH_REMOTES,
                 credential_store: Optional[CredentialStore] = None,
                 review_models: Optional[List[ReviewModel]] = None,
                 config: Any = None):
        self.host = FakeHost()
        self.settings = settings or InMemorySettings()
        self.memento = memento or InMemoryMemento()
        self.repos_manager = FakeRepositoriesManager(folder_managers, state, credential_store)
        self.review_models = review_models if review_models is not None else [FakeReviewModel()]
        self.provider = PullRequestsTreeDataProvider(self.host, self.memento, self.settings, config=config)
        self.changes: List[Any] = []
        self.provider.on_did_change_tree_data(self.changes.append)

    @property
    def view(self) -> FakeTreeView:
        return self.host.view

    def initialize(self) -> "TreeHarness":
        self.provider.initialize(self.repos_manager, self.review_models, self.repos_manager.credential_store)
        return self
