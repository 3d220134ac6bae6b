"""The pull requests tree provider.

The provider answers the host's pull requests (``get_children``,
``get_parent``, ``get_tree_item``) and turns push-style upstream events
into a single change stream the host listens to. Upstream sources never
talk to the host directly: every one of them ends in ``refresh()``.
"""

import asyncio
import inspect
import logging
from typing import Any, List, Optional, Sequence

from .commands import register_tree_commands
from .config import (
    FILE_LIST_LAYOUT,
    LOADING_PRS_TREE_CONTEXT,
    PR_SETTINGS_NAMESPACE,
    PRCategoryActionType,
    PRType,
    QUERIES,
    ReposManagerState,
    TreeProviderConfig,
)
from .errors import TreeAlreadyInitializedError
from .events import Disposable, EventEmitter
from .interfaces import (
    ConfigurationChangeEvent,
    CredentialStore,
    FolderRepositoryManager,
    Host,
    Memento,
    PullRequest,
    RepositoriesManager,
    ReviewModel,
    SettingsStore,
    TreeItem,
)
from .model import PrsTreeModel
from .nodes import (
    CategoryTreeNode,
    InMemFileChangeNode,
    PRCategoryActionNode,
    TreeNode,
    WorkspaceFolderNode,
)
from .readiness import gather_readiness_inputs, resolve_placeholder_actions
from .state import ExpandedQueriesState, ViewedFilesState

logger = logging.getLogger(__name__)


class PullRequestsTreeDataProvider:
    """Tree data provider for the pull requests view.

    Lifecycle:
        1. Construct with the host services; the view, commands and the
           view's own events are wired immediately.
        2. Call ``initialize`` exactly once with the repositories manager
           to start listening to repository, review and query changes.
        3. Call ``dispose`` to release everything.

    The provider is also the root of the node graph: root-level nodes
    hold it as their parent and read shared services from it.
    """

    def __init__(self, host: Host, workspace_state: Memento, settings: SettingsStore,
                 config: Optional[TreeProviderConfig] = None,
                 tree_model: Optional[PrsTreeModel] = None):
        """
        Args:
            host: Editor host services
            workspace_state: Workspace-scoped persistence
            settings: Settings store
            config: Provider configuration (defaults to TreeProviderConfig())
            tree_model: Shared tree model; a private one is created if omitted
        """
        self._config = config or TreeProviderConfig()
        self._host = host
        self._settings = settings
        self._disposables: List[Disposable] = []
        self._disposed = False

        self._on_did_change_tree_data: EventEmitter[Optional[TreeNode]] = EventEmitter()
        self.on_did_change_tree_data = self._on_did_change_tree_data.event
        self._on_did_change: EventEmitter[str] = EventEmitter()
        self.on_did_change = self._on_did_change.event

        self._owns_tree_model = tree_model is None
        self._tree_model = tree_model or PrsTreeModel(max_entries=self._config.max_cached_categories)
        self._expanded_queries = ExpandedQueriesState(workspace_state)
        self._viewed_files = ViewedFilesState(workspace_state)
        self._error_policy = self._config.error_policy_factory()

        self._children: List[TreeNode] = []
        self._generation = 0
        self._repos_manager: Optional[RepositoriesManager] = None
        self._credential_store: Optional[CredentialStore] = None
        self._initialized = False

        self._disposables.extend(register_tree_commands(self, host))

        self._view = host.create_tree_view(
            self._config.view_id, self, show_collapse_all=self._config.show_collapse_all
        )
        self._disposables.append(Disposable(self._view.dispose))
        self._disposables.append(settings.on_did_change_configuration(self._on_layout_changed))
        self._disposables.append(self._view.on_did_change_checkbox_state(self._on_checkbox_changed))
        self._disposables.append(
            self._view.on_did_expand_element(lambda element: self._update_expanded_queries(element, True))
        )
        self._disposables.append(
            self._view.on_did_collapse_element(lambda element: self._update_expanded_queries(element, False))
        )

    # Shared services read by nodes

    @property
    def generation(self) -> int:
        """Incremented every time a new root set is constructed."""
        return self._generation

    @property
    def view(self):
        return self._view

    @property
    def config(self) -> TreeProviderConfig:
        return self._config

    @property
    def settings(self) -> SettingsStore:
        return self._settings

    @property
    def tree_model(self) -> PrsTreeModel:
        return self._tree_model

    @property
    def expanded_queries(self) -> ExpandedQueriesState:
        return self._expanded_queries

    @property
    def viewed_files(self) -> ViewedFilesState:
        return self._viewed_files

    @property
    def repos_manager(self) -> Optional[RepositoriesManager]:
        return self._repos_manager

    def notify_item_changed(self, resource_uri: str) -> None:
        """Ask decorations of one item to be recomputed."""
        self._on_did_change.fire(resource_uri)

    # Upstream wiring

    def initialize(self, repos_manager: RepositoriesManager, review_models: Sequence[ReviewModel],
                   credential_store: CredentialStore) -> None:
        if self._initialized:
            raise TreeAlreadyInitializedError()

        self._initialized = True
        self._repos_manager = repos_manager
        self._credential_store = credential_store

        self._disposables.append(repos_manager.on_did_change_state(self._on_state_changed))
        for folder_manager in repos_manager.folder_managers:
            self._disposables.append(
                folder_manager.on_did_change_repositories(
                    lambda _event=None, manager=folder_manager: self._on_repositories_changed(manager)
                )
            )
        for review_model in review_models:
            self._disposables.append(
                review_model.on_did_change_local_file_changes(lambda _event=None: self.refresh())
            )
        self._disposables.append(self._settings.on_did_change_configuration(self._on_queries_changed))

        logger.debug("Tree initialized with %d folder(s)", len(repos_manager.folder_managers))
        self.refresh()

    def _on_state_changed(self, _event: Any = None) -> None:
        self.refresh()

    def _on_repositories_changed(self, folder_manager: FolderRepositoryManager) -> None:
        self._tree_model.invalidate(folder_manager)
        self.refresh()

    def _on_layout_changed(self, event: ConfigurationChangeEvent) -> None:
        if event.affects_configuration(f"{PR_SETTINGS_NAMESPACE}.{FILE_LIST_LAYOUT}"):
            self.refresh()

    def _on_queries_changed(self, event: ConfigurationChangeEvent) -> None:
        if event.affects_configuration(f"{PR_SETTINGS_NAMESPACE}.{QUERIES}"):
            self._tree_model.invalidate()
            self.refresh()

    def _on_checkbox_changed(self, items: Sequence[Any]) -> None:
        for node, new_state in items:
            update = getattr(node, "update_from_checkbox_changed", None)
            if update is None:
                logger.debug("Ignoring checkbox change on %r", node)
                continue
            update(new_state)

    def _update_expanded_queries(self, element: Any, expanded: bool) -> None:
        if isinstance(element, CategoryTreeNode):
            self._expanded_queries.set_expanded(element.id, expanded)

    def refresh(self, node: Optional[TreeNode] = None) -> None:
        """Invalidate one subtree, or the whole tree when node is None."""
        self._on_did_change_tree_data.fire(node)

    # Host protocol

    async def get_tree_item(self, element: TreeNode) -> TreeItem:
        item = element.get_tree_item()
        if inspect.isawaitable(item):
            item = await item
        return item

    async def resolve_tree_item(self, item: TreeItem, element: TreeNode) -> TreeItem:
        """Fill in deferred parts of an item; only file changes have any."""
        if isinstance(element, InMemFileChangeNode):
            await element.resolve()
            return await self.get_tree_item(element)
        return item

    def cached_children(self, element: Optional[TreeNode] = None) -> List[TreeNode]:
        if element is None:
            return list(self._children)
        return element.cached_children()

    async def get_children(self, element: Optional[TreeNode] = None) -> List[TreeNode]:
        manager = self._repos_manager
        if manager is None or not manager.folder_managers:
            return []

        if manager.state == ReposManagerState.INITIALIZING:
            self._host.set_context(LOADING_PRS_TREE_CONTEXT, True)
            return []

        folder_managers = list(manager.folder_managers)
        remotes = await asyncio.gather(*(fm.get_github_remotes() for fm in folder_managers))
        if not any(remotes):
            return await self._needs_remotes(element)

        if element is None:
            return self._rebuild_root(folder_managers)

        if not any(fm.repository.remotes for fm in folder_managers):
            return [PRCategoryActionNode(self, element, PRCategoryActionType.EMPTY)]

        try:
            return await element.get_children()
        except Exception as error:
            return self._error_policy.handle(error, element)

    def get_parent(self, element: TreeNode) -> Optional[TreeNode]:
        return element.get_parent()

    async def _needs_remotes(self, element: Optional[TreeNode] = None) -> List[TreeNode]:
        inputs = await gather_readiness_inputs(self._repos_manager, self._settings)
        actions = resolve_placeholder_actions(
            inputs.state,
            inputs.remotes_setting,
            inputs.has_enterprise_remotes,
            inputs.enterprise_authenticated,
        )
        parent = element if element is not None else self
        return [PRCategoryActionNode(self, parent, action) for action in actions]

    def _rebuild_root(self, folder_managers: List[FolderRepositoryManager]) -> List[TreeNode]:
        previous = self._children
        self._children = []
        for node in previous:
            node.dispose()

        self._generation += 1
        expanded = self._expanded_queries.snapshot()
        if len(folder_managers) == 1:
            result: List[TreeNode] = list(
                WorkspaceFolderNode.get_category_tree_nodes(self, self, folder_managers[0], expanded)
            )
        else:
            result = [WorkspaceFolderNode(self, self, manager, expanded) for manager in folder_managers]

        self._children = result
        self._host.set_context(LOADING_PRS_TREE_CONTEXT, False)
        logger.debug("Built root set generation %d with %d node(s)", self._generation, len(result))
        return list(result)

    # Navigation

    async def expand_pull_request(self, target: PullRequest) -> None:
        """Reveal the first node representing ``target``; no match is fine."""
        if not self._children:
            await self.get_children()

        for child in list(self._children):
            if isinstance(child, WorkspaceFolderNode):
                if await child.expand_pull_request(target):
                    return
            elif isinstance(child, CategoryTreeNode) and child.type == PRType.ALL:
                if await child.expand_pull_request(target):
                    return

    async def reveal(self, element: TreeNode, select: Optional[bool] = None,
                     focus: Optional[bool] = None, expand: Optional[bool] = None) -> None:
        await self._view.reveal(element, select=select, focus=focus, expand=expand)

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        for disposable in self._disposables:
            disposable.dispose()
        self._disposables = []

        children = self._children
        self._children = []
        for node in children:
            node.dispose()

        self._on_did_change_tree_data.dispose()
        self._on_did_change.dispose()
        if self._owns_tree_model:
            self._tree_model.dispose()
