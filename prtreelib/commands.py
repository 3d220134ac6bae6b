"""Commands contributed by the pull requests tree."""

import logging
from typing import Any, List, Optional

from .config import EXTENSION_ID, QUERIES, REMOTES
from .events import Disposable

logger = logging.getLogger(__name__)

CONFIGURE_REMOTES_ITEM = "Configure Remotes..."
CONFIGURE_QUERIES_ITEM = "Configure Queries..."


def _open_settings(host: Any, key: str):
    return host.execute_command("workbench.action.openSettings", f"@ext:{EXTENSION_ID} {key}")


def register_tree_commands(provider: Any, host: Any) -> List[Disposable]:
    """Register the tree's commands on the host.

    Args:
        provider: The PullRequestsTreeDataProvider the commands act on
        host: Host services used for registration

    Returns:
        Disposables unregistering each command
    """

    def refresh_list(*_args: Any) -> None:
        provider.tree_model.invalidate()
        provider.refresh()

    def load_more(node: Any) -> None:
        if node is None or not hasattr(node, "fetch_next_page"):
            logger.debug("pr.loadMore invoked without a category node")
            return
        node.fetch_next_page = True
        provider.refresh(node)

    async def configure_remotes(*_args: Any) -> Any:
        return await _open_settings(host, REMOTES)

    async def configure_queries(*_args: Any) -> Any:
        return await _open_settings(host, QUERIES)

    async def configure_viewlet(*_args: Any) -> Optional[Any]:
        choice = await host.show_quick_pick([CONFIGURE_REMOTES_ITEM, CONFIGURE_QUERIES_ITEM])
        if choice == CONFIGURE_QUERIES_ITEM:
            return await configure_queries()
        if choice == CONFIGURE_REMOTES_ITEM:
            return await configure_remotes()
        return None

    return [
        host.register_command("pr.refreshList", refresh_list),
        host.register_command("pr.loadMore", load_more),
        host.register_command("pr.configurePRViewlet", configure_viewlet),
        host.register_command("pr.configureRemotes", configure_remotes),
        host.register_command("pr.configureQueries", configure_queries),
    ]
