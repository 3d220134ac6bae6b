"""Remote-readiness gate.

Decides which placeholder actions stand in for the tree when no folder
has a usable GitHub remote. The decision itself is a pure function of its
inputs; gathering those inputs from the repositories manager is a
separate coroutine so the policy can be tested in isolation.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from .config import AuthProvider, PR_SETTINGS_NAMESPACE, PRCategoryActionType, REMOTES, ReposManagerState
from .interfaces import FolderRepositoryManager, GitHubRemote, RepositoriesManager


@dataclass(frozen=True)
class ReadinessInputs:
    state: Optional[ReposManagerState]
    remotes_setting: Optional[Sequence[str]]
    has_enterprise_remotes: bool
    enterprise_authenticated: bool


def resolve_placeholder_actions(state: Optional[ReposManagerState],
                                remotes_setting: Optional[Sequence[str]],
                                has_enterprise_remotes: bool,
                                enterprise_authenticated: bool) -> List[PRCategoryActionType]:
    """Choose the placeholder actions, in display order.

    Args:
        state: Current repositories manager state (None when there is no manager)
        remotes_setting: The remotes allowlist setting, None when unset
        has_enterprise_remotes: Whether any folder has a GitHub Enterprise remote
        enterprise_authenticated: Whether enterprise authentication is established

    Returns:
        Ordered action types; empty when authentication UI takes over
    """
    if state == ReposManagerState.NEEDS_AUTHENTICATION:
        return []

    if remotes_setting is not None:
        actions = [PRCategoryActionType.NO_MATCHING_REMOTES, PRCategoryActionType.CONFIGURE_REMOTES]
    else:
        actions = [PRCategoryActionType.NO_REMOTES]

    if has_enterprise_remotes and not enterprise_authenticated:
        actions.append(PRCategoryActionType.LOGIN_ENTERPRISE)

    return actions


async def find_dotcom_and_enterprise_remotes(
        folder_managers: Sequence[FolderRepositoryManager]) -> Tuple[List[GitHubRemote], List[GitHubRemote]]:
    """Split every GitHub remote of every folder into dotcom and enterprise."""
    all_remotes = await asyncio.gather(*(manager.get_all_github_remotes() for manager in folder_managers))
    dotcom: List[GitHubRemote] = []
    enterprise: List[GitHubRemote] = []
    for remotes in all_remotes:
        for remote in remotes:
            (enterprise if remote.is_enterprise else dotcom).append(remote)
    return dotcom, enterprise


async def gather_readiness_inputs(repos_manager: Optional[RepositoriesManager],
                                  settings: Any) -> ReadinessInputs:
    """Collect gate inputs; a missing manager counts as zero remotes."""
    remotes_setting = settings.get(PR_SETTINGS_NAMESPACE, REMOTES)

    if repos_manager is None:
        return ReadinessInputs(None, remotes_setting, False, False)

    _, enterprise = await find_dotcom_and_enterprise_remotes(repos_manager.folder_managers)
    authenticated = repos_manager.credential_store.is_authenticated(AuthProvider.GITHUB_ENTERPRISE)
    return ReadinessInputs(repos_manager.state, remotes_setting, bool(enterprise), authenticated)
