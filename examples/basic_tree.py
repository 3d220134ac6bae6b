#!/usr/bin/env python3
"""
Basic example rendering the pull requests tree from in-memory collaborators.

This example demonstrates:
- Wiring a provider to fake host services
- Walking the tree the way a host does (get_children + get_tree_item)
- Loading one more page of a category
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add parent directory to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from prtreelib.interfaces import FileChange
from prtreelib.testing import FakeFolderRepositoryManager, TreeHarness, make_pull_request


async def render(provider, element=None, indent=0, max_depth=3):
    """Print the subtree below element, resolving children like a host would."""
    if indent >= max_depth:
        return
    for child in await provider.get_children(element):
        item = await provider.get_tree_item(child)
        description = f"  ({item.description})" if item.description else ""
        print(f"{'  ' * indent}{item.label}{description}")
        await render(provider, child, indent + 1, max_depth)


async def main():
    """Build a single-folder workspace and print its tree."""
    logging.basicConfig(level=logging.DEBUG if "-v" in sys.argv else logging.WARNING)

    folder = FakeFolderRepositoryManager(
        "file:///workspace/app",
        pages={
            "All Open": [
                [make_pull_request(1, "Add login page", author="mona"),
                 make_pull_request(2, "Fix flaky test", author="hubot", is_draft=True)],
                [make_pull_request(3, "Bump dependencies", author="dependabot")],
            ],
        },
        file_changes={
            1: [FileChange("src/login.py", "added", 120, 0),
                FileChange("src/app.py", additions=4, deletions=1)],
        },
    )
    harness = TreeHarness([folder]).initialize()
    provider = harness.provider

    print("Initial tree:")
    print("-" * 50)
    await render(provider)

    # The host invokes the "Load more" node's command
    roots = await provider.get_children()
    all_open = roots[-1]
    more = (await provider.get_children(all_open))[-1]
    item = await provider.get_tree_item(more)
    harness.host.commands[item.command.command](*item.command.arguments)

    print("\nAfter loading more:")
    print("-" * 50)
    await render(provider, all_open, max_depth=1)

    print(f"\nTree model stats: {provider.tree_model.get_stats()}")
    provider.dispose()


if __name__ == "__main__":
    asyncio.run(main())
