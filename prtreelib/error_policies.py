"""
Error handling policies for child resolution.

When a node's children fail to load, the provider hands the exception to
a policy. The policy decides what the host sees under that node instead:
a degraded error entry, or nothing because the error is re-raised.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .errors import ChildFetchError
from .nodes import ErrorNode, TreeNode

logger = logging.getLogger(__name__)


class ChildErrorPolicy(ABC):
    """
    Base class for child error policies.

    Subclasses implement different strategies for handling errors raised
    by ``TreeNode.get_children``.
    """

    @abstractmethod
    def handle(self, error: Exception, node: TreeNode) -> List[TreeNode]:
        """
        Handle an error that occurred while resolving a node's children.

        Args:
            error: The exception that was raised
            node: The node whose children were being resolved

        Returns:
            Children to present in place of the failed result,
            or re-raises the exception.
        """
        pass


class FailFastPolicy(ChildErrorPolicy):
    """
    Policy that re-raises any error.

    Useful in tests and tooling where a failed fetch should be loud.
    """

    def handle(self, error: Exception, node: TreeNode) -> List[TreeNode]:
        raise error


class ShowErrorNodePolicy(ChildErrorPolicy):
    """
    Policy that logs the failure and shows a single error entry.

    This is the default: the failure stays local to the node, siblings
    and the rest of the tree render normally.
    """

    def handle(self, error: Exception, node: TreeNode) -> List[TreeNode]:
        logger.warning("Failed to load children of %s: %s", node.id, error)
        if node.is_disposed:
            return []
        return [ErrorNode(node.tree, node, error)]


class CollectErrorsPolicy(ShowErrorNodePolicy):
    """
    Policy that records every failure for later inspection.

    Behaves like ShowErrorNodePolicy towards the host.
    """

    def __init__(self):
        self.errors: List[ChildFetchError] = []

    def handle(self, error: Exception, node: TreeNode) -> List[TreeNode]:
        self.errors.append(ChildFetchError(node.id, error))
        return super().handle(error, node)

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        by_type: Dict[str, int] = {}
        for record in self.errors:
            name = type(record.cause).__name__
            by_type[name] = by_type.get(name, 0) + 1
        return {
            'total_errors': len(self.errors),
            'by_type': by_type,
            'node_ids': [record.node_id for record in self.errors],
        }
