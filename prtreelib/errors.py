"""Exception taxonomy for prtreelib.

Absence conditions (no remotes, not authenticated) are never raised; they
are modelled as placeholder nodes. Only programmer misuse is fatal.
"""


class TreeError(Exception):
    """Base class for errors raised by the tree engine."""


class TreeAlreadyInitializedError(TreeError, RuntimeError):
    """Raised when a provider's initialize() is called more than once."""

    def __init__(self, message: str = "Tree has already been initialized!"):
        super().__init__(message)


class ChildFetchError(TreeError):
    """Wraps a failure raised while resolving a node's children."""

    def __init__(self, node_id: str, cause: Exception):
        super().__init__(f"Failed to load children of '{node_id}': {cause}")
        self.node_id = node_id
        self.cause = cause
