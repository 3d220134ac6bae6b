"""Testing utilities for prtreelib."""

from .fixtures import (
    FakeCredentialStore,
    FakeFolderRepositoryManager,
    FakeHost,
    FakeRepositoriesManager,
    FakeRepository,
    FakeReviewModel,
    FakeTreeView,
    InMemoryMemento,
    InMemorySettings,
    TreeHarness,
    make_pull_request,
)

__all__ = [
    'FakeCredentialStore',
    'FakeFolderRepositoryManager',
    'FakeHost',
    'FakeRepositoriesManager',
    'FakeRepository',
    'FakeReviewModel',
    'FakeTreeView',
    'InMemoryMemento',
    'InMemorySettings',
    'TreeHarness',
    'make_pull_request',
]
