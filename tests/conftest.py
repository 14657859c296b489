"""Shared pytest fixtures for ditree tests."""

import pytest

from ditree.hooks import DependenciesRegistry
from ditree.lifetimes import CollectedReferences
from ditree.ownership import HostObject
from ditree.storage import RegistrationStorage


class Owner(HostObject):
    """Plain host object owning a storage in tests."""


@pytest.fixture()
def registry() -> DependenciesRegistry:
    """Fresh injection hook registry."""
    return DependenciesRegistry()


@pytest.fixture()
def root_storage(registry: DependenciesRegistry) -> RegistrationStorage:
    """Initialized root storage with autoregistration enabled."""
    storage = RegistrationStorage(dependencies_registry=registry)
    storage.init_owner(Owner())
    storage.init_services()
    return storage


@pytest.fixture()
def child_storage(root_storage: RegistrationStorage) -> RegistrationStorage:
    """Initialized storage scoped under ``root_storage``."""
    storage = RegistrationStorage(root_storage)
    storage.init_owner(Owner(outer=root_storage.owner))
    storage.init_services()
    return storage


@pytest.fixture()
def collector() -> CollectedReferences:
    """List-backed reference collector."""
    return CollectedReferences()
