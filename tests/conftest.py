"""Shared fixtures."""

import pytest

from todosync.adapters import MemoryListStore, StaticUserDirectory
from todosync.application.sync import ListSyncOrchestrator
from todosync.core.domain import EventBus


@pytest.fixture
def store():
    return MemoryListStore()


@pytest.fixture
def directory():
    return StaticUserDirectory(usernames=["alice", "bob", "carol"], admins=["root"])


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def orchestrator(store, directory, event_bus):
    return ListSyncOrchestrator(store, directory, event_bus)
