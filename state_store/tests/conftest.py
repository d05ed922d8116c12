"""Pytest fixtures for state_store tests."""

import pytest

from state_store.config import StateStoreConfig
from state_store.store import StateStore


@pytest.fixture
def store():
    """Create an initialized store on an in-memory SQLite database."""
    store = StateStore(StateStoreConfig(database_url="sqlite:///:memory:"))
    store.initialize()
    yield store
    store.close()
