"""
Shared pytest configuration.

Every test gets its own seeded store and an app wired to it, so writes made
by one test are never visible to another.
"""

import os

# Must be set before courtla is imported: the shared limiter reads it.
os.environ["ENV"] = "test"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from courtla.api.main import create_app  # noqa: E402
from courtla.database.seed_data import seed_store  # noqa: E402
from courtla.database.store import InMemoryStore  # noqa: E402


@pytest.fixture
def store():
    """A store loaded with the sample data."""
    s = InMemoryStore()
    seed_store(s)
    return s


@pytest.fixture
def empty_store():
    """A store with no records."""
    return InMemoryStore()


@pytest.fixture
def app(store):
    """An application serving the per-test store."""
    return create_app(store=store)


@pytest.fixture
def client(app):
    """Create a test client."""
    return TestClient(app)
