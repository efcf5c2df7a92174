"""
NoteKeeper — Test Configuration (conftest.py)
===============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── store: Empty NoteStore
    ├── app: FastAPI app serving that store
    ├── test_client: HTTPX AsyncClient talking to the app in-process
    └── sample_payload: Note body for create/update requests
"""

import os

# Override settings for testing BEFORE any notekeeper imports
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from notekeeper.main import create_app
from notekeeper.store import NoteStore


@pytest.fixture
def store():
    """A fresh, empty NoteStore for each test."""
    return NoteStore()


@pytest.fixture
def app(store):
    """An application instance bound to the test's store."""
    return create_app(store=store)


@pytest.fixture
def sample_payload():
    return {"name": "groceries", "text": "milk, eggs, bread"}


@pytest_asyncio.fixture
async def test_client(app):
    """
    Provides an async HTTP test client for endpoint testing.

    Uses ASGITransport to route requests directly to the app, so no socket
    is opened and the lifespan is not run.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
