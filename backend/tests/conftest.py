"""
TextShelf Backend - Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped, created fresh for each test):
    ├── sample_resources: Three known Resource records
    ├── store: ResourceStore seeded with sample_resources and a fixed RNG seed
    ├── bootstrap_file: Factory writing a JSON bootstrap file under tmp_path
    └── test_client: HTTPX AsyncClient bound to an app serving `store`
"""

import json
import os
import random

# Override settings for testing BEFORE any app imports
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DEFAULT_LIST_LIMIT"] = "10"
os.environ["MIN_TEXT_LENGTH"] = "3"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from app.models.resource import Resource
from app.services.resource_store import ResourceStore


@pytest.fixture
def sample_resources():
    """Three resources with distinct creators and searchable text."""
    return [
        Resource(id="1", creator="Ada", text="Hello World from the first resource"),
        Resource(id="2", creator="Grace", text="A literal a.b appears here"),
        Resource(id="3", creator="Unknown", text="Regex chars like [x] and (y)* too"),
    ]


@pytest.fixture
def store(sample_resources):
    """A store over sample_resources with a deterministic random source."""
    return ResourceStore(sample_resources, rng=random.Random(1234))


@pytest.fixture
def bootstrap_file(tmp_path):
    """
    Factory fixture: writes `data` to a JSON file and returns its path.

    Usage:
        path = bootstrap_file([{"id": "1", "text": "hello"}])
    """

    def _write(data, name="resources.json", raw=None):
        path = tmp_path / name
        path.write_text(raw if raw is not None else json.dumps(data), encoding="utf-8")
        return str(path)

    return _write


@pytest_asyncio.fixture
async def test_client(store):
    """
    Provides an async HTTP test client for endpoint testing.

    ASGITransport does not run the lifespan hook, so the app serves exactly
    the injected `store`.
    """
    from app.main import create_app

    app = create_app(store=store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
