"""
Shared pytest fixtures for all tests.
This file is automatically loaded by pytest.
"""
import os
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

pytest_plugins = ('pytest_asyncio',)

# CRITICAL: Configure the environment BEFORE importing any settings
# This must happen before any Settings objects are created
os.environ["DB_NAME"] = "hockey_admin_test"
os.environ["DB_URL"] = "mongodb://localhost:27017"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEFAULT_SEASON"] = "2025"
os.environ.setdefault("LOG_DIR", "logs")

from main import app
from tests.fixtures.memory_repository import InMemoryRosterRepository
from tests.test_config import TestSettings

# Override app settings for testing
app.state.settings = TestSettings()


# Override the lifespan to prevent a real DB connection during tests
@asynccontextmanager
async def test_lifespan(app):
    """Test lifespan that doesn't connect to a database"""
    yield


# Replace the app's lifespan with test version
app.router.lifespan_context = test_lifespan


def make_cursor(documents=None):
    """Motor cursor mock: find(...).sort(...).to_list(...)"""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents or [])
    return cursor


@pytest.fixture
def rosters_collection():
    """Mocked rosters collection with async Motor methods"""
    collection = MagicMock()
    collection.find.return_value = make_cursor()
    collection.find_one = AsyncMock(return_value=None)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(return_value=MagicMock(acknowledged=True, inserted_id="new"))
    collection.update_one = AsyncMock(return_value=MagicMock(modified_count=1))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.delete_many = AsyncMock(return_value=MagicMock(deleted_count=0))
    collection.bulk_write = AsyncMock(
        return_value=MagicMock(upserted_count=0, modified_count=0, matched_count=0)
    )
    return collection


@pytest.fixture
def mock_db(rosters_collection):
    """Mock database handing out the rosters collection"""
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: (
        rosters_collection if name == "rosters" else MagicMock()
    )
    return db


@pytest.fixture
def memory_repository():
    return InMemoryRosterRepository()


@pytest_asyncio.fixture
async def client(mock_db):
    """HTTP client for API testing, backed by the mocked database"""
    app.state.mongodb = mock_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
