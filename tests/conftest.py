"""
SocialAPI Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures (function-scoped):
    ├── mock_db: Mock Motor database; db["users"] / db["thoughts"] are mock
    │            collections whose coroutine methods are AsyncMocks
    ├── user_doc / friend_doc / thought_doc: raw documents as Motor returns them
    └── test_client: HTTPX AsyncClient against the app with get_database overridden
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import AsyncClient, ASGITransport

# Override settings for testing BEFORE any app imports
os.environ["MONGODB_URL"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "socialNetworkTestDB"
os.environ["LOG_LEVEL"] = "WARNING"

from socialapi.models.thought import THOUGHTS_COLLECTION  # noqa: E402
from socialapi.models.user import USERS_COLLECTION  # noqa: E402

CREATED_AT = datetime(2024, 1, 5, 15, 7, tzinfo=timezone.utc)


def make_collection() -> MagicMock:
    """
    A stand-in for AsyncIOMotorCollection.

    find() is synchronous in Motor (it returns a cursor); everything else the
    services call is a coroutine.
    """
    collection = MagicMock()
    for name in (
        "find_one",
        "insert_one",
        "find_one_and_update",
        "find_one_and_delete",
        "update_many",
        "delete_many",
        "create_indexes",
    ):
        setattr(collection, name, AsyncMock())
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=[])
    collection.find = MagicMock(return_value=cursor)
    return collection


@pytest.fixture
def mock_db():
    """
    Provides a mock Motor database.

    Usage:
        mock_db.users.find_one.return_value = user_doc
        result = await user_service.get_user(mock_db, str(user_doc["_id"]))
    """
    collections = {
        USERS_COLLECTION: make_collection(),
        THOUGHTS_COLLECTION: make_collection(),
    }
    db = MagicMock()
    db.__getitem__.side_effect = collections.__getitem__
    db.users = collections[USERS_COLLECTION]
    db.thoughts = collections[THOUGHTS_COLLECTION]
    db.command = AsyncMock(return_value={"ok": 1.0})
    return db


@pytest.fixture
def friend_doc():
    return {
        "_id": ObjectId(),
        "username": "amiko",
        "email": "amiko@example.com",
        "thoughts": [],
        "friends": [],
    }


@pytest.fixture
def user_doc():
    return {
        "_id": ObjectId(),
        "username": "lernantino",
        "email": "lernantino@example.com",
        "thoughts": [ObjectId(), ObjectId()],
        "friends": [],
    }


@pytest.fixture
def thought_doc():
    return {
        "_id": ObjectId(),
        "thoughtText": "Here's a cool thought...",
        "username": "lernantino",
        "createdAt": CREATED_AT,
        "reactions": [
            {
                "reactionId": ObjectId(),
                "reactionBody": "Agreed!",
                "username": "amiko",
                "createdAt": CREATED_AT,
            }
        ],
    }


@pytest_asyncio.fixture
async def test_client(mock_db):
    """
    Provides an async HTTP test client for endpoint testing.

    get_database is overridden with mock_db, so every route talks to the
    same mocks the test configures.
    """
    from socialapi.database import get_database
    from socialapi.main import app

    app.dependency_overrides[get_database] = lambda: mock_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
