"""Test configuration and fixtures for Folio.

This module provides isolated test environments:
- In-memory SQLite database per test
- Fresh application and client per test
- A registered user with a session token
"""
import os
import sys
from pathlib import Path
from typing import Dict, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

# Ensure folio is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

# Set test environment BEFORE importing folio modules
os.environ["FOLIO_DATABASE_PATH"] = ":memory:"
os.environ["FOLIO_BCRYPT_ROUNDS"] = "4"
os.environ["FOLIO_LOG_LEVEL"] = "WARNING"

from folio.infrastructure.database import Database  # noqa: E402
from folio.infrastructure.repositories import (  # noqa: E402
    AsyncPostRepository,
    AsyncSessionRepository,
    AsyncUserRepository,
)
from folio.main import create_app  # noqa: E402


@pytest_asyncio.fixture
async def async_db():
    """Connected in-memory database with schema."""
    db = Database(":memory:")
    await db.connect()
    await db.init_schema()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def user_repo(async_db):
    return AsyncUserRepository(async_db, rounds=4)


@pytest_asyncio.fixture
async def session_repo(async_db):
    return AsyncSessionRepository(async_db)


@pytest_asyncio.fixture
async def post_repo(async_db):
    return AsyncPostRepository(async_db)


@pytest.fixture(scope="function")
def client() -> Generator[TestClient, None, None]:
    """Test client over a fresh in-memory database.

    Usage:
        def test_something(client):
            response = client.get("/health")
            assert response.status_code == 200
    """
    app = create_app(database=Database(":memory:"), configure_logging=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def test_user(client: TestClient) -> Dict:
    """Register a user through the API.

    Returns:
        Dict with: username, password, id, token
    """
    credentials = {"username": "alice", "password": "password123"}
    response = client.post("/users", json=credentials)
    assert response.status_code == 200, f"Registration failed: {response.text}"

    session = response.json()
    credentials["id"] = session["userId"]
    credentials["token"] = session["token"]
    return credentials


@pytest.fixture(scope="function")
def auth_headers(test_user: Dict) -> Dict:
    """Authorization header carrying test_user's raw token."""
    return {"Authorization": test_user["token"]}
