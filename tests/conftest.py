"""
Shared pytest fixtures for NuCampsite tests.

This module provides common fixtures including:
- Redis mocks (call-shape mocks and an in-memory variant)
- A mocked Facebook Graph API
- FastAPI test client utilities
"""

import json
import os
import sys
from typing import Dict, Optional
from unittest.mock import AsyncMock

import httpx
import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from nucampsite.config.provider import EnvConfigProvider  # noqa: E402

TEST_SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256"
FACEBOOK_PROFILE_URL = "https://graph.facebook.test/me"


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

@pytest.fixture
def mock_redis():
    """Create a mock Redis client for asserting call shapes."""
    redis = AsyncMock()

    # Basic operations
    redis.setex = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.exists = AsyncMock(return_value=0)

    # Set operations
    redis.sadd = AsyncMock()
    redis.srem = AsyncMock()
    redis.smembers = AsyncMock(return_value=set())

    # List operations
    redis.lpush = AsyncMock()
    redis.ltrim = AsyncMock()
    redis.lrange = AsyncMock(return_value=[])

    redis.ping = AsyncMock(return_value=True)
    return redis


def make_redis_with_data():
    """
    Redis mock with in-memory data storage.

    Supports the strings, sets and lists the service uses, including
    ``SET NX``, so code can read back what it writes.
    """
    storage: Dict[str, object] = {}

    redis = AsyncMock()

    async def mock_set(key, value, nx=False, ex=None, **kwargs):
        if nx and key in storage:
            return None
        storage[key] = str(value)
        return True

    async def mock_setex(key, ttl, value):
        storage[key] = str(value)
        return True

    async def mock_get(key):
        value = storage.get(key)
        return value if isinstance(value, str) else None

    async def mock_delete(*keys):
        count = 0
        for key in keys:
            if key in storage:
                del storage[key]
                count += 1
        return count

    async def mock_exists(*keys):
        return sum(1 for k in keys if k in storage)

    async def mock_sadd(key, *members):
        members_set = storage.setdefault(key, set())
        before = len(members_set)
        members_set.update(members)
        return len(members_set) - before

    async def mock_srem(key, *members):
        members_set = storage.get(key, set())
        removed = len([m for m in members if m in members_set])
        members_set.difference_update(members)
        return removed

    async def mock_smembers(key):
        return set(storage.get(key, set()))

    async def mock_lpush(key, *values):
        items = storage.setdefault(key, [])
        for value in values:
            items.insert(0, value)
        return len(items)

    async def mock_ltrim(key, start, end):
        items = storage.get(key, [])
        storage[key] = items[start:end + 1]
        return True

    async def mock_lrange(key, start, end):
        items = storage.get(key, [])
        return items[start:] if end == -1 else items[start:end + 1]

    async def mock_ping():
        return True

    redis.set = mock_set
    redis.setex = mock_setex
    redis.get = mock_get
    redis.delete = mock_delete
    redis.exists = mock_exists
    redis.sadd = mock_sadd
    redis.srem = mock_srem
    redis.smembers = mock_smembers
    redis.lpush = mock_lpush
    redis.ltrim = mock_ltrim
    redis.lrange = mock_lrange
    redis.ping = mock_ping
    redis._storage = storage  # Expose for test assertions

    return redis


@pytest.fixture
def mock_redis_with_data():
    return make_redis_with_data()


# =============================================================================
# Time
# =============================================================================

class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = 1_700_000_000):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


# =============================================================================
# Facebook Graph API Mocking
# =============================================================================

class FakeGraphAPI:
    """
    Stand-in for the Graph API profile endpoint.

    Register access tokens with ``add_user``; unknown tokens get the
    error body Facebook returns for invalid tokens.
    """

    def __init__(self):
        self.profiles: Dict[str, dict] = {}
        self.requests = []

    def add_user(self, access_token: str, facebook_id: str, name: str,
                 first_name: str = "", last_name: str = "") -> None:
        self.profiles[access_token] = {
            "id": facebook_id,
            "name": name,
            "first_name": first_name,
            "last_name": last_name,
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        token = request.url.params.get("access_token")
        profile = self.profiles.get(token)
        if profile is None:
            return httpx.Response(
                400,
                json={"error": {"message": "Invalid OAuth access token.", "type": "OAuthException", "code": 190}},
            )
        return httpx.Response(200, json=profile)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def graph_api():
    return FakeGraphAPI()


# =============================================================================
# Configuration and Application
# =============================================================================

@pytest.fixture
def app_env(monkeypatch):
    """Environment for a fully configured service."""
    monkeypatch.setenv("SECRET_KEY", TEST_SECRET_KEY)
    monkeypatch.setenv("FACEBOOK_CLIENT_ID", "test-client-id")
    monkeypatch.setenv("FACEBOOK_CLIENT_SECRET", "test-client-secret")
    monkeypatch.setenv("FACEBOOK_PROFILE_URL", FACEBOOK_PROFILE_URL)
    monkeypatch.delenv("SESSION_COOKIE_NAME", raising=False)
    monkeypatch.delenv("SESSION_TTL", raising=False)
    return EnvConfigProvider()


@pytest.fixture
def app_redis():
    return make_redis_with_data()


@pytest.fixture
def client(app_env, app_redis, graph_api):
    """TestClient around an app wired to in-memory Redis and the fake Graph API."""
    from fastapi.testclient import TestClient

    from nucampsite.main import create_app

    app = create_app(app_env, redis_client=app_redis, http_client=graph_api.client())
    with TestClient(app) as test_client:
        yield test_client


def signup(client, username: str, password: str = "secret-password", **profile) -> dict:
    response = client.post("/users/signup", json={"username": username, "password": password, **profile})
    assert response.status_code == 200, response.text
    return response.json()


def login(client, username: str, password: str = "secret-password") -> str:
    response = client.post("/users/login", json={"username": username, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["token"]


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def make_admin(redis, username: str) -> None:
    """Flip the admin flag on a stored user."""
    storage = redis._storage
    user_id = storage[f"user:username:{username}"]
    doc = json.loads(storage[f"user:{user_id}"])
    doc["admin"] = True
    storage[f"user:{user_id}"] = json.dumps(doc)


def user_id_of(redis, username: str) -> Optional[str]:
    return redis._storage.get(f"user:username:{username}")


@pytest.fixture
def campsite_payload():
    return {
        "name": "React Lake Campground",
        "description": "Nestled in the foothills of the Chrome Mountains.",
        "image": "images/react-lake.jpg",
        "elevation": 1233,
        "cost": 100,
        "featured": False,
    }


# =============================================================================
# Test Markers Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests requiring infrastructure"
    )
