# ruff: noqa: E402
import os
from typing import Any

import anyio
import pytest

# Set testing environment flags before importing the app or settings
os.environ["APP_ENV"] = "test"
os.environ["REDIS_URL"] = ""
os.environ["ENABLE_METRICS"] = "0"
os.environ["IDENTITY_JWT_SECRET"] = "test-identity-secret"
os.environ["IDENTITY_JWT_AUDIENCE"] = "authenticated"
os.environ["IDENTITY_PROVIDER_URL"] = "https://identity.test"
os.environ["IDENTITY_SERVICE_KEY"] = "service-key"

from farm_market.core.config import settings
from farm_market.core.storage import InMemoryKeyValueStore, get_store
from farm_market.main import app
from farm_market.modules.users.models import User
from farm_market.modules.users.repository import UserRepository
from tests.auth_tokens import auth_headers
from tests.testclient import TestClient


class AttrDict(dict):
    """Dict with attribute-style access for fixtures."""

    def __getattr__(self, item: str) -> Any:
        try:
            return self[item]
        except KeyError as exc:
            raise AttributeError(item) from exc


@pytest.fixture(scope="function")
def store():
    """Fresh in-memory key-value store per test."""
    return InMemoryKeyValueStore()


@pytest.fixture(scope="function")
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        try:
            yield test_client
        finally:
            app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def make_user(store):
    """Factory storing a profile and returning it with ready-made auth headers."""

    def _make_user(user_id: str, role: str = "buyer", **fields) -> AttrDict:
        fields.setdefault("name", user_id.title())
        fields.setdefault("email", f"{user_id}@example.com")
        user = User(id=user_id, role=role, **fields)
        anyio.run(UserRepository(store).save, user)
        return AttrDict(
            id=user_id,
            profile=user,
            headers=auth_headers(user_id, user.email),
        )

    return _make_user


@pytest.fixture(scope="function")
def supplier(make_user):
    return make_user("supplier-1", role="supplier", location="Agra")


@pytest.fixture(scope="function")
def buyer(make_user):
    return make_user("buyer-1", role="buyer")


@pytest.fixture(scope="function")
def admin(make_user):
    return make_user("admin-1", role="admin")


@pytest.fixture(scope="function")
def api():
    """Build a path under the configured API prefix."""

    def _api(path: str) -> str:
        return f"{settings.api_prefix}{path}"

    return _api


@pytest.fixture(scope="function")
def test_listing(client, supplier, api):
    res = client.post(
        api("/listings"),
        json={
            "crop": "Wheat",
            "quantity": 100,
            "unit": "kg",
            "pricePerUnit": 20,
            "mandi": "Agra Mandi",
        },
        headers=supplier.headers,
    )
    assert res.status_code == 200
    return res.json()["listing"]
