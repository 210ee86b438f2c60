"""Shared fixtures: a temp-dir record store and an ASGI test client."""

import os

# Cheap hashes keep the suite fast; must be set before any hashing happens.
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from httpx import ASGITransport, AsyncClient

from core.store import RecordStore, get_store
from main import app
from uploads.service import get_upload_dir


@pytest.fixture
def store(tmp_path):
    return RecordStore(tmp_path / "data")


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
async def client(store, upload_dir):
    """FastAPI test client with store and upload dir pointed at tmp_path."""

    async def override_get_store():
        return store

    async def override_get_upload_dir():
        return upload_dir

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_upload_dir] = override_get_upload_dir

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def auth_header(client):
    await client.post("/register", json={"username": "writer", "password": "pw-123"})
    res = await client.post("/login", json={"username": "writer", "password": "pw-123"})
    return {"Authorization": f"Bearer {res.json()['token']}"}
