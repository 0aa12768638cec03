"""Shared fixtures for API and service tests."""

import asyncio
import time
from typing import Any, Dict, List

import cloudinary.uploader
import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.config.database import ensure_indexes, get_database
from app.main import app
from app.services.media import MediaUploader
from app.utils.dependencies import get_media_uploader, get_optional_media_uploader

MEDIA_HOST = "https://res.cloudinary.test"


class FakeCloudinaryUpload:
    """Replacement for ``cloudinary.uploader.upload``.

    Byte payloads are echoed back in the URL. A payload listed in ``delays``
    sleeps before returning so tests can force uploads to finish out of order.
    """

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []
        self.delays: Dict[bytes, float] = {}
        self.fail_on: bytes = b""

    def __call__(self, payload, **options) -> Dict[str, Any]:
        self.calls.append({"payload": payload, "options": options})
        if isinstance(payload, bytes):
            if self.fail_on and payload == self.fail_on:
                raise RuntimeError("upload rejected")
            time.sleep(self.delays.get(payload, 0))
            name = payload.decode()
        else:
            name = f"encoded-{len(self.calls)}"
        return {"public_id": f"{options.get('folder')}/{name}", "secure_url": f"{MEDIA_HOST}/{name}"}


@pytest.fixture
def db():
    """In-memory MongoDB database with the production indexes."""
    database = AsyncMongoMockClient()["catalog_test"]
    # private loop so the current event loop of async tests is left alone
    loop = asyncio.new_event_loop()
    try:
        loop.run_until_complete(ensure_indexes(database))
    finally:
        loop.close()
    return database


@pytest.fixture
def fake_upload(monkeypatch: pytest.MonkeyPatch) -> FakeCloudinaryUpload:
    fake = FakeCloudinaryUpload()
    monkeypatch.setattr(cloudinary.uploader, "upload", fake)
    return fake


@pytest.fixture
def media_uploader(fake_upload: FakeCloudinaryUpload) -> MediaUploader:
    return MediaUploader(cloud_name="demo", api_key="key", api_secret="secret", folder="products")


@pytest.fixture
def client(db, media_uploader: MediaUploader):
    """Test client wired to the in-memory database and patched media store."""
    app.dependency_overrides[get_database] = lambda: db
    app.dependency_overrides[get_media_uploader] = lambda: media_uploader
    app.dependency_overrides[get_optional_media_uploader] = lambda: media_uploader
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_product(client: TestClient):
    """Factory creating a simple product through the API."""

    def _create(**overrides: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"name": "Crisps", "category": "Snacks", "price": 2.5}
        payload.update(overrides)
        response = client.post("/api/products", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create
