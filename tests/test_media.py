"""Tests for the Cloudinary upload adapter and POST /api/upload."""

import io

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from starlette.datastructures import Headers, UploadFile

from app.config.settings import settings
from app.main import app
from app.services.media import MediaUploader, MediaUploadError
from conftest import MEDIA_HOST, FakeCloudinaryUpload


def image_file(content: bytes, content_type: str = "image/png", filename: str = "image.png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


class TestUploadEndpoint:
    """Tests for POST /api/upload."""

    def test_upload_data_uri(self, client: TestClient, fake_upload: FakeCloudinaryUpload) -> None:
        response = client.post("/api/upload", json={"data": "data:image/png;base64,iVBORw0KGgo="})
        assert response.status_code == 200
        assert response.json()["url"].startswith(MEDIA_HOST)
        assert fake_upload.calls[0]["payload"] == "data:image/png;base64,iVBORw0KGgo="

    def test_missing_data(self, client: TestClient) -> None:
        response = client.post("/api/upload", json={})
        assert response.status_code == 400

    def test_store_failure(self, client: TestClient, monkeypatch: pytest.MonkeyPatch) -> None:
        def broken(payload, **options):
            raise RuntimeError("store unavailable")

        monkeypatch.setattr("cloudinary.uploader.upload", broken)
        response = client.post("/api/upload", json={"data": "iVBORw0KGgo="})
        assert response.status_code == 500
        assert "Failed to upload" in response.json()["message"]

    def test_not_configured(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(settings, "cloudinary_cloud_name", None)
        response = TestClient(app).post("/api/upload", json={"data": "iVBORw0KGgo="})
        assert response.status_code == 503


class TestMediaUploader:
    """Unit tests for MediaUploader."""

    @pytest.mark.asyncio
    async def test_raw_base64_gets_data_uri_prefix(
        self, media_uploader: MediaUploader, fake_upload: FakeCloudinaryUpload
    ) -> None:
        await media_uploader.upload_data("iVBORw0KGgo=")
        call = fake_upload.calls[0]
        assert call["payload"] == "data:image/jpeg;base64,iVBORw0KGgo="
        assert call["options"]["folder"] == "products"

    @pytest.mark.asyncio
    async def test_upload_files_keeps_input_order(
        self, media_uploader: MediaUploader, fake_upload: FakeCloudinaryUpload
    ) -> None:
        fake_upload.delays[b"first"] = 0.2
        urls = await media_uploader.upload_files([image_file(b"first"), image_file(b"second")])
        assert urls == [f"{MEDIA_HOST}/first", f"{MEDIA_HOST}/second"]

    @pytest.mark.asyncio
    async def test_one_failure_fails_batch(
        self, media_uploader: MediaUploader, fake_upload: FakeCloudinaryUpload
    ) -> None:
        fake_upload.fail_on = b"second"
        with pytest.raises(MediaUploadError):
            await media_uploader.upload_files([image_file(b"first"), image_file(b"second")])

    @pytest.mark.asyncio
    async def test_rejects_non_image(self, media_uploader: MediaUploader) -> None:
        with pytest.raises(HTTPException) as exc_info:
            await media_uploader.read_file(image_file(b"%PDF", "application/pdf", "doc.pdf"))
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_rejects_oversized_file(self, fake_upload: FakeCloudinaryUpload) -> None:
        uploader = MediaUploader("demo", "key", "secret", max_size_mb=0.001)
        with pytest.raises(HTTPException) as exc_info:
            await uploader.upload_file(image_file(b"x" * 2048))
        assert exc_info.value.status_code == 400
        assert fake_upload.calls == []

    @pytest.mark.asyncio
    async def test_empty_batch(self, media_uploader: MediaUploader) -> None:
        assert await media_uploader.upload_files([]) == []

    @pytest.mark.asyncio
    async def test_invalid_file_stops_whole_batch_before_upload(
        self, media_uploader: MediaUploader, fake_upload: FakeCloudinaryUpload
    ) -> None:
        files = [image_file(b"first"), image_file(b"notes", "text/plain", "notes.txt")]
        with pytest.raises(HTTPException) as exc_info:
            await media_uploader.upload_files(files)
        assert exc_info.value.status_code == 400
        assert fake_upload.calls == []

    @pytest.mark.asyncio
    async def test_remote_url_passed_through(
        self, media_uploader: MediaUploader, fake_upload: FakeCloudinaryUpload
    ) -> None:
        await media_uploader.upload_data("https://images.example/cola.png")
        assert fake_upload.calls[0]["payload"] == "https://images.example/cola.png"
