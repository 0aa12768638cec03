"""
Cloudinary media upload adapter.
Uploads encoded strings or multipart files and returns hosted URLs.
"""
import asyncio
import logging
from typing import List, Sequence

import cloudinary
import cloudinary.uploader
from fastapi import HTTPException, UploadFile

logger = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")


class MediaUploadError(Exception):
    """The media store rejected or failed an upload."""


class MediaUploader:
    """Uploads images to Cloudinary and hands back their secure URLs."""

    def __init__(
        self,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        folder: str = "products",
        max_size_mb: float = 10.0,
    ):
        cloudinary.config(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            secure=True
        )
        self.folder = folder
        self.max_size_mb = max_size_mb
        logger.info(f"Cloudinary configured for cloud: {cloud_name}")

    async def _upload(self, payload, label: str) -> str:
        try:
            result = await asyncio.to_thread(
                cloudinary.uploader.upload,
                payload,
                folder=self.folder,
                resource_type="image",
            )
        except Exception as e:
            logger.error(f"Failed to upload {label}: {e}")
            raise MediaUploadError(f"Failed to upload {label}: {e}") from e

        url = result.get("secure_url") or result.get("url")
        if not url:
            raise MediaUploadError(f"Media store returned no URL for {label}")
        logger.info(f"Image uploaded: {result.get('public_id', label)}")
        return url

    async def upload_data(self, data: str) -> str:
        """
        Upload a base64 string, data URI or remote image URL

        Raw base64 is sent as a JPEG data URI; ``data:`` and ``http(s)://``
        references are passed to Cloudinary as they are.
        """
        if not data.startswith(("data:", "http://", "https://")):
            data = f"data:image/jpeg;base64,{data}"
        return await self._upload(data, "encoded image")

    async def read_file(self, upload: UploadFile) -> bytes:
        """Read and validate one multipart image file."""
        if upload.content_type not in ALLOWED_IMAGE_TYPES:
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported image type for {upload.filename}: {upload.content_type}"
            )
        content = await upload.read()
        size_mb = len(content) / 1024 / 1024
        if size_mb > self.max_size_mb:
            raise HTTPException(
                status_code=400,
                detail=f"Image {upload.filename} is too large: {size_mb:.1f}MB (max {self.max_size_mb:g}MB)"
            )
        return content

    async def upload_file(self, upload: UploadFile) -> str:
        content = await self.read_file(upload)
        return await self._upload(content, upload.filename or "file")

    async def upload_files(self, uploads: Sequence[UploadFile]) -> List[str]:
        """
        Validate every file, then upload them all concurrently

        Nothing is sent to the media store unless every file passes validation.

        Returns:
            URLs in the same order as ``uploads``, whatever order the
            uploads finish in. Any failure fails the whole batch.
        """
        if not uploads:
            return []
        contents = [await self.read_file(upload) for upload in uploads]
        return list(await asyncio.gather(
            *(self._upload(content, upload.filename or "file") for content, upload in zip(contents, uploads))
        ))
