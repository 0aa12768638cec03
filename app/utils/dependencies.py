"""
FastAPI dependencies for media access and common validations
"""
from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from bson import ObjectId
from typing import Dict, Any, Optional
import logging

from ..config.settings import get_settings
from ..services.media import MediaUploader

logger = logging.getLogger(__name__)

_uploader: Optional[MediaUploader] = None


def get_media_uploader() -> MediaUploader:
    """
    Dependency to get the configured media uploader

    Raises:
        HTTPException: If media store credentials are not configured
    """
    global _uploader
    settings = get_settings()
    if not settings.media_configured:
        raise HTTPException(
            status_code=503,
            detail="Media store not configured. Please set the Cloudinary credentials."
        )
    if _uploader is None:
        _uploader = MediaUploader(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
            folder=settings.cloudinary_folder,
            max_size_mb=settings.max_image_size_mb,
        )
    return _uploader


def parse_object_id(object_id: str) -> Optional[ObjectId]:
    """Convert a string to ObjectId, or None if it is not a valid ID"""
    if not ObjectId.is_valid(object_id):
        return None
    return ObjectId(object_id)


async def verify_product_exists(product_id: str, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Verify that a product exists in the database

    Args:
        product_id: Product ID to verify
        db: Database instance

    Returns:
        Product document if found

    Raises:
        HTTPException: 404 if the ID is malformed or matches no product
    """
    object_id = parse_object_id(product_id)

    product = await db.products.find_one({"_id": object_id}) if object_id else None
    if not product:
        raise HTTPException(
            status_code=404,
            detail=f"Product {product_id} not found"
        )

    return product


def get_optional_media_uploader() -> Optional[MediaUploader]:
    """
    Dependency for endpoints where uploads are optional

    Returns:
        The media uploader, or None when no credentials are configured
    """
    if not get_settings().media_configured:
        return None
    return get_media_uploader()
