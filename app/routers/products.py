"""
Product endpoints.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pymongo import ReturnDocument

from ..config.database import get_database
from ..schemas import ProductResponse, SuccessResponse
from ..services.categories import acquire_category, release_category
from ..services.media import MediaUploader, MediaUploadError
from ..services.products import (
    ProductSubmission,
    assign_uploads,
    build_product_document,
    read_submission,
)
from ..utils.dependencies import get_optional_media_uploader, verify_product_exists
from ..utils.serializers import serialize_doc

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])


async def upload_submission_files(
    submission: ProductSubmission,
    uploader: Optional[MediaUploader],
) -> None:
    """Upload the submitted files and splice their URLs into the payload."""
    if not submission.files:
        return
    if uploader is None:
        raise HTTPException(
            status_code=503,
            detail="Media store not configured. Please set the Cloudinary credentials."
        )
    try:
        urls = await uploader.upload_files(submission.files)
    except MediaUploadError as e:
        raise HTTPException(status_code=500, detail=f"Failed to upload images: {e}")
    assign_uploads(submission.payload, submission.slots, urls)


@router.get("", status_code=200, response_model=List[ProductResponse])
async def list_products(db=Depends(get_database)):
    """List all products"""
    try:
        cursor = db.products.find({}).sort("created_at", 1)
        products = await cursor.to_list(length=None)
        return [ProductResponse.model_validate(serialize_doc(p)) for p in products]
    except Exception as e:
        logger.error(f"Failed to fetch products: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch products: {str(e)}")


@router.get("/{product_id}", status_code=200, response_model=ProductResponse)
async def get_product(product_id: str, db=Depends(get_database)):
    """Get a specific product by ID"""
    try:
        product = await verify_product_exists(product_id, db)
        return ProductResponse.model_validate(serialize_doc(product))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to fetch product {product_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch product: {str(e)}")


@router.post("", status_code=201, response_model=ProductResponse)
async def create_product(
    request: Request,
    db=Depends(get_database),
    uploader: Optional[MediaUploader] = Depends(get_optional_media_uploader),
):
    """
    Create a product from a JSON body or a multipart form with images

    Files are uploaded before anything is written. The product's category
    is created if this is its first product.
    """
    try:
        submission = await read_submission(request)
        await upload_submission_files(submission, uploader)
        payload = submission.payload

        await acquire_category(db, payload.category)
        try:
            product_doc = build_product_document(payload, datetime.now(timezone.utc))
            result = await db.products.insert_one(product_doc)
        except Exception:
            await release_category(db, payload.category)
            raise
        created_product = await db.products.find_one({"_id": result.inserted_id})

        logger.info(f"Product created: {payload.name} (ID: {result.inserted_id})")
        return ProductResponse.model_validate(serialize_doc(created_product))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to create product: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to create product: {str(e)}")


@router.put("/{product_id}", status_code=200, response_model=ProductResponse)
async def update_product(
    product_id: str,
    request: Request,
    db=Depends(get_database),
    uploader: Optional[MediaUploader] = Depends(get_optional_media_uploader),
):
    """
    Replace a product's fields

    Images the caller wants to keep must be resubmitted alongside any new
    files; anything not sent is dropped.
    """
    try:
        existing = await verify_product_exists(product_id, db)
        submission = await read_submission(request)
        await upload_submission_files(submission, uploader)
        payload = submission.payload

        old_category = existing.get("category")
        category_changed = payload.category != old_category
        if category_changed:
            await acquire_category(db, payload.category)

        try:
            product_doc = build_product_document(
                payload, datetime.now(timezone.utc), created_at=existing.get("created_at")
            )
            updated_product = await db.products.find_one_and_update(
                {"_id": existing["_id"]},
                {"$set": product_doc},
                return_document=ReturnDocument.AFTER,
            )
        except Exception:
            if category_changed:
                await release_category(db, payload.category)
            raise
        if updated_product is None:
            if category_changed:
                await release_category(db, payload.category)
            raise HTTPException(status_code=404, detail=f"Product {product_id} not found")

        if category_changed and old_category:
            await release_category(db, old_category)

        logger.info(f"Product updated: {payload.name} (ID: {product_id})")
        return ProductResponse.model_validate(serialize_doc(updated_product))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update product {product_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to update product: {str(e)}")


@router.delete("/{product_id}", status_code=200, response_model=SuccessResponse)
async def delete_product(product_id: str, db=Depends(get_database)):
    """Delete a product, and its category if it was the last product in it"""
    try:
        product = await verify_product_exists(product_id, db)

        result = await db.products.delete_one({"_id": product["_id"]})
        if result.deleted_count == 0:
            raise HTTPException(status_code=404, detail=f"Product {product_id} not found")

        category_removed = await release_category(db, product["category"])

        logger.info(f"Product deleted: {product.get('name')} (ID: {product_id})")
        return SuccessResponse(
            message="Product deleted successfully",
            data={"id": product_id, "category": product["category"], "category_removed": category_removed}
        )

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete product {product_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete product: {str(e)}")
