"""
Category bookkeeping.

Products reference categories by name. Each category keeps a
``product_count`` so that creation on first use and removal after the
last product are single atomic document operations.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from ..models.category import CategoryDocument

logger = logging.getLogger(__name__)


async def next_position(db: AsyncIOMotorDatabase) -> int:
    """Position after the current last category, or 0 when there are none."""
    last = await db.categories.find_one({}, sort=[("position", -1)])
    if last is None:
        return 0
    return int(last.get("position", 0)) + 1


async def acquire_category(db: AsyncIOMotorDatabase, name: str) -> Dict[str, Any]:
    """
    Find-or-create a category and count one more product against it

    The upsert relies on the unique index on ``name``: when two requests
    create the same new category at once, the loser gets a duplicate key
    error and retries as a plain increment.
    """
    position = await next_position(db)
    defaults = CategoryDocument(
        name=name,
        position=position,
        created_at=datetime.now(timezone.utc),
    ).model_dump(exclude={"id", "name", "product_count"})

    for attempt in range(2):
        try:
            category = await db.categories.find_one_and_update(
                {"name": name},
                {"$inc": {"product_count": 1}, "$setOnInsert": defaults},
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except DuplicateKeyError:
            if attempt:
                raise
            continue
        if category.get("product_count") == 1:
            logger.info(f"Category created: {name} (position {position})")
        return category


async def release_category(db: AsyncIOMotorDatabase, name: str) -> bool:
    """
    Count one product less against a category, removing it at zero

    The delete only matches while the count is still zero, so a product
    added concurrently keeps the category alive.

    Returns:
        True if the category was removed
    """
    await db.categories.update_one({"name": name}, {"$inc": {"product_count": -1}})
    result = await db.categories.delete_one({"name": name, "product_count": {"$lte": 0}})
    if result.deleted_count:
        logger.info(f"Category removed after last product: {name}")
        return True
    return False


async def list_categories(db: AsyncIOMotorDatabase) -> List[Dict[str, Any]]:
    cursor = db.categories.find({}).sort([("position", 1), ("name", 1)])
    return await cursor.to_list(length=None)


async def reorder_categories(db: AsyncIOMotorDatabase, names: List[str]) -> int:
    """
    Set each named category's position to its index in ``names``

    Unknown names are skipped.

    Returns:
        Number of categories that matched
    """
    matched = 0
    for position, name in enumerate(names):
        result = await db.categories.update_one({"name": name}, {"$set": {"position": position}})
        matched += result.matched_count
    logger.info(f"Categories reordered: {matched}/{len(names)} matched")
    return matched


async def verify_category_exists(db: AsyncIOMotorDatabase, name: str) -> Dict[str, Any]:
    category = await db.categories.find_one({"name": name})
    if not category:
        raise HTTPException(status_code=404, detail=f"Category {name} not found")
    return category


async def rename_category(db: AsyncIOMotorDatabase, old_name: str, new_name: str) -> int:
    """
    Rename a category and every product that references it

    The category document is renamed first so the unique index decides
    conflicts before any product is touched.

    Returns:
        Number of products moved to the new name

    Raises:
        HTTPException: 404 if the category is missing, 409 if ``new_name`` is taken
    """
    await verify_category_exists(db, old_name)
    if new_name == old_name:
        return 0

    if await db.categories.find_one({"name": new_name}):
        raise HTTPException(status_code=409, detail=f"Category {new_name} already exists")

    try:
        result = await db.categories.update_one({"name": old_name}, {"$set": {"name": new_name}})
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail=f"Category {new_name} already exists")
    if not result.matched_count:
        raise HTTPException(status_code=404, detail=f"Category {old_name} not found")

    products = await db.products.update_many(
        {"category": old_name},
        {"$set": {"category": new_name, "updated_at": datetime.now(timezone.utc)}},
    )
    logger.info(f"Category renamed: {old_name} -> {new_name} ({products.modified_count} products)")
    return products.modified_count


async def delete_category(db: AsyncIOMotorDatabase, name: str) -> int:
    """
    Delete a category together with all of its products

    Returns:
        Number of products deleted
    """
    result = await db.categories.delete_one({"name": name})
    if not result.deleted_count:
        raise HTTPException(status_code=404, detail=f"Category {name} not found")

    products = await db.products.delete_many({"category": name})
    logger.info(f"Category deleted: {name} ({products.deleted_count} products)")
    return products.deleted_count
