"""
Category endpoints.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..config.database import get_database
from ..schemas import (
    CategoryRenamedResponse,
    CategoryResponse,
    RenameCategoryRequest,
    ReorderCategoriesRequest,
    SuccessResponse,
)
from ..services import categories as category_service
from ..utils.serializers import serialize_docs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/categories", tags=["Categories"])


@router.get("", status_code=200, response_model=List[CategoryResponse])
async def list_categories(db=Depends(get_database)):
    """List categories in display order"""
    try:
        categories = await category_service.list_categories(db)
        return [CategoryResponse.model_validate(c) for c in serialize_docs(categories)]
    except Exception as e:
        logger.error(f"Failed to fetch categories: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to fetch categories: {str(e)}")


# Declared before "/{name:path}" so "order" is not taken as a category name
@router.put("/order", status_code=200, response_model=SuccessResponse)
async def reorder_categories(request: ReorderCategoriesRequest, db=Depends(get_database)):
    """Set category positions from an ordered list of names"""
    try:
        matched = await category_service.reorder_categories(db, request.ordered_categories)
        return SuccessResponse(
            message="Category order updated",
            data={"matched": matched, "requested": len(request.ordered_categories)}
        )
    except Exception as e:
        logger.error(f"Failed to reorder categories: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to reorder categories: {str(e)}")


@router.put("/{name:path}", status_code=200, response_model=CategoryRenamedResponse)
async def rename_category(name: str, request: RenameCategoryRequest, db=Depends(get_database)):
    """Rename a category and move its products to the new name"""
    try:
        updated = await category_service.rename_category(db, name, request.new_name)
        return CategoryRenamedResponse(previous_name=name, name=request.new_name, products_updated=updated)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to rename category {name}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to rename category: {str(e)}")


@router.delete("/{name:path}", status_code=200, response_model=SuccessResponse)
async def delete_category(name: str, db=Depends(get_database)):
    """Delete a category and every product in it"""
    try:
        deleted = await category_service.delete_category(db, name)
        return SuccessResponse(
            message="Category deleted successfully",
            data={"name": name, "products_deleted": deleted}
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to delete category {name}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to delete category: {str(e)}")
