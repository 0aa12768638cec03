"""
Category API schemas for request/response validation.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Request Schemas

class ReorderCategoriesRequest(BaseModel):
    """Category names in their new display order."""
    ordered_categories: List[str] = Field(..., alias="orderedCategories", description="Category names in order")

    model_config = ConfigDict(populate_by_name=True)


class RenameCategoryRequest(BaseModel):
    """Request schema for renaming a category."""
    new_name: str = Field(..., alias="newName", min_length=1, max_length=100, description="New category name")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("new_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("newName must not be blank")
        return v


# Response Schemas

class CategoryResponse(BaseModel):
    """Response schema for a single category."""
    id: str = Field(..., alias="_id", description="Category ID")
    name: str = Field(..., description="Category name")
    position: int = Field(default=0, description="Manual ordering position")
    product_count: int = Field(default=0, description="Products in this category")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = ConfigDict(populate_by_name=True)


class CategoryRenamedResponse(BaseModel):
    """Response schema for a successful rename."""
    previous_name: str = Field(..., description="Name before the rename")
    name: str = Field(..., description="Name after the rename")
    products_updated: int = Field(..., description="Products moved to the new name")
