"""
Category data model for database documents.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class CategoryDocument(BaseModel):
    """
    Category document as stored in MongoDB.

    ``product_count`` is the number of products referencing the category by
    name; the category is removed once it drops to zero.
    """
    id: Optional[str] = Field(None, alias="_id", description="Category ID")
    name: str = Field(..., min_length=1, description="Unique category name")
    position: int = Field(default=0, ge=0, description="Manual ordering position")
    product_count: int = Field(default=0, ge=0, description="Products referencing this category")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")

    model_config = ConfigDict(populate_by_name=True)
