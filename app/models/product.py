"""
Product data models for database documents.
These represent the actual structure of documents stored in MongoDB.
"""
from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field

ProductKind = Literal["simple", "variant"]


class VariantDocument(BaseModel):
    """Size/price variant embedded in a product document."""
    size: str = Field(..., min_length=1, description="Size label")
    price: float = Field(..., ge=0, description="Variant price")
    images: List[str] = Field(default_factory=list, description="Variant image URLs")


class ProductDocument(BaseModel):
    """
    Product document model representing the MongoDB document structure.
    ``price`` is only set on simple products, ``variants`` only on variant products.
    """
    id: Optional[str] = Field(None, alias="_id", description="Product ID")
    name: str = Field(..., min_length=1, description="Product name")
    category: str = Field(..., min_length=1, description="Category name")
    description: Optional[str] = Field(None, description="Product description")
    kind: ProductKind = Field(..., description="Simple or variant product")
    price: Optional[float] = Field(None, ge=0, description="Price of a simple product")
    images: List[str] = Field(default_factory=list, description="Main image URLs")
    variants: List[VariantDocument] = Field(default_factory=list, description="Size/price variants")

    # Timestamps
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(populate_by_name=True)

    def to_mongo(self) -> dict:
        """Fields to write to MongoDB, without the ``_id``."""
        return self.model_dump(exclude={"id"})
