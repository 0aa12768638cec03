"""
Product API schemas for request/response validation.
These models define the structure of data sent to and from the API.
"""
from typing import Any, List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from ..models.product import ProductKind


def _fold_single_image(data: Any, key: str) -> Any:
    """Move a single ``key`` image reference to the front of ``images``."""
    if isinstance(data, dict) and data.get(key):
        data = dict(data)
        single = data.pop(key)
        images = list(data.get("images") or [])
        if single not in images:
            images.insert(0, single)
        data["images"] = images
    return data


# Request Schemas

class VariantPayload(BaseModel):
    """A size/price variant as submitted by the client."""
    size: str = Field(..., min_length=1, description="Size label")
    price: float = Field(..., ge=0, description="Variant price")
    images: List[str] = Field(default_factory=list, description="Retained variant image URLs")

    @model_validator(mode="before")
    @classmethod
    def fold_image(cls, data: Any) -> Any:
        return _fold_single_image(data, "image")


class ProductPayload(BaseModel):
    """Request schema shared by product create and update.

    ``kind`` is inferred when omitted: a payload with variants is a variant
    product, anything else is a simple product. Simple products need a price
    and no variants; variant products need at least one variant and no
    top-level price.
    """
    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    category: str = Field(..., min_length=1, max_length=100, description="Category name")
    description: Optional[str] = Field(None, max_length=2000, description="Product description")
    kind: Optional[ProductKind] = Field(None, description="Simple or variant product")
    price: Optional[float] = Field(None, ge=0, description="Price of a simple product")
    images: List[str] = Field(default_factory=list, description="Retained main image URLs")
    variants: List[VariantPayload] = Field(default_factory=list, description="Size/price variants")

    @model_validator(mode="before")
    @classmethod
    def fold_img(cls, data: Any) -> Any:
        return _fold_single_image(data, "img")

    @field_validator("name", "category")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @model_validator(mode="after")
    def check_kind(self) -> "ProductPayload":
        if self.kind is None:
            self.kind = "variant" if self.variants else "simple"
        if self.kind == "simple":
            if self.price is None:
                raise ValueError("price is required for simple products")
            if self.variants:
                raise ValueError("simple products cannot have variants")
        else:
            if not self.variants:
                raise ValueError("variant products need at least one variant")
            if self.price is not None:
                raise ValueError("variant products are priced per variant")
        return self


class ImageSlot(BaseModel):
    """Where an uploaded file goes: the main gallery or one variant."""
    target: Literal["main", "variant"] = Field(..., description="Destination of the upload")
    index: Optional[int] = Field(None, ge=0, description="Variant index when target is 'variant'")

    @model_validator(mode="after")
    def check_index(self) -> "ImageSlot":
        if self.target == "variant" and self.index is None:
            raise ValueError("variant slots need an index")
        if self.target == "main":
            self.index = None
        return self


# Response Schemas

class VariantResponse(BaseModel):
    """Response schema for an embedded variant."""
    size: str
    price: float
    images: List[str] = Field(default_factory=list)

    @computed_field
    @property
    def image(self) -> Optional[str]:
        return self.images[0] if self.images else None


class ProductResponse(BaseModel):
    """Response schema for a single product."""
    id: str = Field(..., alias="_id", description="Product ID")
    name: str = Field(..., description="Product name")
    category: str = Field(..., description="Category name")
    description: Optional[str] = Field(None, description="Product description")
    kind: ProductKind = Field(default="simple", description="Simple or variant product")
    price: Optional[float] = Field(None, description="Price of a simple product")
    images: List[str] = Field(default_factory=list, description="Main image URLs")
    variants: List[VariantResponse] = Field(default_factory=list, description="Size/price variants")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(populate_by_name=True)

    @computed_field
    @property
    def image(self) -> Optional[str]:
        return self.images[0] if self.images else None
