"""
Schemas package for API request/response validation.
These models define the structure of data sent to and from the API endpoints.
"""

# Product schemas
from .product import (
    VariantPayload,
    ProductPayload,
    ImageSlot,
    VariantResponse,
    ProductResponse
)

# Category schemas
from .category import (
    ReorderCategoriesRequest,
    RenameCategoryRequest,
    CategoryResponse,
    CategoryRenamedResponse
)

# Media schemas
from .media import UploadRequest, UploadResponse

# Common schemas
from .common import (
    HealthCheckResponse,
    RootResponse,
    ErrorResponse,
    SuccessResponse
)

__all__ = [
    # Product schemas
    "VariantPayload",
    "ProductPayload",
    "ImageSlot",
    "VariantResponse",
    "ProductResponse",

    # Category schemas
    "ReorderCategoriesRequest",
    "RenameCategoryRequest",
    "CategoryResponse",
    "CategoryRenamedResponse",

    # Media schemas
    "UploadRequest",
    "UploadResponse",

    # Common schemas
    "HealthCheckResponse",
    "RootResponse",
    "ErrorResponse",
    "SuccessResponse"
]
