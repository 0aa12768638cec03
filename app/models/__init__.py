"""
Models package for database document structures.
These models represent how data is stored in MongoDB.
"""
from .product import ProductDocument, ProductKind, VariantDocument
from .category import CategoryDocument

__all__ = [
    # Product models
    "ProductDocument",
    "ProductKind",
    "VariantDocument",

    # Category models
    "CategoryDocument"
]
