from .products import router as products_router
from .categories import router as categories_router
from .media import router as media_router

__all__ = [
    "products_router",
    "categories_router",
    "media_router"
]
