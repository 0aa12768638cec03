from .settings import Settings, get_settings
from .database import DatabaseManager, ensure_indexes, get_database, get_database_manager, lifespan

__all__ = [
    "Settings",
    "get_settings",
    "DatabaseManager",
    "ensure_indexes",
    "get_database",
    "get_database_manager",
    "lifespan"
]
