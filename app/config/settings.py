"""
Application configuration settings.
Handles environment variables and application-wide settings.
"""
from typing import List, Optional
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Application settings
    app_name: str = Field(default="Catalog API")
    app_version: str = Field(default="1.0.0")
    app_description: str = Field(
        default="Product catalog backend with categories, variants and hosted images"
    )
    debug: bool = Field(default=False)

    # Server settings
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000)
    reload: bool = Field(default=False)

    # Database settings
    mongodb_url: str = Field(
        default="mongodb://localhost:27017",
        validation_alias=AliasChoices("MONGODB_URI", "MONGODB_URL"),
    )
    database_name: str = Field(default="catalog_db")

    # MongoDB connection settings
    server_selection_timeout_ms: int = Field(
        default=30000, validation_alias="MONGODB_SERVER_SELECTION_TIMEOUT_MS"
    )
    connect_timeout_ms: int = Field(default=30000, validation_alias="MONGODB_CONNECT_TIMEOUT_MS")
    socket_timeout_ms: int = Field(default=30000, validation_alias="MONGODB_SOCKET_TIMEOUT_MS")
    max_pool_size: int = Field(default=10, validation_alias="MONGODB_MAX_POOL_SIZE")
    min_pool_size: int = Field(default=1, validation_alias="MONGODB_MIN_POOL_SIZE")
    retry_writes: bool = Field(default=True, validation_alias="MONGODB_RETRY_WRITES")
    direct_connection: bool = Field(default=False, validation_alias="MONGODB_DIRECT_CONNECTION")

    # Media store (Cloudinary) credentials
    cloudinary_cloud_name: Optional[str] = Field(default=None)
    cloudinary_api_key: Optional[str] = Field(default=None)
    cloudinary_api_secret: Optional[str] = Field(default=None)
    cloudinary_folder: str = Field(default="products")
    max_image_size_mb: float = Field(default=10.0, gt=0)

    # CORS
    cors_origins: List[str] = Field(default=["*"])

    # Logging settings
    log_level: str = Field(default="INFO")

    @property
    def media_configured(self) -> bool:
        return bool(
            self.cloudinary_cloud_name and self.cloudinary_api_key and self.cloudinary_api_secret
        )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
