"""
Media upload schemas.
"""
from pydantic import BaseModel, Field


class UploadRequest(BaseModel):
    """Base64 or data-URI encoded image."""
    data: str = Field(..., min_length=1, description="Encoded image payload")


class UploadResponse(BaseModel):
    """Hosted URL of the uploaded image."""
    url: str = Field(..., description="Secure URL of the uploaded image")
