"""
Image upload endpoint.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException

from ..schemas import UploadRequest, UploadResponse
from ..services.media import MediaUploader
from ..utils.dependencies import get_media_uploader

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Media"])


@router.post("/upload", status_code=200, response_model=UploadResponse)
async def upload_image(request: UploadRequest, uploader: MediaUploader = Depends(get_media_uploader)):
    """Upload a base64 or data-URI encoded image and return its hosted URL"""
    try:
        url = await uploader.upload_data(request.data)
        return UploadResponse(url=url)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to upload image: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to upload image: {str(e)}")
