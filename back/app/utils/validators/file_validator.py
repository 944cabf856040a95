# Third-party imports
from fastapi import HTTPException, UploadFile, status

# Local application imports
from app.settings import settings


def validate_photo_upload(file: UploadFile) -> None:
    """Reject anything that is not a JPEG/PNG under the configured size limit."""
    if file.content_type not in settings.ALLOWED_PHOTO_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only JPEG and PNG photos are allowed",
        )

    if file.size is not None and file.size > settings.MAX_PHOTO_SIZE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File size exceeds {settings.MAX_PHOTO_SIZE // (1024 * 1024)}MB limit",
        )
