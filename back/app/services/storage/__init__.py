# Local application imports
from app.services.storage.s3_service import S3Service, get_storage_service

__all__ = ["S3Service", "get_storage_service"]
