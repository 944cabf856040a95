# Standard library imports
from functools import lru_cache
from io import BytesIO
import time
from uuid import UUID

# Third-party imports
from minio import Minio

# Local application imports
from app.settings import settings

_EXTENSIONS = {"image/png": "png", "image/jpeg": "jpg", "image/jpg": "jpg"}


def get_issue_photo_key(issue_id: UUID, file_name: str) -> str:
    return f"{settings.S3_ISSUES_PREFIX}/{issue_id}/{file_name}"


class S3Service:
    def __init__(self, client: Minio | None = None):
        self.client = client or Minio(
            settings.S3_URL.replace("http://", "").replace("https://", ""),
            access_key=settings.S3_ACCESS_KEY_ID,
            secret_key=settings.S3_SECRET_ACCESS_KEY,
            secure=settings.S3_SECURE,
        )
        self.bucket_name = settings.S3_PUBLIC_BUCKET_NAME
        self._ensure_bucket_exists()

    def _ensure_bucket_exists(self) -> None:
        """Ensure the bucket exists, create if not"""
        if not self.client.bucket_exists(self.bucket_name):
            self.client.make_bucket(self.bucket_name)

    async def upload_file(self, file_data: bytes, file_key: str, content_type: str | None = None) -> str:
        """Upload file to S3 and return public URL"""
        self.client.put_object(
            self.bucket_name,
            file_key,
            BytesIO(file_data),
            len(file_data),
            content_type=content_type or "application/octet-stream",
        )

        return f"{settings.S3_URL}/{self.bucket_name}/{file_key}"

    async def upload_issue_photo(
        self,
        issue_id: UUID,
        kind: str,
        index: int,
        file_data: bytes,
        content_type: str | None,
    ) -> str:
        """
        Store a before/after photo under the issue's own prefix, e.g.
        issues/<issue id>/before_0_1718000000000.jpg
        """
        extension = _EXTENSIONS.get(content_type or "", "jpg")
        file_name = f"{kind}_{index}_{int(time.time() * 1000)}.{extension}"
        return await self.upload_file(file_data, get_issue_photo_key(issue_id, file_name), content_type)


@lru_cache
def get_storage_service() -> S3Service:
    return S3Service()
