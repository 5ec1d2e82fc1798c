"""
Storage adapter - S3-compatible object storage for the media library.

Provides:
- Object upload with content type
- Object deletion
- Public URL construction

Works against AWS S3 or any S3-compatible endpoint (S3_ENDPOINT_URL).
"""

import functools
import logging
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...config.settings import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when an object cannot be written."""


class StorageAdapter:
    """
    Adapter for S3 object storage.

    Handles:
    - put_object for uploads
    - delete_object for cleanup
    - Public URL building from MEDIA_PUBLIC_BASE_URL
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
    ):
        """
        Initialize storage adapter.

        Args:
            bucket: Bucket holding media objects
            region: AWS region
            endpoint_url: Custom S3 endpoint (MinIO, R2, ...)
            aws_access_key_id: AWS access key
            aws_secret_access_key: AWS secret key
        """
        self.bucket = bucket or settings.MEDIA_BUCKET
        self.region = region or settings.AWS_REGION
        self.endpoint_url = endpoint_url or settings.S3_ENDPOINT_URL or None
        self.aws_access_key_id = aws_access_key_id or settings.AWS_ACCESS_KEY_ID
        self.aws_secret_access_key = aws_secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        self._client = None

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            kwargs = {"region_name": self.region, "endpoint_url": self.endpoint_url}
            if self.aws_access_key_id and self.aws_secret_access_key:
                kwargs["aws_access_key_id"] = self.aws_access_key_id
                kwargs["aws_secret_access_key"] = self.aws_secret_access_key
            # Otherwise default credentials (IAM role, environment, etc.)
            self._client = boto3.client("s3", **kwargs)
        return self._client

    def upload(self, key: str, data: bytes, content_type: str) -> str:
        """
        Store an object.

        Args:
            key: Object key (file_path on the media row)
            data: File bytes
            content_type: MIME type served back to browsers

        Returns:
            The key

        Raises:
            StorageError: If the object could not be written
        """
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                CacheControl="public, max-age=3600",
            )
        except (ClientError, BotoCoreError) as e:
            logger.error("Failed to upload %s to %s: %s", key, self.bucket, e)
            raise StorageError(str(e)) from e

        logger.info("Uploaded %s (%d bytes) to %s", key, len(data), self.bucket)
        return key

    def delete(self, key: str) -> bool:
        """Remove an object. Failures are logged, not raised."""
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
            return True
        except (ClientError, BotoCoreError) as e:
            logger.warning("Failed to delete %s from %s: %s", key, self.bucket, e)
            return False

    def public_url(self, key: str) -> str:
        return f"{settings.media_base_url.rstrip('/')}/{key}"


@functools.lru_cache(maxsize=1)
def get_storage_adapter() -> StorageAdapter:
    """Get or create storage adapter singleton."""
    return StorageAdapter()
