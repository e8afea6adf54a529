import io
import logging
from datetime import timedelta
from urllib.parse import quote

import urllib3
from minio import Minio
from minio.error import MinioException

from cloudvault.config import (
    STORAGE_ENDPOINT, STORAGE_ACCESS_KEY, STORAGE_SECRET_KEY, STORAGE_BUCKET, STORAGE_SECURE, STORAGE_PUBLIC_URL,
    STORAGE_TIMEOUT, STORAGE_RETRIES,
)
from cloudvault.errors import UpstreamError

logger = logging.getLogger(__name__)

STORAGE_ERRORS = (MinioException, urllib3.exceptions.HTTPError, OSError)


def build_http_client(timeout: float = STORAGE_TIMEOUT, retries: int = STORAGE_RETRIES) -> urllib3.PoolManager:
    """Connection pool for the storage client with bounded timeouts and retries."""
    return urllib3.PoolManager(
        timeout=urllib3.Timeout(connect=timeout, read=timeout),
        retries=urllib3.Retry(total=retries, backoff_factor=0.2, status_forcelist=[500, 502, 503, 504]),
    )


class ObjectStore:
    """Blob storage keyed by path, backed by an S3 compatible bucket."""

    def __init__(self, client: Minio, bucket: str, public_base_url: str):
        self.client = client
        self.bucket = bucket
        self.public_base_url = public_base_url.rstrip("/")

    @classmethod
    def from_env(cls) -> "ObjectStore":
        client = Minio(
            STORAGE_ENDPOINT,
            access_key=STORAGE_ACCESS_KEY,
            secret_key=STORAGE_SECRET_KEY,
            secure=STORAGE_SECURE,
            http_client=build_http_client(),
        )
        return cls(client, STORAGE_BUCKET, STORAGE_PUBLIC_URL)

    def ensure_bucket(self):
        try:
            if not self.client.bucket_exists(self.bucket):
                self.client.make_bucket(self.bucket)
                logger.info("Created bucket %s", self.bucket)
        except STORAGE_ERRORS as e:
            raise UpstreamError(f"Storage bucket setup failed: {e}") from e

    def upload(self, key: str, data: bytes, content_type: str = "application/octet-stream") -> str:
        try:
            self.client.put_object(self.bucket, key, io.BytesIO(data), length=len(data), content_type=content_type)
        except STORAGE_ERRORS as e:
            raise UpstreamError(f"Storage upload failed: {e}") from e
        return key

    def remove(self, key: str):
        try:
            self.client.remove_object(self.bucket, key)
        except STORAGE_ERRORS as e:
            raise UpstreamError(f"Storage delete failed: {e}") from e

    def public_url(self, key: str) -> str:
        return f"{self.public_base_url}/{self.bucket}/{quote(key)}"

    def signed_url(self, key: str, expires_in: int) -> str:
        try:
            return self.client.presigned_get_object(self.bucket, key, expires=timedelta(seconds=expires_in))
        except STORAGE_ERRORS as e:
            raise UpstreamError(f"Signed URL generation failed: {e}") from e


_store = None


def get_object_store() -> ObjectStore:
    global _store
    if _store is None:
        _store = ObjectStore.from_env()
    return _store
