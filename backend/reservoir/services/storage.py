from __future__ import annotations
import asyncio
import io
from typing import Protocol
from minio import Minio
from minio.error import S3Error
import structlog

log = structlog.get_logger()


class BlobStore(Protocol):
    async def upload(self, key: str, data: bytes, content_type: str) -> None: ...
    async def get(self, key: str) -> tuple[bytes, str]: ...
    async def delete(self, key: str) -> None: ...


def _parse_endpoint(ep: str) -> tuple[str, bool]:
    # Return (host:port, secure)
    secure = ep.startswith("https://")
    host = ep.replace("http://", "").replace("https://", "")
    return host, secure


class MinioBlobStore:
    """
    Photo bucket on MinIO (speaks the S3 API).
    The minio client is blocking, so every call runs in a worker thread.
    """

    def __init__(self, client: Minio, bucket: str):
        self._client = client
        self.bucket = bucket

    @classmethod
    def from_endpoint(cls, endpoint: str, access_key: str, secret_key: str, bucket: str) -> "MinioBlobStore":
        host, secure = _parse_endpoint(endpoint)
        return cls(Minio(host, access_key=access_key, secret_key=secret_key, secure=secure), bucket)

    def ensure_bucket(self) -> None:
        # Idempotent; a concurrent creator may win the race
        try:
            if not self._client.bucket_exists(self.bucket):
                self._client.make_bucket(self.bucket)
        except S3Error as e:
            log.warning("bucket_check_failed", bucket=self.bucket, code=e.code)

    def _put(self, key: str, data: bytes, content_type: str) -> None:
        self._client.put_object(self.bucket, key, io.BytesIO(data), length=len(data), content_type=content_type)

    def _get(self, key: str) -> tuple[bytes, str]:
        try:
            response = self._client.get_object(self.bucket, key)
        except S3Error as e:
            if e.code == "NoSuchKey":
                raise FileNotFoundError(f"Object not found: {key}")
            raise
        try:
            data = response.read()
            content_type = response.headers.get("Content-Type", "application/octet-stream")
        finally:
            response.close()
            response.release_conn()
        return data, content_type

    async def upload(self, key: str, data: bytes, content_type: str) -> None:
        await asyncio.to_thread(self._put, key, data, content_type)

    async def get(self, key: str) -> tuple[bytes, str]:
        """
        Retrieve a stored photo.
        Returns (data, content_type); raises FileNotFoundError for a missing key.
        """
        return await asyncio.to_thread(self._get, key)

    async def delete(self, key: str) -> None:
        await asyncio.to_thread(self._client.remove_object, self.bucket, key)
