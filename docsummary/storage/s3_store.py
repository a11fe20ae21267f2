from typing import Any
from urllib.parse import quote

import boto3
import httpx
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from docsummary.logging.logger import Log
from docsummary.storage.base import BaseBlobStore
from docsummary.storage.exceptions import StorageError
from docsummary.storage.local_store import safe_blob_name
from docsummary.storage.models import ObjectRef, StorageRef


def download(url: str, timeout_seconds: float) -> bytes:
    """Fetch blob bytes over HTTP.

    Raises:
        StorageError: on transport errors or a non-2xx response.
    """
    try:
        response = httpx.get(url, timeout=timeout_seconds, follow_redirects=True)
    except httpx.HTTPError as exc:
        raise StorageError(f"Object download failed: {exc}") from exc
    if not response.is_success:
        raise StorageError(f"Object download failed with status {response.status_code}")
    return response.content


def create_s3_client(
    *,
    endpoint: str,
    region: str,
    access_key_id: str,
    secret_access_key: str,
) -> Any:
    """Build a path-style S3 client, compatible with MinIO and friends."""
    return boto3.client(
        "s3",
        endpoint_url=endpoint,
        region_name=region,
        aws_access_key_id=access_key_id,
        aws_secret_access_key=secret_access_key,
        config=Config(s3={"addressing_style": "path"}),
    )


class S3BlobStore(BaseBlobStore):
    """Stores blobs in an S3-compatible bucket."""

    def __init__(
        self,
        *,
        client: Any,
        bucket: str,
        endpoint: str,
        public_url: str = "",
        presign_ttl_seconds: int = 3600,
        download_timeout_seconds: float = 30,
    ) -> None:
        self._client = client
        self._bucket = bucket
        self._endpoint = endpoint.rstrip("/")
        self._public_url = public_url.rstrip("/")
        self._presign_ttl_seconds = presign_ttl_seconds
        self._download_timeout_seconds = download_timeout_seconds

    def store(self, data: bytes, suggested_name: str) -> ObjectRef:
        key = safe_blob_name(suggested_name)
        try:
            self._client.put_object(Bucket=self._bucket, Key=key, Body=data)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"S3 upload of '{key}' failed: {exc}") from exc
        return ObjectRef(key=key, url=self.public_url_for(key))

    def read(self, ref: StorageRef) -> bytes:
        if not isinstance(ref, ObjectRef):
            raise StorageError(f"Object store cannot read '{ref.kind}' references")
        if ref.url:
            url = ref.url
        elif ref.key:
            url = self.presign(ref.key)
        else:
            raise StorageError("Object reference has neither a URL nor a key")
        return download(url, self._download_timeout_seconds)

    def presign(self, key: str, ttl_seconds: int | None = None) -> str:
        """Sign a GET URL for ``key``; fall back to the public URL if signing fails."""
        expires_in = ttl_seconds if ttl_seconds is not None else self._presign_ttl_seconds
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self._bucket, "Key": key},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as exc:
            Log.warning(f"Presigning failed, using public URL: {exc}", key=key)
        url = self.public_url_for(key)
        if url is None:
            raise StorageError(
                "No presigner available and no public S3 endpoint configured"
            )
        return url

    def public_url_for(self, key: str) -> str | None:
        if self._public_url:
            return f"{self._public_url}/{quote(key)}"
        if self._endpoint:
            return f"{self._endpoint}/{self._bucket}/{quote(key)}"
        return None
