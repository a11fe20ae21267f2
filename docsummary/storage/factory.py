from botocore.exceptions import BotoCoreError

from docsummary.config.settings import Settings
from docsummary.logging.logger import Log
from docsummary.storage.fallback_store import FallbackBlobStore
from docsummary.storage.local_store import LocalBlobStore
from docsummary.storage.s3_store import S3BlobStore, create_s3_client


class BlobStoreFactory:
    """Creates the blob store stack described by settings.

    An object store that cannot even be constructed (e.g. a malformed
    endpoint) leaves the service on local storage instead of failing startup.
    """

    @classmethod
    def create(cls, settings: Settings) -> FallbackBlobStore:
        local = LocalBlobStore(settings.uploads_dir)
        if not settings.s3_enabled:
            Log.info(f"Object storage disabled, storing uploads in {settings.uploads_dir}")
            return cls._local_only(local, settings)
        try:
            client = create_s3_client(
                endpoint=settings.s3_endpoint,
                region=settings.s3_region,
                access_key_id=settings.s3_access_key_id,
                secret_access_key=settings.s3_secret_access_key,
            )
        except (ValueError, BotoCoreError) as exc:
            Log.warning(
                f"Object storage misconfigured, storing uploads locally: {exc}",
                endpoint=settings.s3_endpoint,
            )
            return cls._local_only(local, settings)

        object_store = S3BlobStore(
            client=client,
            bucket=settings.s3_bucket,
            endpoint=settings.s3_endpoint,
            public_url=settings.s3_public_url,
            presign_ttl_seconds=settings.s3_presign_ttl_seconds,
            download_timeout_seconds=settings.s3_download_timeout_seconds,
        )
        Log.info("Object storage enabled", bucket=settings.s3_bucket)
        return FallbackBlobStore(
            local,
            object_store,
            download_timeout_seconds=settings.s3_download_timeout_seconds,
        )

    @staticmethod
    def _local_only(local: LocalBlobStore, settings: Settings) -> FallbackBlobStore:
        return FallbackBlobStore(
            local,
            download_timeout_seconds=settings.s3_download_timeout_seconds,
        )
