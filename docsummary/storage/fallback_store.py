"""Storage policy: object store first, local filesystem as fallback."""

from docsummary.logging.logger import Log
from docsummary.storage.base import BaseBlobStore
from docsummary.storage.exceptions import StorageError, StorageNotConfiguredError
from docsummary.storage.local_store import LocalBlobStore
from docsummary.storage.models import LocalRef, ObjectRef, StorageRef
from docsummary.storage.s3_store import download


class FallbackBlobStore(BaseBlobStore):
    """Routes writes to the object store when configured, else to local disk.

    A failed object-store write is retried exactly once against the local
    store; callers only ever see the resulting reference. Reads dispatch on
    the reference kind.
    """

    def __init__(
        self,
        local: LocalBlobStore,
        object_store: BaseBlobStore | None = None,
        *,
        download_timeout_seconds: float = 30,
    ) -> None:
        self._local = local
        self._object_store = object_store
        self._download_timeout_seconds = download_timeout_seconds

    @property
    def object_store_enabled(self) -> bool:
        return self._object_store is not None

    def store(self, data: bytes, suggested_name: str) -> StorageRef:
        if self._object_store is not None:
            try:
                return self._object_store.store(data, suggested_name)
            except StorageError as exc:
                Log.warning(
                    f"Object store upload of '{suggested_name}' failed, "
                    f"falling back to local storage: {exc}"
                )
        return self._local.store(data, suggested_name)

    def read(self, ref: StorageRef) -> bytes:
        if isinstance(ref, LocalRef):
            return self._local.read(ref)
        if self._object_store is not None:
            return self._object_store.read(ref)
        # Records written while object storage was enabled stay readable by URL.
        if isinstance(ref, ObjectRef) and ref.url:
            return download(ref.url, self._download_timeout_seconds)
        raise StorageNotConfiguredError("Object storage is not configured")

    def presign(self, key: str, ttl_seconds: int | None = None) -> str:
        if self._object_store is None:
            raise StorageNotConfiguredError("Object storage is not configured")
        return self._object_store.presign(key, ttl_seconds)
