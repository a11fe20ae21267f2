from abc import ABC, abstractmethod

from docsummary.storage.models import StorageRef


class BaseBlobStore(ABC):
    """Contract for raw-byte persistence backends."""

    @abstractmethod
    def store(self, data: bytes, suggested_name: str) -> StorageRef:
        """Persist bytes and return a reference that can be read back.

        Raises:
            StorageError: if the write fails.
        """

    @abstractmethod
    def read(self, ref: StorageRef) -> bytes:
        """Return the bytes behind a reference.

        Raises:
            StorageError: if the blob is missing or unreachable.
        """

    @abstractmethod
    def presign(self, key: str, ttl_seconds: int | None = None) -> str:
        """Return a time-limited access URL for an object key.

        Raises:
            StorageError: if no usable URL can be produced.
        """
