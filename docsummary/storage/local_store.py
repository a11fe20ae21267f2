import re
from pathlib import Path

from docsummary.storage.base import BaseBlobStore
from docsummary.storage.exceptions import StorageError
from docsummary.storage.models import LocalRef, StorageRef

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_blob_name(suggested_name: str) -> str:
    """Reduce a client-supplied name to a bare, filesystem-safe file name."""
    name = Path(suggested_name.replace("\\", "/")).name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    if not name:
        raise StorageError(f"Invalid blob name: {suggested_name!r}")
    return name


class LocalBlobStore(BaseBlobStore):
    """Writes and reads blobs under a single uploads directory."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def store(self, data: bytes, suggested_name: str) -> LocalRef:
        path = self._root / safe_blob_name(suggested_name)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
        return LocalRef(path=str(path))

    def read(self, ref: StorageRef) -> bytes:
        """Read blob bytes from disk.

        Raises:
            StorageError: if the reference is not local or the file is gone.
        """
        if not isinstance(ref, LocalRef):
            raise StorageError(f"Local store cannot read '{ref.kind}' references")
        path = Path(ref.path)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise StorageError(f"File not found: {path}") from exc
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def presign(self, key: str, ttl_seconds: int | None = None) -> str:
        raise StorageError("Local storage cannot produce presigned URLs")
