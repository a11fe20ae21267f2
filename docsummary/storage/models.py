from dataclasses import dataclass


@dataclass(frozen=True)
class LocalRef:
    """Blob written to the local uploads directory."""

    path: str

    kind = "local"


@dataclass(frozen=True)
class ObjectRef:
    """Blob written to the S3-compatible object store.

    ``url`` is the public URL recorded at write time; when it is missing a
    presigned URL is derived from ``key`` on read.
    """

    key: str | None = None
    url: str | None = None

    kind = "object"


StorageRef = LocalRef | ObjectRef
