class StorageError(Exception):
    """Raised when a blob cannot be written, read or addressed."""


class StorageNotConfiguredError(StorageError):
    """Raised when an operation needs the object store but it is not configured."""
