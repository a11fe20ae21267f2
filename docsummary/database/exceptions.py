class DatabaseUnavailableError(Exception):
    """Raised when the record store cannot be reached at all."""
