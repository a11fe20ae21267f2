class ConfigurationError(Exception):
    """Raised when a required external credential or setting is missing."""
