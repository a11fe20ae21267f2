class ExtractionError(Exception):
    """Raised when no text can be produced for a document, even by fallback."""


class FormatExtractionError(ExtractionError):
    """Raised by a format adapter (PDF, DOCX) when its library fails."""
