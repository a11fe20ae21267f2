from abc import ABC, abstractmethod


class BaseFormatExtractor(ABC):
    """Contract for all single-format text extraction adapters."""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from raw file bytes.

        Args:
            data: Raw file content in the adapter's format.

        Returns:
            Extracted text as a single normalized string.

        Raises:
            FormatExtractionError: if the library cannot read the bytes.
        """
