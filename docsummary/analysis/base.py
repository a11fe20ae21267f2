from abc import ABC, abstractmethod

from docsummary.analysis.models import AnalysisResult


class BaseAnalyzer(ABC):
    """Contract for all document analysis adapters."""

    @abstractmethod
    def analyze(self, text: str) -> AnalysisResult:
        """Summarize extracted document text into structured data.

        Args:
            text: Plain text produced by the text extractor.

        Returns:
            AnalysisResult with summary, document_type and attributes.

        Raises:
            AnalysisError: on any failure.
            ConfigurationError: if the provider credentials are missing.
        """
