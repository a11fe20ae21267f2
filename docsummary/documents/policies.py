"""Fill-in-the-gaps rules: derived fields are computed only when absent."""

from docsummary.documents.models import Document


def needs_extraction(document: Document) -> bool:
    """Text is extracted once; present text is never replaced by a fill."""
    return not document.has_text


def needs_analysis(document: Document) -> bool:
    """Read-time analysis runs only for documents without a stored analysis."""
    return not document.has_analysis


def can_analyze(document: Document) -> bool:
    return document.has_text
