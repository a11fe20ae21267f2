"""Validates parsed model output against the analysis schema."""

from typing import Any

from docsummary.analysis.exceptions import AnalysisValidationError
from docsummary.analysis.models import AnalysisResult

_REQUIRED_FIELDS = ("summary", "document_type", "attributes")


def validate_and_build(data: Any) -> AnalysisResult:
    """Validate raw parsed JSON and build an AnalysisResult.

    Unknown top-level keys are ignored.

    Raises:
        AnalysisValidationError: on any schema mismatch.
    """
    if not isinstance(data, dict):
        raise AnalysisValidationError("LLM returned invalid JSON structure: expected an object")
    for name in _REQUIRED_FIELDS:
        if name not in data:
            raise AnalysisValidationError(f"Missing required field: {name}")
    summary = data["summary"]
    if not isinstance(summary, str):
        raise AnalysisValidationError("'summary' must be a string")
    document_type = data["document_type"]
    if not isinstance(document_type, str):
        raise AnalysisValidationError("'document_type' must be a string")
    attributes = data["attributes"]
    if not isinstance(attributes, dict):
        raise AnalysisValidationError("'attributes' must be an object")
    return AnalysisResult(
        summary=summary,
        document_type=document_type,
        attributes=attributes,
    )
