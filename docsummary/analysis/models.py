from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class AnalysisResult:
    """Structured summary produced by the LLM for one document."""

    summary: str
    document_type: str
    attributes: dict[str, Any] = field(default_factory=dict)
