class AnalysisError(Exception):
    """Raised when document analysis fails."""


class AnalysisValidationError(AnalysisError):
    """Raised when the model output does not match the analysis schema."""


class AnalysisNetworkError(AnalysisError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""
