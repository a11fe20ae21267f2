from docsummary.documents.models import UploadOutcome


class DocumentServiceError(Exception):
    """Base exception for document lifecycle errors raised by the orchestrator."""


class ValidationError(DocumentServiceError):
    """Raised when an upload is rejected before anything is written."""


class DocumentNotFoundError(DocumentServiceError):
    """Raised when a document cannot be found in the database."""


class ConflictError(DocumentServiceError):
    """Raised when the document's current state cannot satisfy a precondition."""


class PartialUploadError(DocumentServiceError):
    """Raised when a batch stops on a storage or database failure after some
    documents were already created.

    ``outcomes`` holds the documents created before the failure; ``cause`` is
    the error that stopped the batch.
    """

    def __init__(self, outcomes: list[UploadOutcome], failed_filename: str, cause: Exception) -> None:
        super().__init__(f"Upload of '{failed_filename}' failed: {cause}")
        self.outcomes = outcomes
        self.failed_filename = failed_filename
        self.cause = cause
