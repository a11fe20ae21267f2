from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from docsummary.storage.models import StorageRef


class DocumentState(str, Enum):
    """Lifecycle stage derived from which fields are populated."""

    CREATED = "created"
    TEXT_EXTRACTED = "text_extracted"
    ANALYZED = "analyzed"


@dataclass(frozen=True)
class Document:
    """Domain model for a stored document row."""

    id: str
    filename: str
    size: int
    mime_type: str
    storage_ref: StorageRef | None
    created_at: datetime
    updated_at: datetime
    extracted_text: str | None = None
    analysis: dict[str, Any] | None = None

    @property
    def has_text(self) -> bool:
        return bool(self.extracted_text)

    @property
    def has_analysis(self) -> bool:
        return bool(self.analysis)

    @property
    def state(self) -> DocumentState:
        if not self.has_text:
            return DocumentState.CREATED
        if not self.has_analysis:
            return DocumentState.TEXT_EXTRACTED
        return DocumentState.ANALYZED


@dataclass(frozen=True)
class NewDocument:
    """Fields supplied when inserting a document record."""

    id: str
    filename: str
    size: int
    mime_type: str
    storage_ref: StorageRef


@dataclass(frozen=True)
class Upload:
    """One file received by the upload endpoint."""

    filename: str
    content: bytes
    mime_type: str = ""


@dataclass(frozen=True)
class UploadOutcome:
    """Result of creating one document.

    ``extraction_error`` is set when the record was created but text
    extraction failed.
    """

    document: Document
    extraction_error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.extraction_error is None


@dataclass(frozen=True)
class DocumentView:
    """A document as returned by a read, with a transient signed URL."""

    document: Document
    signed_url: str | None = None
