from typing import Any

from docsummary.documents.models import Document
from docsummary.storage.models import LocalRef, ObjectRef


def serialize_document(document: Document, signed_url: str | None = None) -> dict[str, Any]:
    """Shape a document as ``{file_info, metadata, analysis}``."""
    ref = document.storage_ref
    file_info = {
        "id": document.id,
        "filename": document.filename,
        "size": document.size,
        "mime_type": document.mime_type,
        "s3_url": ref.url if isinstance(ref, ObjectRef) else None,
        "s3_key": ref.key if isinstance(ref, ObjectRef) else None,
        "s3_signed_url": signed_url,
        "local_path": ref.path if isinstance(ref, LocalRef) else None,
        "created_at": document.created_at.isoformat(),
        "updated_at": document.updated_at.isoformat(),
    }
    analysis = None
    if document.has_analysis:
        analysis = {**(document.analysis or {}), "mime_type": document.mime_type}
    return {
        "file_info": file_info,
        "metadata": {"extracted_text": document.extracted_text},
        "analysis": analysis,
    }


def document_identity(document: Document) -> dict[str, Any]:
    return {"id": document.id, "filename": document.filename}
