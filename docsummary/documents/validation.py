from pathlib import PurePath

from docsummary.documents.exceptions import ValidationError
from docsummary.documents.models import Upload
from docsummary.extraction.extractor import DOCX_MIME_TYPE, PDF_MIME_TYPE

MAX_UPLOAD_BYTES = 5 * 1024 * 1024

ALLOWED_MIME_TYPES = frozenset({PDF_MIME_TYPE, DOCX_MIME_TYPE})

_EXTENSION_MIME_TYPES = {
    ".pdf": PDF_MIME_TYPE,
    ".docx": DOCX_MIME_TYPE,
}


def resolve_mime_type(filename: str, declared: str | None) -> str:
    """Return the declared MIME type, or infer it from the extension when absent."""
    if declared:
        return declared
    return _EXTENSION_MIME_TYPES.get(PurePath(filename).suffix.lower(), "")


def validate_upload(upload: Upload) -> None:
    """Reject unsupported types first, then oversized files.

    Raises:
        ValidationError: if the upload must not be stored.
    """
    if upload.mime_type not in ALLOWED_MIME_TYPES:
        raise ValidationError(
            f"File must be PDF or DOCX: '{upload.filename}' has type "
            f"'{upload.mime_type or 'unknown'}'"
        )
    if len(upload.content) > MAX_UPLOAD_BYTES:
        raise ValidationError(f"File size exceeds 5MB: '{upload.filename}'")
