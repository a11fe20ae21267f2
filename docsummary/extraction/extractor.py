"""MIME-dispatched text extraction with a raw UTF-8 fallback."""

from collections.abc import Mapping

from docsummary.extraction.base import BaseFormatExtractor
from docsummary.extraction.exceptions import ExtractionError, FormatExtractionError
from docsummary.logging.logger import Log

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def strip_nul(text: str) -> str:
    """Drop NUL characters, which Postgres text columns reject."""
    return text.replace("\x00", "")


def decode_utf8(data: bytes) -> str:
    """Interpret raw bytes as UTF-8 text, replacing invalid sequences.

    Raises:
        ExtractionError: if the payload is not a bytes-like object.
    """
    try:
        text = bytes(data).decode("utf-8", errors="replace")
    except (TypeError, UnicodeError) as exc:
        raise ExtractionError(f"UTF-8 fallback failed: {exc}") from exc
    return strip_nul(text)


class TextExtractor:
    """Converts raw bytes plus a declared MIME type into plain text.

    Dispatch is strictly on the declared type. Unknown types and adapter
    failures degrade to the UTF-8 fallback instead of raising.
    """

    def __init__(self, adapters: Mapping[str, BaseFormatExtractor]) -> None:
        self._adapters = dict(adapters)

    @property
    def supported_mime_types(self) -> frozenset[str]:
        return frozenset(self._adapters)

    def extract(self, data: bytes, mime_type: str) -> str:
        adapter = self._adapters.get(mime_type)
        if adapter is None:
            Log.debug(f"No adapter for '{mime_type}', decoding {len(data)} bytes as UTF-8")
            return decode_utf8(data)
        try:
            return strip_nul(adapter.extract(data))
        except FormatExtractionError as exc:
            Log.warning(f"{mime_type} extraction failed, falling back to UTF-8: {exc}")
            return decode_utf8(data)
