import pymupdf

from docsummary.extraction.base import BaseFormatExtractor
from docsummary.extraction.exceptions import FormatExtractionError


class PyMuPdfAdapter(BaseFormatExtractor):
    """Extracts text from PDF using PyMuPDF."""

    def extract(self, data: bytes) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text() for page in doc]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise FormatExtractionError(f"pymupdf extraction failed: {exc}") from exc
