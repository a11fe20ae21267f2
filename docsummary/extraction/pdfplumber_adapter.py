import io

import pdfplumber

from docsummary.extraction.base import BaseFormatExtractor
from docsummary.extraction.exceptions import FormatExtractionError


class PdfPlumberAdapter(BaseFormatExtractor):
    """Extracts text from PDF using pdfplumber."""

    def extract(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
            return "\n".join(pages).strip()
        except Exception as exc:
            raise FormatExtractionError(f"pdfplumber extraction failed: {exc}") from exc
