import io

from docx import Document

from docsummary.extraction.base import BaseFormatExtractor
from docsummary.extraction.exceptions import FormatExtractionError


class DocxAdapter(BaseFormatExtractor):
    """Extracts raw text from DOCX using python-docx.

    Paragraphs come first in document order, then table cells row by row.
    """

    def extract(self, data: bytes) -> str:
        try:
            document = Document(io.BytesIO(data))
            lines = [paragraph.text for paragraph in document.paragraphs]
            for table in document.tables:
                for row in table.rows:
                    cells = [cell.text.strip() for cell in row.cells]
                    lines.append("\t".join(cell for cell in cells if cell))
        except Exception as exc:
            raise FormatExtractionError(f"python-docx extraction failed: {exc}") from exc
        return "\n".join(line.rstrip() for line in lines if line.strip()).strip()
