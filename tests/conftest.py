import io
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
from docx import Document as DocxDocument
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from docsummary.analysis.models import AnalysisResult
from docsummary.documents.exceptions import DocumentNotFoundError
from docsummary.documents.models import Document, NewDocument
from docsummary.documents.orchestrator import DocumentOrchestrator
from docsummary.extraction.docx_adapter import DocxAdapter
from docsummary.extraction.extractor import DOCX_MIME_TYPE, PDF_MIME_TYPE, TextExtractor
from docsummary.extraction.pdfplumber_adapter import PdfPlumberAdapter
from docsummary.storage.fallback_store import FallbackBlobStore
from docsummary.storage.local_store import LocalBlobStore


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Generate a minimal single-page PDF with known text content."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Hello PDF World")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Generate a two-page PDF with known text on each page."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 720, "Page one content")
    c.showPage()
    c.drawString(72, 720, "Page two content")
    c.save()
    return buf.getvalue()


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Generate a valid PDF with no text content (blank page)."""
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_docx_bytes() -> bytes:
    """Generate a DOCX with two paragraphs and a small table."""
    document = DocxDocument()
    document.add_paragraph("Quarterly report")
    document.add_paragraph("Revenue grew in every region.")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Region"
    table.cell(0, 1).text = "Revenue"
    table.cell(1, 0).text = "North"
    table.cell(1, 1).text = "120"
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def text_extractor() -> TextExtractor:
    return TextExtractor({PDF_MIME_TYPE: PdfPlumberAdapter(), DOCX_MIME_TYPE: DocxAdapter()})


class InMemoryDocumentRepository:
    """DocumentRepository stand-in that keeps rows in a dict and counts writes."""

    def __init__(self) -> None:
        self.rows: dict[str, Document] = {}
        self.text_updates = 0
        self.analysis_updates = 0
        self._clock = datetime(2025, 1, 1, tzinfo=timezone.utc)

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def create(self, new_document: NewDocument) -> Document:
        now = self._tick()
        document = Document(
            id=new_document.id,
            filename=new_document.filename,
            size=new_document.size,
            mime_type=new_document.mime_type,
            storage_ref=new_document.storage_ref,
            created_at=now,
            updated_at=now,
        )
        self.rows[document.id] = document
        return document

    def find_by_id(self, document_id: str) -> Document:
        if document_id not in self.rows:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return self.rows[document_id]

    def list_all(self, limit: int | None = None, offset: int = 0) -> list[Document]:
        documents = sorted(self.rows.values(), key=lambda d: d.created_at, reverse=True)
        end = None if limit is None else offset + limit
        return documents[offset:end]

    def update_extracted_text(self, document_id: str, extracted_text: str) -> Document:
        self.text_updates += 1
        return self._replace(document_id, extracted_text=extracted_text)

    def update_analysis(self, document_id: str, analysis: dict[str, Any]) -> Document:
        self.analysis_updates += 1
        return self._replace(document_id, analysis=analysis)

    def _replace(self, document_id: str, **changes: Any) -> Document:
        document = replace(self.find_by_id(document_id), updated_at=self._tick(), **changes)
        self.rows[document_id] = document
        return document


@pytest.fixture()
def document_repo() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository()


@pytest.fixture()
def analyzer() -> MagicMock:
    mock = MagicMock()
    mock.analyze.return_value = AnalysisResult(
        summary="A test summary.",
        document_type="report",
        attributes={"pages": 1},
    )
    return mock


@pytest.fixture()
def orchestrator(
    tmp_path: Path,
    document_repo: InMemoryDocumentRepository,
    text_extractor: TextExtractor,
    analyzer: MagicMock,
) -> DocumentOrchestrator:
    return DocumentOrchestrator(
        doc_repo=document_repo,  # type: ignore[arg-type]
        blob_store=FallbackBlobStore(LocalBlobStore(tmp_path / "uploads")),
        text_extractor=text_extractor,
        analyzer=analyzer,
    )
