from pathlib import Path
from unittest.mock import MagicMock

import pytest

from docsummary.database.connection import Database
from docsummary.documents.models import Upload
from docsummary.documents.orchestrator import DocumentOrchestrator
from docsummary.extraction.extractor import PDF_MIME_TYPE
from docsummary.storage.models import LocalRef


@pytest.mark.integration
class TestOrchestratorWithPostgres:
    def test_upload_read_and_analyze(
        self,
        db_orchestrator: DocumentOrchestrator,
        analyzer: MagicMock,
        sample_pdf_bytes: bytes,
        integration_cleanup: list[str],
    ) -> None:
        outcome = db_orchestrator.create_document(
            Upload(filename="report.pdf", content=sample_pdf_bytes, mime_type=PDF_MIME_TYPE)
        )
        document_id = outcome.document.id
        integration_cleanup.append(document_id)

        view = db_orchestrator.read_document(document_id)
        assert "Hello PDF World" in (view.document.extracted_text or "")
        assert view.document.analysis is not None
        assert view.document.analysis["document_type"] == "report"

        db_orchestrator.analyze_document(document_id)
        assert analyzer.analyze.call_count == 2

    def test_read_recovers_text_from_stored_file(
        self,
        db_orchestrator: DocumentOrchestrator,
        integration_database: Database,
        integration_cleanup: list[str],
    ) -> None:
        outcome = db_orchestrator.create_document(
            Upload(filename="a.pdf", content=b"plain bytes", mime_type=PDF_MIME_TYPE)
        )
        integration_cleanup.append(outcome.document.id)
        with integration_database.connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "UPDATE documents SET extracted_text = NULL WHERE id = %s",
                    (outcome.document.id,),
                )
            conn.commit()

        view = db_orchestrator.read_document(outcome.document.id)

        assert isinstance(view.document.storage_ref, LocalRef)
        assert Path(view.document.storage_ref.path).exists()
        assert view.document.extracted_text == "plain bytes"
