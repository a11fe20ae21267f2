import uuid
from collections.abc import Sequence
from dataclasses import asdict
from pathlib import PurePosixPath

from docsummary.analysis.base import BaseAnalyzer
from docsummary.analysis.exceptions import AnalysisError
from docsummary.config.exceptions import ConfigurationError
from docsummary.database.exceptions import DatabaseUnavailableError
from docsummary.database.repositories.document_repository import DocumentRepository
from docsummary.documents import policies
from docsummary.documents.exceptions import ConflictError, PartialUploadError
from docsummary.documents.models import (
    Document,
    DocumentView,
    NewDocument,
    Upload,
    UploadOutcome,
)
from docsummary.documents.validation import resolve_mime_type, validate_upload
from docsummary.extraction.exceptions import ExtractionError
from docsummary.extraction.extractor import TextExtractor
from docsummary.logging.logger import Log
from docsummary.storage.base import BaseBlobStore
from docsummary.storage.exceptions import StorageError
from docsummary.storage.models import ObjectRef

DEFAULT_PER_PAGE = 20


def blob_name(document_id: str, filename: str) -> str:
    """Stored name for an upload; the document ID keeps names unique."""
    base_name = PurePosixPath(filename.replace("\\", "/")).name
    return f"{document_id}-{base_name}"


class DocumentOrchestrator:
    """Coordinates storage, extraction, persistence and analysis per document.

    Upload and analyze are strict: failures reach the caller. Reads are soft:
    missing text and analysis are filled in when possible and failures only
    degrade the returned document.
    """

    def __init__(
        self,
        *,
        doc_repo: DocumentRepository,
        blob_store: BaseBlobStore,
        text_extractor: TextExtractor,
        analyzer: BaseAnalyzer,
    ) -> None:
        self._doc_repo = doc_repo
        self._blob_store = blob_store
        self._text_extractor = text_extractor
        self._analyzer = analyzer

    def create_documents(self, uploads: Sequence[Upload]) -> list[UploadOutcome]:
        """Validate every upload, then store, record and extract each in turn.

        The batch stops at the first storage or database failure.

        Raises:
            ValidationError: if any upload is rejected; nothing is stored.
            StorageError: if the first blob cannot be written even locally.
            DatabaseUnavailableError: if the first record cannot be inserted.
            PartialUploadError: if a later upload fails that way; it carries
                the documents created before it.
        """
        resolved = [
            Upload(
                filename=upload.filename,
                content=upload.content,
                mime_type=resolve_mime_type(upload.filename, upload.mime_type),
            )
            for upload in uploads
        ]
        for upload in resolved:
            validate_upload(upload)

        outcomes: list[UploadOutcome] = []
        for upload in resolved:
            try:
                outcomes.append(self._create_one(upload))
            except (StorageError, DatabaseUnavailableError) as exc:
                if not outcomes:
                    raise
                Log.error(
                    f"Batch upload stopped: {exc}",
                    created=len(outcomes),
                    remaining=len(resolved) - len(outcomes),
                )
                raise PartialUploadError(outcomes, upload.filename, exc) from exc
        return outcomes

    def create_document(self, upload: Upload) -> UploadOutcome:
        return self.create_documents([upload])[0]

    def _create_one(self, upload: Upload) -> UploadOutcome:
        document_id = str(uuid.uuid4())
        storage_ref = self._blob_store.store(
            upload.content, blob_name(document_id, upload.filename)
        )
        document = self._doc_repo.create(
            NewDocument(
                id=document_id,
                filename=upload.filename,
                size=len(upload.content),
                mime_type=upload.mime_type,
                storage_ref=storage_ref,
            )
        )
        Log.info(
            "Created document",
            document_id=document.id,
            size=document.size,
            storage=storage_ref.kind,
        )

        try:
            text = self._text_extractor.extract(upload.content, upload.mime_type)
            document = self._doc_repo.update_extracted_text(document.id, text)
        except (ExtractionError, DatabaseUnavailableError) as exc:
            Log.error(f"Uploaded but text extraction failed: {exc}", document_id=document.id)
            return UploadOutcome(document=document, extraction_error=str(exc))
        Log.info("Extracted text", document_id=document.id, chars=len(text))
        return UploadOutcome(document=document)

    def ensure_extracted(self, document: Document) -> Document:
        """Fill in extracted text from the stored blob when it is missing.

        Raises:
            ConflictError: if the document has no storage reference.
            StorageError: if the blob cannot be read.
            ExtractionError: if no text can be produced.
        """
        if not policies.needs_extraction(document):
            return document
        if document.storage_ref is None:
            raise ConflictError(
                f"Document {document.id} text not extracted and file not available"
            )
        data = self._blob_store.read(document.storage_ref)
        text = self._text_extractor.extract(data, document.mime_type)
        Log.info("Re-extracted text from stored file", document_id=document.id, chars=len(text))
        return self._doc_repo.update_extracted_text(document.id, text)

    def ensure_analyzed(self, document: Document) -> Document:
        """Fill in the analysis when it is missing or empty.

        Raises:
            ConflictError: if the document has no extracted text to analyze.
            AnalysisError: if the analysis call fails.
            ConfigurationError: if the analysis provider is not configured.
        """
        if not policies.needs_analysis(document):
            return document
        if not policies.can_analyze(document):
            raise ConflictError(f"Document {document.id} has no extracted text to analyze")
        return self._run_analysis(document)

    def read_document(self, document_id: str) -> DocumentView:
        """Fetch a document and opportunistically complete its derived fields.

        Raises:
            DocumentNotFoundError: if the ID is unknown.
        """
        document = self._doc_repo.find_by_id(document_id)
        signed_url = self._presign_best_effort(document)

        try:
            document = self.ensure_extracted(document)
        except (ConflictError, StorageError, ExtractionError) as exc:
            Log.warning(f"Read-time extraction skipped: {exc}", document_id=document.id)

        if policies.can_analyze(document):
            try:
                document = self.ensure_analyzed(document)
            except (AnalysisError, ConfigurationError) as exc:
                Log.warning(f"Read-time analysis skipped: {exc}", document_id=document.id)

        return DocumentView(document=document, signed_url=signed_url)

    def analyze_document(self, document_id: str) -> Document:
        """Extract if needed, then always run a fresh analysis and persist it.

        Raises:
            DocumentNotFoundError: if the ID is unknown.
            ConflictError: if text is missing and no storage reference exists,
                or extraction produced no text.
            StorageError: if the stored blob cannot be read.
            ExtractionError: if text extraction fails.
            AnalysisError: if the analysis call fails.
            ConfigurationError: if the analysis provider is not configured.
        """
        document = self._doc_repo.find_by_id(document_id)
        document = self.ensure_extracted(document)
        if not policies.can_analyze(document):
            raise ConflictError(f"Document {document.id} has no usable text to analyze")
        return self._run_analysis(document)

    def list_documents(self, page: int | None = None, per_page: int | None = None) -> list[Document]:
        """Return documents newest first.

        Without ``page`` or ``per_page`` every document is returned. A page
        without a size uses ``DEFAULT_PER_PAGE``.
        """
        if page is None and per_page is None:
            return self._doc_repo.list_all()
        per_page = per_page or DEFAULT_PER_PAGE
        offset = ((page or 1) - 1) * per_page
        return self._doc_repo.list_all(limit=per_page, offset=offset)

    def _run_analysis(self, document: Document) -> Document:
        result = self._analyzer.analyze(document.extracted_text or "")
        Log.info("Analyzed document", document_id=document.id, document_type=result.document_type)
        return self._doc_repo.update_analysis(document.id, asdict(result))

    def _presign_best_effort(self, document: Document) -> str | None:
        ref = document.storage_ref
        if not isinstance(ref, ObjectRef) or not ref.key:
            return None
        try:
            return self._blob_store.presign(ref.key)
        except StorageError as exc:
            Log.warning(f"Could not presign: {exc}", document_id=document.id)
            return None
