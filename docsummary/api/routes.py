from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import JSONResponse

from docsummary.api.dependencies import get_orchestrator
from docsummary.api.responses import error_response, success_response
from docsummary.api.serializers import document_identity, serialize_document
from docsummary.documents.models import Upload
from docsummary.documents.orchestrator import DocumentOrchestrator

router = APIRouter(prefix="/documents", tags=["documents"])


def _read_upload(part: UploadFile) -> Upload:
    return Upload(
        filename=part.filename or "",
        content=part.file.read(),
        mime_type=part.content_type or "",
    )


@router.post("/upload")
def upload_documents(
    file: list[UploadFile] = File(...),
    orchestrator: DocumentOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    """Store one or more PDF/DOCX files and extract their text.

    A single part answers with one document, several parts with a list.
    When extraction fails after the record was created the answer is a 500
    that still carries the created identities. A batch interrupted by a
    storage or database failure is answered by ``partial_upload_handler``.
    """
    outcomes = orchestrator.create_documents([_read_upload(part) for part in file])

    failed = [outcome for outcome in outcomes if not outcome.succeeded]
    if failed:
        return error_response(
            "File uploaded but text extraction failed",
            500,
            {
                "error": failed[0].extraction_error,
                "documents": [
                    {**document_identity(outcome.document), "error": outcome.extraction_error}
                    for outcome in outcomes
                ],
            },
        )

    documents = [serialize_document(outcome.document) for outcome in outcomes]
    data = documents[0] if len(documents) == 1 else documents
    return success_response(data, "Created", 201)


@router.get("")
def list_documents(
    page: int | None = Query(default=None, ge=1),
    per_page: int | None = Query(default=None, ge=1),
    orchestrator: DocumentOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    documents = orchestrator.list_documents(page=page, per_page=per_page)
    return success_response(
        [serialize_document(document) for document in documents],
        "Retrieval Successful",
    )


@router.get("/{document_id}")
def get_document(
    document_id: str,
    orchestrator: DocumentOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    view = orchestrator.read_document(document_id)
    return success_response(
        serialize_document(view.document, view.signed_url),
        "Retrieval Successful",
    )


@router.post("/{document_id}/analyze")
def analyze_document(
    document_id: str,
    orchestrator: DocumentOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    document = orchestrator.analyze_document(document_id)
    return success_response(serialize_document(document), "Analysis complete")
