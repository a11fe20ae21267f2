"""Exception handlers that translate domain errors into the response envelope.

Handlers are registered per base class; Starlette resolves subclasses through
the MRO, so ``AnalysisNetworkError`` is served by the ``AnalysisError`` entry.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from docsummary.analysis.exceptions import AnalysisError
from docsummary.api.responses import error_response
from docsummary.api.serializers import document_identity
from docsummary.config.exceptions import ConfigurationError
from docsummary.database.exceptions import DatabaseUnavailableError
from docsummary.documents.exceptions import (
    ConflictError,
    DocumentNotFoundError,
    PartialUploadError,
    ValidationError,
)
from docsummary.extraction.exceptions import ExtractionError
from docsummary.logging.logger import Log
from docsummary.storage.exceptions import StorageError

DATABASE_UNAVAILABLE_MESSAGE = (
    "Database (Postgres) not available; please ensure the database settings "
    "are correct and the database is running."
)

# (status code, message text) per exception type; detail goes into data.error.
# A text of None echoes the exception message.
_DOMAIN_ERRORS: dict[type[Exception], tuple[int, str | None]] = {
    ValidationError: (400, None),
    DocumentNotFoundError: (404, "Document not found"),
    ConflictError: (409, None),
    StorageError: (500, "File storage failed"),
    ExtractionError: (500, "Text extraction failed"),
    ConfigurationError: (500, "Service is not configured"),
    AnalysisError: (502, "Document analysis failed"),
}


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    for error_type in type(exc).__mro__:
        if error_type in _DOMAIN_ERRORS:
            status_code, text = _DOMAIN_ERRORS[error_type]
            break
    else:
        return await generic_exception_handler(request, exc)

    if status_code >= 500:
        Log.error(f"{type(exc).__name__}: {exc}", method=request.method, path=request.url.path)
    else:
        Log.info(
            f"Request rejected: {exc}",
            method=request.method,
            path=request.url.path,
            status=status_code,
        )
    return error_response(text or str(exc), status_code, {"error": str(exc)})


async def partial_upload_handler(request: Request, exc: PartialUploadError) -> JSONResponse:
    """Answer an interrupted batch with the documents that were created."""
    status_code = 503 if isinstance(exc.cause, DatabaseUnavailableError) else 500
    Log.error(str(exc), method=request.method, path=request.url.path, status=status_code)
    return error_response(
        "Upload interrupted; some files were stored",
        status_code,
        {
            "error": str(exc.cause),
            "failed_filename": exc.failed_filename,
            "documents": [
                {**document_identity(outcome.document), "error": outcome.extraction_error}
                for outcome in exc.outcomes
            ],
        },
    )


async def database_unavailable_handler(request: Request, exc: Exception) -> JSONResponse:
    Log.error(f"Database unavailable: {exc}", method=request.method, path=request.url.path)
    return error_response(DATABASE_UNAVAILABLE_MESSAGE, 503)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Map FastAPI request validation (missing file, bad query) to 400."""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        errors.append(
            {
                "field": ".".join(loc) if loc else "request",
                "message": error.get("msg", "Validation error"),
            }
        )
    return error_response("Invalid request", 400, {"error": errors})


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log with traceback, answer without any detail."""
    Log.exception("Unhandled error", method=request.method, path=request.url.path)
    return error_response("Something went wrong", 500)


def register_exception_handlers(app: FastAPI) -> None:
    for error_type in _DOMAIN_ERRORS:
        app.add_exception_handler(error_type, domain_error_handler)
    app.add_exception_handler(PartialUploadError, partial_upload_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DatabaseUnavailableError, database_unavailable_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, generic_exception_handler)
