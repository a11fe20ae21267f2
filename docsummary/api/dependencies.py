from fastapi import Request

from docsummary.documents.orchestrator import DocumentOrchestrator


def get_orchestrator(request: Request) -> DocumentOrchestrator:
    """Return the orchestrator the lifespan attached to the application state."""
    return request.app.state.orchestrator
