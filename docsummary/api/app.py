from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from docsummary.api.errors import register_exception_handlers
from docsummary.api.responses import success_response
from docsummary.api.routes import router as documents_router
from docsummary.config.settings import Settings
from docsummary.documents.orchestrator import DocumentOrchestrator
from docsummary.logging.logger import Log
from docsummary.services import build_services


def create_app(
    settings: Settings | None = None,
    orchestrator: DocumentOrchestrator | None = None,
) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Configuration; read from the environment when omitted.
        orchestrator: Prebuilt orchestrator. When given, the lifespan does not
            open a database pool or build any adapters.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        Log.configure(settings.log_level)
        if orchestrator is not None:
            app.state.orchestrator = orchestrator
            yield
            return

        services = build_services(settings)
        app.state.orchestrator = services.orchestrator
        Log.info("Service started", env=settings.app_env)
        try:
            yield
        finally:
            services.close()
            Log.info("Service stopped")

    app = FastAPI(
        title="AI Document Summarization API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/")
    def root(request: Request) -> JSONResponse:
        base_url = str(request.base_url).rstrip("/")
        return success_response(
            {
                "docs": {
                    "swagger": f"{base_url}/docs",
                    "redoc": f"{base_url}/redoc",
                    "openapi": f"{base_url}/openapi.json",
                }
            },
            "AI Document Summarization API",
        )

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(documents_router)
    return app
