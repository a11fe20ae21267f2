from dataclasses import dataclass

from docsummary.analysis.factory import AnalyzerFactory
from docsummary.config.settings import Settings
from docsummary.database.connection import Database
from docsummary.database.exceptions import DatabaseUnavailableError
from docsummary.database.repositories.document_repository import DocumentRepository
from docsummary.database.schema import apply_schema
from docsummary.documents.orchestrator import DocumentOrchestrator
from docsummary.extraction.factory import TextExtractorFactory
from docsummary.logging.logger import Log
from docsummary.storage.factory import BlobStoreFactory


@dataclass
class Services:
    """Long-lived collaborators owned by the application lifespan."""

    database: Database
    orchestrator: DocumentOrchestrator

    def close(self) -> None:
        self.database.close()


def build_orchestrator(settings: Settings, database: Database) -> DocumentOrchestrator:
    """Build a DocumentOrchestrator with all required adapters."""
    return DocumentOrchestrator(
        doc_repo=DocumentRepository(database),
        blob_store=BlobStoreFactory.create(settings),
        text_extractor=TextExtractorFactory.create(settings),
        analyzer=AnalyzerFactory.create(settings),
    )


def build_services(settings: Settings) -> Services:
    """Open the pool, apply the schema if enabled and wire the orchestrator."""
    database = Database.from_settings(settings)
    database.open()
    try:
        if settings.db_auto_migrate:
            try:
                apply_schema(database)
            except DatabaseUnavailableError as exc:
                Log.error(f"Schema not applied, database unavailable: {exc}")
        orchestrator = build_orchestrator(settings, database)
    except Exception:
        database.close()
        raise
    return Services(database=database, orchestrator=orchestrator)
