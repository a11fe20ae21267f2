import os
from collections.abc import Generator
from pathlib import Path

import pytest

from docsummary.config.settings import Settings
from docsummary.database.connection import Database
from docsummary.database.exceptions import DatabaseUnavailableError
from docsummary.database.repositories.document_repository import DocumentRepository
from docsummary.database.schema import apply_schema
from docsummary.documents.orchestrator import DocumentOrchestrator
from docsummary.extraction.extractor import TextExtractor
from docsummary.storage.fallback_store import FallbackBlobStore
from docsummary.storage.local_store import LocalBlobStore


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "docsummary_test")
    return Settings(db_pool_timeout_seconds=2.0)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_database(test_settings: Settings) -> Generator[Database, None, None]:
    database = Database.from_settings(test_settings)
    database.open()
    try:
        apply_schema(database)
    except DatabaseUnavailableError as e:
        database.close()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to point at one.")
    try:
        yield database
    finally:
        database.close()


@pytest.fixture
def integration_cleanup(integration_database: Database) -> Generator[list[str], None, None]:
    cleanup: list[str] = []
    yield cleanup
    if not cleanup:
        return
    with integration_database.connection() as conn:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM documents WHERE id = ANY(%s)", (cleanup,))
        conn.commit()


@pytest.fixture
def repo(integration_database: Database) -> DocumentRepository:
    return DocumentRepository(integration_database)


@pytest.fixture
def db_orchestrator(
    repo: DocumentRepository,
    text_extractor: TextExtractor,
    analyzer: object,
    tmp_path: Path,
) -> DocumentOrchestrator:
    return DocumentOrchestrator(
        doc_repo=repo,
        blob_store=FallbackBlobStore(LocalBlobStore(tmp_path / "uploads")),
        text_extractor=text_extractor,
        analyzer=analyzer,  # type: ignore[arg-type]
    )
