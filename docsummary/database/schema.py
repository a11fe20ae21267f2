from docsummary.database.connection import Database
from docsummary.logging.logger import Log

SCHEMA_STATEMENTS: tuple[str, ...] = (
    """
    CREATE TABLE IF NOT EXISTS documents (
        id TEXT PRIMARY KEY,
        filename TEXT NOT NULL,
        size INTEGER NOT NULL,
        mime_type TEXT NOT NULL,
        local_path TEXT,
        s3_key TEXT,
        s3_url TEXT,
        extracted_text TEXT,
        analysis JSONB,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS documents_created_at_idx
    ON documents (created_at DESC)
    """,
)


def apply_schema(database: Database) -> None:
    """Create the documents table and its indexes if they do not exist."""
    with database.connection() as conn:
        with conn.cursor() as cur:
            for statement in SCHEMA_STATEMENTS:
                cur.execute(statement)
        conn.commit()
    Log.info("Database schema is up to date")
