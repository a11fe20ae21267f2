from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from docsummary.database.connection import Database
from docsummary.documents.exceptions import DocumentNotFoundError
from docsummary.documents.models import Document, NewDocument
from docsummary.storage.models import LocalRef, ObjectRef, StorageRef

_COLUMNS = """
    id, filename, size, mime_type, local_path, s3_key, s3_url,
    extracted_text, analysis, created_at, updated_at
"""


def storage_ref_from_row(row: dict[str, Any]) -> StorageRef | None:
    if row.get("local_path"):
        return LocalRef(path=row["local_path"])
    if row.get("s3_key") or row.get("s3_url"):
        return ObjectRef(key=row.get("s3_key"), url=row.get("s3_url"))
    return None


def storage_ref_to_columns(ref: StorageRef) -> tuple[str | None, str | None, str | None]:
    """Split a reference into (local_path, s3_key, s3_url) column values."""
    if isinstance(ref, LocalRef):
        return ref.path, None, None
    return None, ref.key, ref.url


def document_from_row(row: dict[str, Any]) -> Document:
    return Document(
        id=str(row["id"]),
        filename=row["filename"],
        size=row["size"],
        mime_type=row["mime_type"],
        storage_ref=storage_ref_from_row(row),
        extracted_text=row["extracted_text"],
        analysis=row["analysis"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


class DocumentRepository:
    """Database operations for the documents table."""

    def __init__(self, database: Database) -> None:
        self._db = database

    def create(self, new_document: NewDocument) -> Document:
        """Insert a document row and return it as stored."""
        local_path, s3_key, s3_url = storage_ref_to_columns(new_document.storage_ref)
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO documents
                    (id, filename, size, mime_type, local_path, s3_key, s3_url)
                    VALUES (%s, %s, %s, %s, %s, %s, %s)
                    RETURNING {_COLUMNS}
                    """,
                    (
                        new_document.id,
                        new_document.filename,
                        new_document.size,
                        new_document.mime_type,
                        local_path,
                        s3_key,
                        s3_url,
                    ),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError(f"Insert of document {new_document.id} returned no row")
        return document_from_row(row)

    def find_by_id(self, document_id: str) -> Document:
        """Find a document by ID.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM documents WHERE id = %s",
                    (document_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document_from_row(row)

    def list_all(self, limit: int | None = None, offset: int = 0) -> list[Document]:
        """Return documents newest first, optionally paginated."""
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    SELECT {_COLUMNS}
                    FROM documents
                    ORDER BY created_at DESC, id
                    LIMIT %s OFFSET %s
                    """,
                    (limit, offset),
                )
                rows = cur.fetchall()
        return [document_from_row(row) for row in rows]

    def update_extracted_text(self, document_id: str, extracted_text: str) -> Document:
        """Persist extracted text and bump updated_at.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        return self._update(document_id, "extracted_text", extracted_text)

    def update_analysis(self, document_id: str, analysis: dict[str, Any]) -> Document:
        """Persist an analysis payload and bump updated_at.

        Raises:
            DocumentNotFoundError: if no document with this ID exists.
        """
        return self._update(document_id, "analysis", Jsonb(analysis))

    def _update(self, document_id: str, column: str, value: object) -> Document:
        with self._db.connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE documents
                    SET {column} = %s, updated_at = NOW()
                    WHERE id = %s
                    RETURNING {_COLUMNS}
                    """,
                    (value, document_id),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")
        return document_from_row(row)
