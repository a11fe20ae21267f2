from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg_pool import ConnectionPool, PoolTimeout

from docsummary.config.settings import Settings
from docsummary.database.exceptions import DatabaseUnavailableError

_CONNECTION_REFUSED_MARKERS = ("connection refused", "econnrefused")


def is_connection_refused(exc: BaseException) -> bool:
    """Recognize the low-level signal for an unreachable Postgres server."""
    if isinstance(exc, PoolTimeout):
        return True
    if isinstance(exc, psycopg.OperationalError):
        message = str(exc).lower()
        return any(marker in message for marker in _CONNECTION_REFUSED_MARKERS)
    return False


class Database:
    """Owns the connection pool for the record store.

    Constructed explicitly and injected into repositories; ``open`` and
    ``close`` bracket the application lifespan.
    """

    def __init__(
        self,
        conninfo: str,
        *,
        min_size: int = 1,
        max_size: int = 10,
        timeout_seconds: float = 5.0,
    ) -> None:
        self._pool = ConnectionPool(
            conninfo,
            min_size=min_size,
            max_size=max_size,
            timeout=timeout_seconds,
            open=False,
        )
        self._opened = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.db_conninfo,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            timeout_seconds=settings.db_pool_timeout_seconds,
        )

    def open(self) -> None:
        """Start the pool without waiting for the first connection."""
        if not self._opened:
            self._pool.open(wait=False)
            self._opened = True

    def close(self) -> None:
        if self._opened:
            self._pool.close()
            self._opened = False

    @contextmanager
    def connection(self) -> Generator[psycopg.Connection[Any], None, None]:
        """Yield a pooled connection. Caller manages commit/rollback.

        Raises:
            DatabaseUnavailableError: if the server refuses connections or
                no connection could be checked out in time.
        """
        if not self._opened:
            raise RuntimeError("Database pool not opened. Call open() first.")
        try:
            with self._pool.connection() as conn:
                yield conn
        except (PoolTimeout, psycopg.OperationalError) as exc:
            if is_connection_refused(exc):
                raise DatabaseUnavailableError(
                    f"Database (Postgres) not available: {exc}"
                ) from exc
            raise
