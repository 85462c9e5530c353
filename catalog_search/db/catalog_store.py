"""
Catalog PostgreSQL Store
========================

Direct SQL access to the card catalog.

Architecture:
- Connection per round trip (no pooling; one search is at most two trips)
- Read-only autocommit sessions (every search query is a SELECT)
- Driver errors are translated into the search error taxonomy:
  network, timeout and contention failures become TransientStoreError,
  everything else becomes StoreError

Any object with a `fetch_all(ParameterizedQuery) -> List[Dict]` method can
stand in for CatalogStore (tests use an in-memory fake).
"""

import logging
from typing import Any, Dict, List, Optional
from contextlib import contextmanager
import psycopg2
from psycopg2.extras import RealDictCursor

from catalog_search.config import Settings, settings as default_settings
from catalog_search.db.query import ParameterizedQuery
from catalog_search.errors import StoreError, TransientStoreError

logger = logging.getLogger(__name__)

# OperationalError covers QueryCanceledError, TransactionRollbackError
# (deadlocks, serialization failures) and LockNotAvailable.
TRANSIENT_DRIVER_ERRORS = (psycopg2.OperationalError, psycopg2.InterfaceError)


def translate_driver_error(error: psycopg2.Error) -> StoreError:
    """Map a psycopg2 error onto StoreError / TransientStoreError."""
    message = f"{type(error).__name__}: {str(error).strip()}"
    if isinstance(error, TRANSIENT_DRIVER_ERRORS):
        return TransientStoreError(message)
    return StoreError(message)


class CatalogStore:
    """Read-only PostgreSQL access to the catalog tables."""

    def __init__(
        self,
        database_url: str,
        connect_timeout: int = 10,
        statement_timeout_ms: int = 0,
    ):
        """
        Args:
            database_url: libpq connection string or URL
            connect_timeout: Seconds to wait for a connection
            statement_timeout_ms: Server-side statement timeout, 0 to disable
        """
        self.database_url = database_url
        self.connect_timeout = connect_timeout
        self.statement_timeout_ms = statement_timeout_ms

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "CatalogStore":
        config = config or default_settings
        return cls(
            database_url=config.database_url,
            connect_timeout=config.db_connect_timeout,
            statement_timeout_ms=config.db_statement_timeout_ms,
        )

    def _connect_kwargs(self) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"connect_timeout": self.connect_timeout}
        if self.statement_timeout_ms > 0:
            kwargs["options"] = f"-c statement_timeout={int(self.statement_timeout_ms)}"
        return kwargs

    @contextmanager
    def get_connection(self):
        """
        Get a read-only database connection.

        Usage:
            with store.get_connection() as conn:
                with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                    cursor.execute("SELECT 1")

        Yields:
            psycopg2 connection

        Raises:
            TransientStoreError: If the connection cannot be opened
        """
        conn = None

        try:
            conn = psycopg2.connect(self.database_url, **self._connect_kwargs())
            conn.set_session(readonly=True, autocommit=True)
            yield conn
        except psycopg2.Error as e:
            logger.error(f"[CatalogStore] Database error: {e}")
            raise translate_driver_error(e) from e
        finally:
            if conn:
                conn.close()

    def fetch_all(self, query: ParameterizedQuery) -> List[Dict[str, Any]]:
        """
        Execute query and return all rows as list of dicts.

        Args:
            query: SQL with %(name)s placeholders and its parameters

        Returns:
            List of dicts (empty list if no rows)

        Raises:
            StoreError: On any driver error (TransientStoreError when retryable)
        """
        logger.debug(f"[CatalogStore] Executing {query.to_dict()}")

        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=RealDictCursor) as cursor:
                cursor.execute(query.sql, query.params)
                rows = cursor.fetchall()

        logger.info(f"[CatalogStore] {query.label or 'query'} returned {len(rows)} rows")
        return [dict(row) for row in rows]
