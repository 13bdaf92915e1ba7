"""
Document store module with per-operation connection management.

Provides the foundation for all persistence in budgetkeeper: an embedded,
file-backed document store on top of SQLite. Every collection is a table of
(id, JSON body) rows and every logical operation opens its own connection.
"""

import json
import logging
import re
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, TypeVar

from budgetkeeper.config import DB_TIMEOUT

logger = logging.getLogger(__name__)

R = TypeVar("R")

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class StorageError(Exception):
    """The store could not be opened, read or written."""


def _check_identifier(value: str, what: str):
    if not isinstance(value, str) or not _IDENTIFIER.match(value):
        raise ValueError(f"Invalid {what}: {value!r}")


class Collection:
    """
    A named collection of JSON documents keyed by id.

    Only valid inside DocumentStore.collection(); the underlying connection
    is closed when that block exits.
    """

    def __init__(self, conn: sqlite3.Connection, name: str):
        self._conn = conn
        self.name = name

    def _ensure_table(self):
        self._conn.execute(
            f'CREATE TABLE IF NOT EXISTS "{self.name}" ('
            "id TEXT PRIMARY KEY, body TEXT NOT NULL)"
        )

    def _decode(self, doc_id: str, body: str) -> dict:
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            logger.error(
                f"Corrupt document {doc_id} in {self.name}: {e}", exc_info=True
            )
            raise StorageError(
                f"Document {doc_id} in {self.name} is not valid JSON"
            ) from e

    def all(self) -> list[dict]:
        """Return every document in insertion order."""
        cursor = self._conn.execute(
            f'SELECT id, body FROM "{self.name}" ORDER BY rowid'
        )
        return [self._decode(row[0], row[1]) for row in cursor.fetchall()]

    def find_by_id(self, doc_id: str) -> Optional[dict]:
        cursor = self._conn.execute(
            f'SELECT id, body FROM "{self.name}" WHERE id = ?', (doc_id,)
        )
        row = cursor.fetchone()
        if row:
            return self._decode(row[0], row[1])
        return None

    def find(self, **equals) -> list[dict]:
        """
        Return documents whose top-level fields equal the given values.

        Example:
            collection.find(budget_id="abc")
        """
        clauses = []
        params = []
        for key, value in equals.items():
            _check_identifier(key, "field name")
            clauses.append(f"json_extract(body, '$.{key}') = ?")
            params.append(value)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        cursor = self._conn.execute(
            f'SELECT id, body FROM "{self.name}"{where} ORDER BY rowid', params
        )
        return [self._decode(row[0], row[1]) for row in cursor.fetchall()]

    def exists(self, doc_id: str) -> bool:
        cursor = self._conn.execute(
            f'SELECT 1 FROM "{self.name}" WHERE id = ?', (doc_id,)
        )
        return cursor.fetchone() is not None

    def insert(self, doc_id: str, doc: dict) -> bool:
        """Insert a new document. Returns False if the id is already taken."""
        if self.exists(doc_id):
            return False
        self._conn.execute(
            f'INSERT INTO "{self.name}" (id, body) VALUES (?, ?)',
            (doc_id, json.dumps(doc)),
        )
        return True

    def update(self, doc_id: str, doc: dict) -> bool:
        """Replace an existing document. Returns False if it does not exist."""
        cursor = self._conn.execute(
            f'UPDATE "{self.name}" SET body = ? WHERE id = ?',
            (json.dumps(doc), doc_id),
        )
        return cursor.rowcount > 0

    def upsert(self, doc_id: str, doc: dict) -> bool:
        """
        Insert or replace a document.

        Returns:
            True if the document was inserted, False if an existing one was
            replaced. Either way the write succeeded.
        """
        inserted = not self.exists(doc_id)
        self._conn.execute(
            f'INSERT INTO "{self.name}" (id, body) VALUES (?, ?) '
            "ON CONFLICT(id) DO UPDATE SET body = excluded.body",
            (doc_id, json.dumps(doc)),
        )
        return inserted

    def delete(self, doc_id: str) -> bool:
        cursor = self._conn.execute(
            f'DELETE FROM "{self.name}" WHERE id = ?', (doc_id,)
        )
        return cursor.rowcount > 0


class DocumentStore:
    """
    Embedded document store with one short-lived connection per operation.

    The store keeps nothing but its connection string between calls, so a
    single instance can be shared by every repository.
    """

    def __init__(self, connection_string: str, timeout: float = DB_TIMEOUT):
        """
        Initialize the store.

        Args:
            connection_string: Path (relative or absolute) to the database
                file, or a sqlite "file:" URI
            timeout: Seconds to wait for a lock held by another writer
        """
        self.connection_string = str(connection_string)
        self.timeout = timeout
        self._ensure_db_directory()

    def _is_file_path(self) -> bool:
        return self.connection_string != ":memory:" and not (
            self.connection_string.startswith("file:")
        )

    def _ensure_db_directory(self):
        """Ensure the database directory exists."""
        if not self._is_file_path():
            return
        try:
            Path(self.connection_string).parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create database directory: {e}", exc_info=True)
            raise StorageError(
                f"Cannot create directory for {self.connection_string}"
            ) from e

    @contextmanager
    def collection(self, name: str) -> Iterator[Collection]:
        """
        Open a connection, yield the named collection, then always close.

        Commits when the block completes and rolls back when it raises.
        SQLite errors surface as StorageError.
        """
        _check_identifier(name, "collection name")
        conn = None
        try:
            conn = sqlite3.connect(
                self.connection_string,
                timeout=self.timeout,
                uri=self.connection_string.startswith("file:"),
            )
            collection = Collection(conn, name)
            collection._ensure_table()
            yield collection
            conn.commit()
        except sqlite3.Error as e:
            logger.error(
                f"Storage error on collection {name}: {e}", exc_info=True
            )
            if conn:
                conn.rollback()
            raise StorageError(f"Storage error on collection {name}: {e}") from e
        except Exception:
            if conn:
                conn.rollback()
            raise
        finally:
            if conn:
                conn.close()

    def with_collection(self, name: str, fn: Callable[[Collection], R]) -> R:
        """Run fn against the named collection inside a single connection."""
        with self.collection(name) as collection:
            return fn(collection)
