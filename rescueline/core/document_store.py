"""
Document store for reference text used as answer context.

SQLite-backed (one short-lived connection per call) with an in-memory variant
for tests and demos. Table: documents (id, filename, original_name, mime_type,
content, uploaded_at). Documents are immutable once inserted.
"""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

from rescueline.core.config import DB_PATH, DB_TIMEOUT
from rescueline.core.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

_TABLE = "documents"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class NewDocument:
    """A document ready for insertion: content is already decoded text."""

    filename: str
    original_name: str
    mime_type: str
    content: str
    uploaded_at: datetime = field(default_factory=_utcnow)


@dataclass(frozen=True)
class StoredDocument:
    id: int
    filename: str
    original_name: str
    mime_type: str
    content: str
    uploaded_at: datetime


class DocumentStore(Protocol):
    def insert(self, document: NewDocument) -> StoredDocument: ...

    def fetch_documents(self, limit: int) -> list[StoredDocument]: ...

    def list_documents(self) -> list[StoredDocument]: ...


def _check_content(document: NewDocument) -> None:
    if not document.content or not document.content.strip():
        raise ValueError("Document content must be non-empty text")


class SqliteDocumentStore:
    """Documents in a SQLite file. Any sqlite3 error surfaces as StoreUnavailableError."""

    def __init__(self, db_path: str | Path = DB_PATH, timeout: float = DB_TIMEOUT) -> None:
        self.db_path = Path(db_path)
        self.timeout = timeout

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path), timeout=self.timeout)
        except (OSError, sqlite3.Error) as e:
            raise StoreUnavailableError(f"Document store unreachable: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {_TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    filename TEXT NOT NULL,
                    original_name TEXT NOT NULL,
                    mime_type TEXT NOT NULL,
                    content TEXT NOT NULL,
                    uploaded_at TEXT NOT NULL
                )
                """
            )
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailableError(f"Document store query failed: {e}") from e
        finally:
            conn.close()

    @staticmethod
    def _from_row(row: sqlite3.Row) -> StoredDocument:
        return StoredDocument(
            id=row["id"],
            filename=row["filename"],
            original_name=row["original_name"],
            mime_type=row["mime_type"],
            content=row["content"],
            uploaded_at=datetime.fromisoformat(row["uploaded_at"]),
        )

    def insert(self, document: NewDocument) -> StoredDocument:
        _check_content(document)
        with self._connect() as conn:
            cur = conn.execute(
                f"INSERT INTO {_TABLE} (filename, original_name, mime_type, content, uploaded_at) "
                "VALUES (?, ?, ?, ?, ?)",
                (
                    document.filename,
                    document.original_name,
                    document.mime_type,
                    document.content,
                    document.uploaded_at.isoformat(),
                ),
            )
            doc_id = cur.lastrowid
        logger.info("[document_store:insert] id=%s name=%s content_len=%d", doc_id, document.original_name, len(document.content))
        return StoredDocument(id=doc_id, **asdict(document))

    def fetch_documents(self, limit: int) -> list[StoredDocument]:
        """Return at most `limit` documents in insertion order; [] when the store is empty."""
        if limit <= 0:
            return []
        with self._connect() as conn:
            rows = conn.execute(f"SELECT * FROM {_TABLE} ORDER BY id ASC LIMIT ?", (limit,)).fetchall()
        return [self._from_row(r) for r in rows]

    def list_documents(self) -> list[StoredDocument]:
        """Return all documents, newest upload first."""
        with self._connect() as conn:
            rows = conn.execute(f"SELECT * FROM {_TABLE} ORDER BY uploaded_at DESC, id DESC").fetchall()
        return [self._from_row(r) for r in rows]

    def clear(self) -> None:
        """Delete all rows. Used by the seed script."""
        with self._connect() as conn:
            conn.execute(f"DELETE FROM {_TABLE}")
        logger.info("[document_store:clear] cleared all documents")


class InMemoryDocumentStore:
    """Process-local document store."""

    def __init__(self) -> None:
        self._docs: list[StoredDocument] = []
        self._lock = threading.Lock()

    def insert(self, document: NewDocument) -> StoredDocument:
        _check_content(document)
        with self._lock:
            stored = StoredDocument(id=len(self._docs) + 1, **asdict(document))
            self._docs.append(stored)
        return stored

    def fetch_documents(self, limit: int) -> list[StoredDocument]:
        if limit <= 0:
            return []
        with self._lock:
            return list(self._docs[:limit])

    def list_documents(self) -> list[StoredDocument]:
        with self._lock:
            docs = list(self._docs)
        return sorted(docs, key=lambda d: (d.uploaded_at, d.id), reverse=True)

    def clear(self) -> None:
        with self._lock:
            self._docs.clear()
