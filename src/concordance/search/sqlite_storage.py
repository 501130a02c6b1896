"""SQLite storage for the concordance: documents, lines and context windows.

One long-lived connection serves both ingestion and queries:
- Autocommit mode with explicit BEGIN/COMMIT/ROLLBACK owned by the unit of work
- Composite primary keys enforce dense, unique positions per parent
- Foreign keys keep the Document > Line > ContextWindow containment
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path
import sqlite3

from concordance.domain.errors import StorageError
from concordance.domain.model import ConcordanceHit, ContextWindow, Line, StoreStats
from concordance.search.query import (
    AllContexts,
    ByDocument,
    ByWord,
    ByWordAndDocument,
    SearchPredicate,
)
from concordance.search.sqlite_pragmas import apply_store_pragmas


logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS documents (
        name TEXT PRIMARY KEY
    );

    CREATE TABLE IF NOT EXISTS lines (
        position INTEGER NOT NULL,
        content TEXT NOT NULL,
        document TEXT NOT NULL,
        PRIMARY KEY (position, document),
        FOREIGN KEY (document) REFERENCES documents(name)
    );

    CREATE TABLE IF NOT EXISTS contexts (
        position INTEGER NOT NULL,
        word TEXT NOT NULL,
        content TEXT NOT NULL,
        line INTEGER NOT NULL,
        document TEXT NOT NULL,
        PRIMARY KEY (position, line, document),
        FOREIGN KEY (line, document) REFERENCES lines(position, document)
    );

    CREATE INDEX IF NOT EXISTS idx_contexts_word ON contexts(word);
    CREATE INDEX IF NOT EXISTS idx_contexts_document ON contexts(document);
"""

_HIT_SELECT = (
    "SELECT lines.content, contexts.content FROM contexts "
    "JOIN lines ON lines.position = contexts.line AND lines.document = contexts.document"
)


def _predicate_query(predicate: SearchPredicate) -> tuple[str, tuple[str, ...]]:
    match predicate:
        case AllContexts():
            return _HIT_SELECT, ()
        case ByWord(word=word):
            return f"{_HIT_SELECT} WHERE contexts.word = ?", (word,)
        case ByDocument(document=document):
            return f"{_HIT_SELECT} WHERE contexts.document = ?", (document,)
        case ByWordAndDocument(word=word, document=document):
            return f"{_HIT_SELECT} WHERE contexts.document = ? AND contexts.word = ?", (document, word)
    raise TypeError(f"Unsupported search predicate: {predicate!r}")


class ConcordanceStore:
    """Repository over the concordance schema."""

    def __init__(self, db_path: str | Path = MEMORY_DATABASE, *, busy_timeout_ms: int | None = 30000) -> None:
        self.db_path = db_path if db_path == MEMORY_DATABASE else Path(db_path)
        self._busy_timeout_ms = busy_timeout_ms
        self._conn: sqlite3.Connection | None = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = self._connect()
        return self._conn

    def _connect(self) -> sqlite3.Connection:
        try:
            if isinstance(self.db_path, Path):
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            # isolation_level=None: transactions are opened explicitly by the unit of work
            conn = sqlite3.connect(self.db_path, isolation_level=None)
            apply_store_pragmas(
                conn,
                busy_timeout_ms=self._busy_timeout_ms,
                journal_mode="MEMORY" if self.db_path == MEMORY_DATABASE else "WAL",
            )
            conn.executescript(_SCHEMA)
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Failed to open concordance store at {self.db_path}: {e}") from e
        logger.debug("Opened concordance store at %s", self.db_path)
        return conn

    def close(self) -> None:
        if self._conn is not None:
            try:
                self._conn.close()
            except sqlite3.Error as close_error:
                logger.warning("Failed to close SQLite connection for %s: %s", self.db_path, close_error)
            self._conn = None

    def __enter__(self) -> ConcordanceStore:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # Transactions

    def begin(self) -> None:
        self._execute("BEGIN IMMEDIATE")

    def commit(self) -> None:
        self._execute("COMMIT")

    def rollback(self) -> None:
        if self.connection.in_transaction:
            self._execute("ROLLBACK")

    @property
    def in_transaction(self) -> bool:
        return self._conn is not None and self._conn.in_transaction

    # Writes

    def add_document(self, name: str) -> bool:
        """Insert a document row; return False if the name already existed."""
        cursor = self._execute("INSERT OR IGNORE INTO documents (name) VALUES (?)", (name,))
        return cursor.rowcount == 1

    def add_line(self, line: Line) -> None:
        self._execute(
            "INSERT INTO lines (position, content, document) VALUES (?, ?, ?)",
            (line.position, line.content, line.document),
        )

    def add_contexts(self, windows: Iterable[ContextWindow]) -> int:
        rows = [(w.position, w.word, w.content, w.line, w.document) for w in windows]
        if not rows:
            return 0
        try:
            self.connection.executemany(
                "INSERT INTO contexts (position, word, content, line, document) VALUES (?, ?, ?, ?, ?)",
                rows,
            )
        except sqlite3.Error as e:
            raise StorageError(f"Failed to store context windows: {e}") from e
        return len(rows)

    # Reads

    def document_exists(self, name: str) -> bool:
        row = self._execute("SELECT 1 FROM documents WHERE name = ?", (name,)).fetchone()
        return row is not None

    def list_documents(self) -> list[str]:
        return [row[0] for row in self._execute("SELECT name FROM documents ORDER BY name")]

    def get_lines(self, document: str) -> list[Line]:
        cursor = self._execute(
            "SELECT position, content, document FROM lines WHERE document = ? ORDER BY position",
            (document,),
        )
        return [Line(position=row[0], content=row[1], document=row[2]) for row in cursor]

    def get_contexts(self, document: str, line: int) -> list[ContextWindow]:
        cursor = self._execute(
            "SELECT position, word, content, line, document FROM contexts "
            "WHERE document = ? AND line = ? ORDER BY position",
            (document, line),
        )
        return [
            ContextWindow(position=row[0], word=row[1], content=row[2], line=row[3], document=row[4])
            for row in cursor
        ]

    def find_contexts(self, predicate: SearchPredicate) -> list[ConcordanceHit]:
        query, params = _predicate_query(predicate)
        return [ConcordanceHit(line=row[0], context=row[1]) for row in self._execute(query, params)]

    def stats(self) -> StoreStats:
        counts = {}
        for table in ("documents", "lines", "contexts"):
            counts[table] = self._execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
        return StoreStats(**counts)

    def _execute(self, sql: str, params: tuple = ()) -> sqlite3.Cursor:
        try:
            return self.connection.execute(sql, params)
        except sqlite3.Error as e:
            raise StorageError(f"SQLite statement failed ({sql.split()[0]}): {e}") from e
