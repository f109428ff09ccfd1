"""
IndexStore: the single handle on a dictionary index database.

Build pipeline:
    init_bulk_schema() -> begin_bulk_load() ... commit()
        -> rebuild_fulltext_indexes() -> finalize()

Until rebuild_fulltext_indexes() has run, headword searches work but
full-text searches find nothing; finalize() refuses to run in that state.
"""

import logging
import sqlite3
import threading
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Sequence, Union

from kosha.db import schema
from kosha.db.connection import MEMORY_PATH, connect, connect_for_bulk_insert
from kosha.db.loader import BulkLoader
from kosha.exceptions import (
    BulkLoadActiveError,
    IndexNotReadyError,
    QueryFailedError,
    StorageError,
    UnknownDictionaryError,
)

logger = logging.getLogger(__name__)


class IndexStatus(Enum):
    EMPTY = "empty"              # No base tables
    BULK_SCHEMA = "bulk_schema"  # Base tables only, full-text not built
    INDEXED = "indexed"          # Full-text tables, indexes and triggers present


class IndexStore:
    """Owns the SQLite connection shared by the loader and the query layer."""

    def __init__(self, conn: sqlite3.Connection, path: Union[str, Path] = MEMORY_PATH):
        self._conn = conn
        self.path = path
        self._lock = threading.RLock()
        self._active_loader: Optional[BulkLoader] = None

    @classmethod
    def open(cls, path: Union[str, Path]) -> "IndexStore":
        """Open an index for serving."""
        try:
            conn = connect(path)
        except sqlite3.Error as e:
            raise StorageError(f"open index {path}", e) from e
        return cls(conn, path)

    @classmethod
    def open_for_bulk_insert(cls, path: Union[str, Path]) -> "IndexStore":
        """Open an index with bulk-load pragmas."""
        try:
            conn = connect_for_bulk_insert(path)
        except sqlite3.Error as e:
            raise StorageError(f"open index {path} for bulk insert", e) from e
        return cls(conn, path)

    @classmethod
    def open_memory(cls) -> "IndexStore":
        """Open a fresh in-memory index."""
        return cls.open(MEMORY_PATH)

    def close(self):
        with self._lock:
            self._conn.close()

    def __enter__(self) -> "IndexStore":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # ---------------------------------------------------------------------
    # Reads
    # ---------------------------------------------------------------------

    def query(
        self, sql: str, params: Sequence[Any] = (), operation: str = "query"
    ) -> List[tuple]:
        """Run a read query and return all rows."""
        with self._lock:
            try:
                return self._conn.execute(sql, tuple(params)).fetchall()
            except sqlite3.Error as e:
                raise QueryFailedError(operation, e) from e

    def _object_names(self, kind: str) -> set:
        rows = self.query(
            "SELECT name FROM sqlite_master WHERE type = ?",
            (kind,),
            operation="list schema objects",
        )
        return {row[0] for row in rows}

    def fulltext_ready(self) -> bool:
        """True once rebuild_fulltext_indexes() has created the full-text tables."""
        tables = self._object_names("table")
        return all(name in tables for name in schema.FULLTEXT_TABLES)

    def status(self) -> IndexStatus:
        tables = self._object_names("table")
        if not all(name in tables for name in schema.BASE_TABLES):
            return IndexStatus.EMPTY
        if not all(name in tables for name in schema.FULLTEXT_TABLES):
            return IndexStatus.BULK_SCHEMA
        return IndexStatus.INDEXED

    # ---------------------------------------------------------------------
    # Build pipeline
    # ---------------------------------------------------------------------

    def _executescript(self, script: str, operation: str):
        with self._lock:
            try:
                self._conn.executescript(script)
            except sqlite3.Error as e:
                raise StorageError(operation, e) from e

    def init_bulk_schema(self):
        """Create the bare base tables (no indexes, no full-text, no triggers)."""
        if self._active_loader is not None:
            raise BulkLoadActiveError("create bulk schema")
        self._executescript(schema.BULK_SCHEMA_SQL, "create bulk schema")

    def _release_loader(self, loader: BulkLoader):
        if self._active_loader is loader:
            self._active_loader = None

    def begin_bulk_load(self) -> BulkLoader:
        """Start a bulk load; the returned loader owns the write transaction."""
        with self._lock:
            if self._active_loader is not None:
                raise BulkLoadActiveError("begin bulk load")
            rows = self.query(
                "SELECT code FROM dicts", operation="list dictionary codes"
            )
            known = [row[0] for row in rows]
            loader = BulkLoader(self._conn, known, on_close=self._release_loader)
            self._active_loader = loader
            return loader

    def rebuild_fulltext_indexes(self):
        """
        Build both full-text tables from the base tables, then create the
        secondary indexes and the triggers that keep later inserts in sync.

        Safe to call again: the FTS5 rebuild replaces the index contents.
        """
        if self._active_loader is not None:
            raise BulkLoadActiveError("rebuild full-text indexes")

        logger.info("Building full-text indexes...")
        script = "\n".join(
            [
                "BEGIN;",
                schema.FULLTEXT_SQL,
                schema.FULLTEXT_REBUILD_SQL,
                schema.INDEXES_SQL,
                schema.TRIGGERS_SQL,
                "COMMIT;",
            ]
        )
        try:
            self._executescript(script, "rebuild full-text indexes")
        except StorageError:
            with self._lock:
                if self._conn.in_transaction:
                    self._conn.execute("ROLLBACK")
            raise
        logger.info("Full-text indexes ready")

    def optimize(self) -> bool:
        """Refresh planner statistics and compact the file. Advisory only."""
        with self._lock:
            try:
                self._conn.execute("ANALYZE")
                self._conn.execute("VACUUM")
            except sqlite3.Error as e:
                logger.warning(f"Optimization failed: {e}")
                return False
        return True

    def finalize(self) -> bool:
        """Optimize a fully built index; refuses one without full-text indexes."""
        if not self.fulltext_ready():
            raise IndexNotReadyError(
                "Full-text indexes were never built; call rebuild_fulltext_indexes() first"
            )
        return self.optimize()

    # ---------------------------------------------------------------------
    # Single-row writes (after the bulk load; triggers maintain full-text)
    # ---------------------------------------------------------------------

    def _write(self, sql: str, params: tuple, operation: str) -> int:
        with self._lock:
            if self._active_loader is not None:
                raise BulkLoadActiveError(operation)
            try:
                cursor = self._conn.execute(sql, params)
            except sqlite3.Error as e:
                raise StorageError(operation, e) from e
            return cursor.lastrowid

    def _require_dict(self, dict_code: str):
        rows = self.query(
            "SELECT 1 FROM dicts WHERE code = ?", (dict_code,), operation="check dictionary"
        )
        if not rows:
            raise UnknownDictionaryError(dict_code)

    def insert_dictionary(
        self,
        code: str,
        name: str,
        from_lang: str,
        to_lang: str,
        favorite: bool = False,
    ):
        self._write(
            schema.INSERT_DICT_SQL,
            (code, name, from_lang, to_lang, int(bool(favorite))),
            f"insert dictionary '{code}'",
        )

    def insert_article(self, dict_code: str, content: str) -> int:
        self._require_dict(dict_code)
        return self._write(
            schema.INSERT_ARTICLE_SQL,
            (dict_code, content),
            f"insert article into '{dict_code}'",
        )

    def insert_word(
        self, word_iast: str, word_deva: str, article_id: int, dict_code: str
    ):
        self._require_dict(dict_code)
        self._write(
            schema.INSERT_WORD_SQL,
            (word_iast, word_deva, article_id, dict_code),
            f"insert word '{word_iast}'",
        )
