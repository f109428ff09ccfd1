"""
SQLite connections for the dictionary index.

Two profiles:
- connect(): read-mostly serving; WAL so readers never block the occasional writer
- connect_for_bulk_insert(): one-shot offline build; durability relaxed for speed
"""

import sqlite3
from pathlib import Path
from typing import Optional, Union

MEMORY_PATH = ":memory:"

SERVING_PRAGMAS = (
    "PRAGMA journal_mode=WAL",
    "PRAGMA mmap_size=268435456",  # 256MB
)

# The journal stays in memory rather than OFF: a failed load must still
# be able to ROLLBACK, which is undefined with journal_mode=OFF
BULK_PRAGMAS = (
    "PRAGMA journal_mode=MEMORY",
    "PRAGMA synchronous=OFF",
    "PRAGMA cache_size=-64000",  # 64MB
    "PRAGMA mmap_size=268435456",
    "PRAGMA temp_store=MEMORY",
    "PRAGMA locking_mode=EXCLUSIVE",
)


def unicode_lower(value: Optional[str]) -> Optional[str]:
    """Full Unicode lowercasing (SQLite's LOWER() only folds ASCII)."""
    if value is None:
        return None
    return value.lower()


def _open(path: Union[str, Path], pragmas) -> sqlite3.Connection:
    # isolation_level=None: transactions are opened explicitly with BEGIN
    conn = sqlite3.connect(
        str(path), isolation_level=None, check_same_thread=False
    )
    try:
        for pragma in pragmas:
            conn.execute(pragma)
        conn.create_function("unicode_lower", 1, unicode_lower, deterministic=True)
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def connect(path: Union[str, Path] = MEMORY_PATH) -> sqlite3.Connection:
    """Open a connection for serving queries."""
    return _open(path, SERVING_PRAGMAS)


def connect_for_bulk_insert(path: Union[str, Path]) -> sqlite3.Connection:
    """Open a connection tuned for a single large offline load."""
    return _open(path, BULK_PRAGMAS)
