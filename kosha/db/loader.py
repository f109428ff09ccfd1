"""
Bulk loader for the dictionary index.

One loader owns one long write transaction from construction until commit()
or rollback(). Nothing it inserts is visible to other connections before
commit, and a rollback leaves no partial dictionary behind.

Usage:
    with store.begin_bulk_load() as loader:
        loader.insert_dictionary("mw", "Monier-Williams", "sa", "en", True)
        article_id = loader.insert_article("mw", "dharma m. law, duty")
        loader.insert_word("dharma", "धर्म", article_id, "mw")
    store.rebuild_fulltext_indexes()
"""

import logging
import sqlite3
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterable, Optional

from kosha.db.schema import INSERT_ARTICLE_SQL, INSERT_DICT_SQL, INSERT_WORD_SQL
from kosha.exceptions import LoaderClosedError, StorageError, UnknownDictionaryError

logger = logging.getLogger(__name__)


class LoaderState(Enum):
    OPEN = "open"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class BulkLoader:
    """Inserts dictionaries, articles and words inside a single transaction."""

    def __init__(
        self,
        conn: sqlite3.Connection,
        known_dict_codes: Iterable[str] = (),
        on_close: Optional[Callable[["BulkLoader"], None]] = None,
    ):
        self._conn = conn
        self._on_close = on_close
        self._dict_codes = set(known_dict_codes)
        self._savepoints = 0
        self.articles_inserted = 0
        self.words_inserted = 0

        try:
            conn.execute("BEGIN")
        except sqlite3.Error as e:
            raise StorageError("begin bulk load", e) from e

        # One cursor per statement; sqlite3 keeps each statement prepared
        self._dict_cursor = conn.cursor()
        self._article_cursor = conn.cursor()
        self._word_cursor = conn.cursor()
        self.state = LoaderState.OPEN

    def __enter__(self) -> "BulkLoader":
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.state is not LoaderState.OPEN:
            return False
        if exc_type is None:
            self.commit()
        else:
            self.rollback()
        return False

    def _check_open(self):
        if self.state is not LoaderState.OPEN:
            raise LoaderClosedError(f"Bulk loader is {self.state.value}")

    def _check_dict(self, dict_code: str):
        if dict_code not in self._dict_codes:
            raise UnknownDictionaryError(dict_code)

    def insert_dictionary(
        self,
        code: str,
        name: str,
        from_lang: str,
        to_lang: str,
        favorite: bool = False,
    ):
        """Insert or update a dictionary row keyed on code."""
        self._check_open()
        try:
            self._dict_cursor.execute(
                INSERT_DICT_SQL, (code, name, from_lang, to_lang, int(bool(favorite)))
            )
        except sqlite3.Error as e:
            raise StorageError(f"insert dictionary '{code}'", e) from e
        self._dict_codes.add(code)

    def insert_article(self, dict_code: str, content: str) -> int:
        """Insert an article and return its id."""
        self._check_open()
        self._check_dict(dict_code)
        try:
            self._article_cursor.execute(INSERT_ARTICLE_SQL, (dict_code, content))
        except sqlite3.Error as e:
            raise StorageError(f"insert article into '{dict_code}'", e) from e
        self.articles_inserted += 1
        return self._article_cursor.lastrowid

    def insert_word(
        self, word_iast: str, word_deva: str, article_id: int, dict_code: str
    ):
        """Insert a headword pointing at an existing article."""
        self._check_open()
        self._check_dict(dict_code)
        try:
            self._word_cursor.execute(
                INSERT_WORD_SQL, (word_iast, word_deva, article_id, dict_code)
            )
        except sqlite3.Error as e:
            raise StorageError(f"insert word '{word_iast}'", e) from e
        self.words_inserted += 1

    @contextmanager
    def dictionary_scope(self, dict_code: str):
        """
        Group the rows of one source dictionary under a savepoint.

        If the block raises, every row it inserted is undone and the
        exception propagates; rows from earlier dictionaries are kept.
        """
        self._check_open()
        self._savepoints += 1
        name = f"dict_{self._savepoints}"
        codes_before = set(self._dict_codes)
        articles_before = self.articles_inserted
        words_before = self.words_inserted

        self._conn.execute(f"SAVEPOINT {name}")
        try:
            yield self
        except BaseException:
            self._conn.execute(f"ROLLBACK TO {name}")
            self._conn.execute(f"RELEASE {name}")
            self._dict_codes = codes_before
            self.articles_inserted = articles_before
            self.words_inserted = words_before
            logger.debug(f"Rolled back rows of dictionary '{dict_code}'")
            raise
        else:
            self._conn.execute(f"RELEASE {name}")

    def _close_cursors(self):
        for cursor in (self._dict_cursor, self._article_cursor, self._word_cursor):
            cursor.close()

    def _finish(self, state: LoaderState):
        self.state = state
        if self._on_close is not None:
            self._on_close(self)

    def commit(self):
        """Commit the transaction and release the prepared statements."""
        self._check_open()
        self._close_cursors()
        try:
            self._conn.execute("COMMIT")
        except sqlite3.Error as e:
            self._conn.execute("ROLLBACK")
            self._finish(LoaderState.ROLLED_BACK)
            raise StorageError("commit bulk load", e) from e
        logger.info(
            f"Committed {self.articles_inserted:,} articles, "
            f"{self.words_inserted:,} words"
        )
        self._finish(LoaderState.COMMITTED)

    def rollback(self):
        """Discard everything inserted by this loader."""
        self._check_open()
        self._close_cursors()
        try:
            self._conn.execute("ROLLBACK")
        except sqlite3.Error as e:
            raise StorageError("rollback bulk load", e) from e
        finally:
            self._finish(LoaderState.ROLLED_BACK)
        logger.info("Bulk load rolled back")
