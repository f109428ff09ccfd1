"""
Query layer over the dictionary index.

Four search modes, each its own query shape:
- exact:   case-insensitive equality on either headword form
- prefix:  case-insensitive "starts with" on either headword form (LIKE)
- fuzzy:   case-insensitive "contains" on either headword form (LIKE)
- reverse: full-text match inside article content (FTS5)

Ordering is a fixed tie-break chain, never a relevance score:
favorite dictionaries first, then shorter headwords, then dictionary code,
then headword.
"""

import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from kosha.db.index import IndexStore
from kosha.exceptions import InvalidQueryError
from kosha.models import Dictionary, SearchResult

logger = logging.getLogger(__name__)

RESULT_LIMIT = 1000
EXCERPT_LENGTH = 40

# Stays under SQLITE_MAX_VARIABLE_NUMBER on old builds (999)
CONTENT_BATCH_SIZE = 500


class SearchMode(Enum):
    EXACT = "exact"
    PREFIX = "prefix"
    FUZZY = "fuzzy"
    REVERSE = "reverse"

    @classmethod
    def parse(cls, token) -> "SearchMode":
        """Convert a mode token ("exact", "prefix", ...) to a SearchMode."""
        if isinstance(token, cls):
            return token
        try:
            return cls(str(token).strip().lower())
        except ValueError:
            valid = ", ".join(mode.value for mode in cls)
            raise InvalidQueryError(f"Invalid mode '{token}'. Use: {valid}") from None


HEADWORD_SQL = """
SELECT d.code, d.name, a.id, w.word_iast
FROM words w
JOIN articles a ON a.id = w.article_id
JOIN dicts d ON d.code = w.dict_code
WHERE ({match}){dict_filter}
ORDER BY d.favorite DESC, LENGTH(w.word_iast), d.code, w.word_iast
LIMIT {limit}
"""

EXACT_MATCH = "unicode_lower(w.word_iast) = ? OR unicode_lower(w.word_deva) = ?"
LIKE_MATCH = (
    "unicode_lower(w.word_iast) LIKE ? ESCAPE '\\' "
    "OR unicode_lower(w.word_deva) LIKE ? ESCAPE '\\'"
)

REVERSE_SQL = """
SELECT d.code, d.name, a.id,
    CASE WHEN INSTR(a.content, ' ') > 0
        THEN SUBSTR(a.content, 1, INSTR(a.content, ' ') - 1)
        ELSE SUBSTR(a.content, 1, {excerpt})
    END
FROM articles_fts af
JOIN articles a ON a.id = af.rowid
JOIN dicts d ON d.code = a.dict_code
WHERE articles_fts MATCH ?{dict_filter}
ORDER BY d.favorite DESC, d.code, a.id
LIMIT {limit}
"""

ARTICLE_SQL = """
SELECT d.code, d.name, a.id,
    COALESCE(
        (SELECT w.word_iast FROM words w
            WHERE w.article_id = a.id ORDER BY w.id LIMIT 1),
        ''
    ),
    a.content
FROM articles a
JOIN dicts d ON d.code = a.dict_code
WHERE a.id = ?
"""


def build_dict_filter(
    column: str, dict_codes: Optional[Sequence[str]]
) -> Tuple[str, List[str]]:
    """
    Build an " AND <column> IN (...)" clause for a dictionary subset.

    Returns ("", []) when no codes are given (search all dictionaries).
    """
    if not dict_codes:
        return "", []
    codes = list(dict_codes)
    placeholders = ",".join("?" * len(codes))
    return f" AND {column} IN ({placeholders})", codes


def escape_like(text: str) -> str:
    """Escape LIKE wildcards so the text matches literally."""
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def fts_query(query: str) -> str:
    """
    Build an FTS5 expression that matches every whitespace-separated token
    of the query literally.
    """
    tokens = query.split()
    return " ".join('"' + token.replace('"', '""') + '"' for token in tokens)


class SearchService:
    """Search, article retrieval and dictionary listing over an IndexStore."""

    def __init__(self, store: IndexStore, limit: int = RESULT_LIMIT):
        self.store = store
        self.limit = limit

    def search(
        self,
        query: str,
        mode=SearchMode.EXACT,
        dict_codes: Optional[Sequence[str]] = None,
    ) -> List[SearchResult]:
        """Search one term in one mode; an empty query returns no results."""
        mode = SearchMode.parse(mode)
        query = query.strip()
        if not query:
            return []

        if mode is SearchMode.REVERSE:
            return self._search_content(query, dict_codes)

        lowered = query.lower()
        if mode is SearchMode.EXACT:
            match, term = EXACT_MATCH, lowered
        elif mode is SearchMode.PREFIX:
            match, term = LIKE_MATCH, escape_like(lowered) + "%"
        else:
            match, term = LIKE_MATCH, "%" + escape_like(lowered) + "%"

        dict_filter, filter_params = build_dict_filter("w.dict_code", dict_codes)
        sql = HEADWORD_SQL.format(
            match=match, dict_filter=dict_filter, limit=self.limit
        )
        rows = self.store.query(
            sql, [term, term] + filter_params, operation=f"{mode.value} search"
        )
        return [SearchResult.from_row(row) for row in rows]

    def _search_content(
        self, query: str, dict_codes: Optional[Sequence[str]]
    ) -> List[SearchResult]:
        if not self.store.fulltext_ready():
            logger.warning(
                "Full-text indexes are not built; reverse search returns nothing"
            )
            return []

        expression = fts_query(query)
        dict_filter, filter_params = build_dict_filter("a.dict_code", dict_codes)
        sql = REVERSE_SQL.format(
            excerpt=EXCERPT_LENGTH, dict_filter=dict_filter, limit=self.limit
        )
        rows = self.store.query(
            sql, [expression] + filter_params, operation="reverse search"
        )
        return [SearchResult.from_row(row) for row in rows]

    def get_article(self, article_id: int) -> List[SearchResult]:
        """Get an article with its content; empty list if it does not exist."""
        rows = self.store.query(ARTICLE_SQL, (article_id,), operation="get article")
        return [SearchResult.from_row(row) for row in rows]

    def get_article_content(self, article_id: int) -> Optional[str]:
        """Get the content of one article, or None if it does not exist."""
        rows = self.store.query(
            "SELECT content FROM articles WHERE id = ?",
            (article_id,),
            operation="get article content",
        )
        return rows[0][0] if rows else None

    def get_article_contents(self, article_ids: Iterable[int]) -> Dict[int, str]:
        """Batch-fetch contents; ids that do not exist are left out."""
        ids = list(dict.fromkeys(article_ids))
        contents: Dict[int, str] = {}

        for start in range(0, len(ids), CONTENT_BATCH_SIZE):
            chunk = ids[start : start + CONTENT_BATCH_SIZE]
            placeholders = ",".join("?" * len(chunk))
            rows = self.store.query(
                f"SELECT id, content FROM articles WHERE id IN ({placeholders})",
                chunk,
                operation="get article contents",
            )
            contents.update({row[0]: row[1] for row in rows})

        return contents

    def list_dictionaries(self) -> List[Dictionary]:
        """List all dictionaries, favorites first."""
        rows = self.store.query(
            """
            SELECT code, name, from_lang, to_lang, favorite
            FROM dicts
            ORDER BY favorite DESC, code
            """,
            operation="list dictionaries",
        )
        return [Dictionary.from_row(row) for row in rows]
