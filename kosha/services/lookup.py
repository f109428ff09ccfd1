"""
Cross-script lookup: one user query, searched in every equivalent form.

A query typed in IAST is also searched as Devanagari (and lowercased), the
per-term result lists are merged, and duplicate articles are dropped keeping
the first occurrence, so results of earlier terms rank first. The optional
settings store records query history and starred articles.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from kosha.exceptions import StateUnavailableError
from kosha.models import SearchResult
from kosha.services.search import SearchMode, SearchService
from kosha.services.transliterate import to_search_terms

logger = logging.getLogger(__name__)


@dataclass
class LookupResult:
    """Merged results for one query across all of its search terms."""

    query: str
    mode: SearchMode
    terms: List[str] = field(default_factory=list)
    results: List[SearchResult] = field(default_factory=list)

    def dict_codes(self) -> List[str]:
        """Distinct dictionary codes among the results, in result order."""
        return list(dict.fromkeys(r.dict_code for r in self.results))


def merge_results(result_lists: Iterable[List[SearchResult]]) -> List[SearchResult]:
    """Concatenate result lists, keeping the first result for each article."""
    seen = set()
    merged = []
    for results in result_lists:
        for result in results:
            if result.article_id not in seen:
                seen.add(result.article_id)
                merged.append(result)
    return merged


class LookupService:
    """
    Runs a query in both scripts and talks to the settings store.

    state is any object with add_history(query), is_starred(article_id),
    star_article(article_id, word, dict_code) and unstar_article(article_id).
    History is only recorded for lookups that found something.
    """

    def __init__(self, search_service: SearchService, state=None):
        self.search_service = search_service
        self.state = state

    def lookup(
        self,
        query: str,
        mode=SearchMode.EXACT,
        dict_codes: Optional[Sequence[str]] = None,
    ) -> LookupResult:
        mode = SearchMode.parse(mode)
        query = query.strip()
        terms = to_search_terms(query)

        result_lists = [
            self.search_service.search(term, mode, dict_codes) for term in terms
        ]
        result = LookupResult(
            query=query, mode=mode, terms=terms, results=merge_results(result_lists)
        )

        logger.debug(
            f"Lookup '{query}' ({mode.value}): {len(terms)} terms, "
            f"{len(result.results)} results"
        )

        if result.results and self.state is not None:
            self._record_history(query)

        return result

    def _record_history(self, query: str):
        # History is a side channel; a failing store must not fail the lookup
        try:
            self.state.add_history(query)
        except Exception as e:
            logger.warning(f"Could not record '{query}' in history: {e}")

    def is_starred(self, article_id: int) -> bool:
        """False when no settings store is configured or it cannot answer."""
        if self.state is None:
            return False
        try:
            return bool(self.state.is_starred(article_id))
        except Exception as e:
            logger.warning(f"Could not read starred flag for article {article_id}: {e}")
            return False

    def toggle_starred(self, article: SearchResult) -> bool:
        """Star or unstar an article and return the new flag."""
        if self.state is None:
            raise StateUnavailableError("No settings store is configured")

        if self.state.is_starred(article.article_id):
            self.state.unstar_article(article.article_id)
            return False
        self.state.star_article(article.article_id, article.word, article.dict_code)
        return True
