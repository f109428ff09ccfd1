"""
Helpers for displaying article content.

Article text carries light HTML-ish markup (<b>, <i>, <br>, <p>) from the
source dictionaries.
"""

import re
from typing import List, Tuple

from kosha.services.transliterate import to_search_terms

_BREAK_TAGS = re.compile(r"<\s*(br|p)\s*/?\s*>", re.IGNORECASE)
_STYLE_TAGS = re.compile(r"<\s*/?\s*[bi]\s*>", re.IGNORECASE)


def clean_markup(content: str) -> str:
    """Turn line-break tags into blank lines and drop bold/italic tags."""
    result = _BREAK_TAGS.sub("\n\n", content)
    return _STYLE_TAGS.sub("", result)


def highlight_spans(content: str, query: str) -> List[Tuple[int, int]]:
    """
    Find (start, end) spans of the query in content, matching the query in
    both scripts and ignoring case.
    """
    terms = to_search_terms(query)
    if not terms:
        return []

    # Longest first so a longer form wins over its own prefix
    terms.sort(key=len, reverse=True)
    pattern = re.compile("|".join(re.escape(term) for term in terms), re.IGNORECASE)
    return [match.span() for match in pattern.finditer(content)]
