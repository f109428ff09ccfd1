"""
Plain data shapes shared by the query layer and the HTTP API.

Example:
    Search("dharma", exact) over mw, ap90 and pw yields three SearchResult
    rows, one per dictionary, each pointing at its own article.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class Dictionary:
    """Metadata for one lexical source."""

    code: str           # e.g. "mw", "ap90"
    name: str           # Display name
    from_lang: str      # Source language code
    to_lang: str        # Target language code
    favorite: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code,
            "name": self.name,
            "from_lang": self.from_lang,
            "to_lang": self.to_lang,
            "favorite": self.favorite,
        }

    @classmethod
    def from_row(cls, row) -> "Dictionary":
        """Create from a (code, name, from_lang, to_lang, favorite) row."""
        code, name, from_lang, to_lang, favorite = row
        return cls(
            code=code,
            name=name,
            from_lang=from_lang or "",
            to_lang=to_lang or "",
            favorite=bool(favorite),
        )


@dataclass
class SearchResult:
    """One hit: a headword (or content excerpt) pointing at an article."""

    dict_code: str
    dict_name: str
    article_id: int
    word: str                       # Empty when no headword points at the article
    content: Optional[str] = None   # None until fetched

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {
            "word": self.word,
            "dict_code": self.dict_code,
            "dict_name": self.dict_name,
            "article_id": self.article_id,
        }
        if self.content is not None:
            data["content"] = self.content
        return data

    @classmethod
    def from_row(cls, row) -> "SearchResult":
        """Create from a (code, name, article_id, word[, content]) row."""
        content = row[4] if len(row) > 4 else None
        return cls(
            dict_code=row[0],
            dict_name=row[1],
            article_id=row[2],
            word=row[3] or "",
            content=content,
        )
