"""
Reading per-dictionary source files and feeding them to the bulk loader.

Source file format (JSON, one file per dictionary, named <code>.json):

    {
      "name": "Monier-Williams ...",
      "data": {
        "words": {"dharma": [12, 13], "karma": 7, "yoga": "3, 4"},
        "text":  {"12": "<b>dharma</b> m. ...", ...}
      }
    }

Article indices for a headword arrive as an int, a list of ints or a
comma-separated string; parse_indices() turns all three into List[int]
before anything reaches the loader.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple, Union

from kosha.data.dictionaries import resolve_dictionary
from kosha.db.loader import BulkLoader
from kosha.exceptions import SourceFormatError
from kosha.services.transliterate import iast_to_devanagari, is_devanagari

logger = logging.getLogger(__name__)


@dataclass
class SourceDictionary:
    """One parsed source file."""

    code: str
    name: str
    articles: Dict[str, str] = field(default_factory=dict)        # index -> content
    headwords: Dict[str, List[int]] = field(default_factory=dict)  # headword -> indices
    skipped_headwords: int = 0


def parse_indices(raw: Union[int, List, str]) -> List[int]:
    """Normalize an article-index value (int, list of ints, or "1, 2") to a list."""
    # bool is an int subclass but never a valid index
    if isinstance(raw, bool):
        raise SourceFormatError(f"Unsupported article index value: {raw!r}")
    if isinstance(raw, int):
        return [raw]
    if isinstance(raw, list):
        indices = []
        for item in raw:
            indices.extend(parse_indices(item))
        return indices
    if isinstance(raw, str):
        indices = []
        for part in raw.split(","):
            part = part.strip()
            if not part:
                continue
            try:
                indices.append(int(part))
            except ValueError:
                raise SourceFormatError(f"Invalid article index '{part}'") from None
        return indices
    raise SourceFormatError(f"Unsupported article index value: {raw!r}")


def parse_source(code: str, data: dict) -> SourceDictionary:
    """Build a SourceDictionary from decoded JSON."""
    if not isinstance(data, dict):
        raise SourceFormatError(f"{code}: top level must be an object")
    body = data.get("data")
    if not isinstance(body, dict):
        raise SourceFormatError(f"{code}: missing 'data' object")

    words = body.get("words") or {}
    text = body.get("text") or {}
    if not isinstance(words, dict) or not isinstance(text, dict):
        raise SourceFormatError(f"{code}: 'words' and 'text' must be objects")

    source = SourceDictionary(
        code=code,
        name=data.get("name") or code,
        articles={str(idx): content for idx, content in text.items()},
    )

    for word, raw in words.items():
        try:
            source.headwords[word] = parse_indices(raw)
        except SourceFormatError as e:
            source.skipped_headwords += 1
            logger.debug(f"{code}: skipping headword '{word}': {e}")

    if source.skipped_headwords:
        logger.warning(
            f"{code}: skipped {source.skipped_headwords} headwords with malformed indices"
        )
    return source


def read_source_file(path: Union[str, Path]) -> SourceDictionary:
    """Read and parse a <code>.json source file."""
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise SourceFormatError(f"{path.name}: invalid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise SourceFormatError(f"{path.name}: not valid UTF-8: {e}") from e
    return parse_source(path.stem, data)


def _index_sort_key(idx: str):
    # Numeric indices in numeric order, anything else after them
    try:
        return (0, int(idx), "")
    except ValueError:
        return (1, 0, idx)


def devanagari_form(word: str) -> str:
    """Devanagari form of a headword; Devanagari headwords are kept verbatim."""
    if is_devanagari(word):
        return word
    return iast_to_devanagari(word)


def index_source(loader: BulkLoader, source: SourceDictionary) -> Tuple[int, int]:
    """
    Insert one source dictionary through the loader.

    Returns (word_count, article_count). Headword indices with no matching
    article are ignored.
    """
    meta = resolve_dictionary(source.code, source.name)
    loader.insert_dictionary(
        meta.code, meta.name, meta.from_lang, meta.to_lang, meta.favorite
    )

    article_ids: Dict[str, int] = {}
    for idx in sorted(source.articles, key=_index_sort_key):
        article_ids[idx] = loader.insert_article(source.code, source.articles[idx])

    word_count = 0
    for word, indices in source.headwords.items():
        word_deva = devanagari_form(word)
        for idx in indices:
            article_id = article_ids.get(str(idx))
            if article_id is None:
                continue
            loader.insert_word(word, word_deva, article_id, source.code)
            word_count += 1

    return word_count, len(article_ids)
