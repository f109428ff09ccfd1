"""Pytest configuration and fixtures."""

import json

import pytest

from kosha.db.index import IndexStore
from kosha.services.search import SearchService

SAMPLE_DICTIONARIES = [
    ("mw", "Monier-Williams", "sa", "en", True),
    ("ap90", "Apte Sanskrit-English", "sa", "en", True),
    ("pw", "Sanskrit-German Bohtlingk", "sa", "de", False),
]

# (dict_code, word_iast, word_deva, content)
SAMPLE_ENTRIES = [
    ("mw", "dharma", "धर्म", "dharma m. law, duty, virtue, righteousness, the yoga philosophy"),
    ("ap90", "dharma", "धर्म", "dharma m. religion, duty, piety"),
    ("mw", "karma", "कर्म", "karma n. act, action, work, deed"),
    ("mw", "yoga", "योग", "yoga m. union, connection, the yoga philosophy and practice"),
    ("mw", "dharmakāya", "धर्मकाय", "dharmakāya m. the body of dharma, Buddhist term"),
    ("mw", "arma", "अर्म", "arma n. weapon, arm"),
    ("pw", "dharma", "धर्म", "dharma m. Gesetz, Pflicht, Tugend"),
]


def load_sample_data(store: IndexStore):
    """Load the sample dictionaries through the bulk pipeline."""
    store.init_bulk_schema()
    with store.begin_bulk_load() as loader:
        for code, name, from_lang, to_lang, favorite in SAMPLE_DICTIONARIES:
            loader.insert_dictionary(code, name, from_lang, to_lang, favorite)
        for code, word, word_deva, content in SAMPLE_ENTRIES:
            article_id = loader.insert_article(code, content)
            loader.insert_word(word, word_deva, article_id, code)


@pytest.fixture
def empty_store():
    """Fresh in-memory index with no schema."""
    store = IndexStore.open_memory()
    yield store
    store.close()


@pytest.fixture
def bulk_store():
    """In-memory index with sample data loaded but full-text not built."""
    store = IndexStore.open_memory()
    load_sample_data(store)
    yield store
    store.close()


@pytest.fixture
def store():
    """In-memory index with sample data and full-text indexes built."""
    store = IndexStore.open_memory()
    load_sample_data(store)
    store.rebuild_fulltext_indexes()
    yield store
    store.close()


@pytest.fixture
def search_service(store):
    return SearchService(store)


class MemoryState:
    """In-memory settings store: query history and starred articles."""

    def __init__(self):
        self.queries = []
        self.starred = {}

    def add_history(self, query):
        self.queries.append(query)

    def is_starred(self, article_id):
        return article_id in self.starred

    def star_article(self, article_id, word, dict_code):
        self.starred[article_id] = (word, dict_code)

    def unstar_article(self, article_id):
        self.starred.pop(article_id, None)


def write_source(directory, code, words, text, name=None):
    """Write a <code>.json source file and return its path."""
    data = {"name": name or code, "data": {"words": words, "text": text}}
    path = directory / f"{code}.json"
    path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def source_dir(tmp_path):
    """Directory with two small source dictionaries."""
    directory = tmp_path / "sources"
    directory.mkdir()
    write_source(
        directory,
        "mw",
        {"dharma": [1], "karma": "2", "yoga": 3},
        {
            "1": "<b>dharma</b> m. law, duty",
            "2": "<b>karma</b> n. act, action",
            "3": "<b>yoga</b> m. union",
        },
    )
    write_source(
        directory,
        "xyz",
        {"rāma": [1, 2]},
        {"1": "rāma m. pleasing", "2": "rāma m. name of a hero"},
        name="Test Dictionary",
    )
    return directory
