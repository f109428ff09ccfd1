"""
SQLite schema for the dictionary index artifact.

Design decisions:
1. Base tables (dicts, articles, words) are created bare for bulk loading -
   no secondary indexes, no full-text tables, no triggers
2. Full-text tables use FTS5 external content so they store only the index,
   and are populated in one pass after the bulk load
3. Triggers installed with the full-text tables keep them in sync for any
   later single-row inserts
"""

BASE_TABLES = ("dicts", "articles", "words")
FULLTEXT_TABLES = ("words_fts", "articles_fts")
INDEXES = ("idx_words_article", "idx_words_dict", "idx_articles_dict")
TRIGGERS = ("words_ai", "articles_ai")

BULK_SCHEMA_SQL = """
-- Dictionary metadata
CREATE TABLE IF NOT EXISTS dicts (
    code TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    from_lang TEXT,
    to_lang TEXT,
    favorite INTEGER DEFAULT 0
);

-- Articles (definition text); ids are never reused
CREATE TABLE IF NOT EXISTS articles (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    dict_code TEXT NOT NULL,
    content TEXT NOT NULL
);

-- Headword index: one row per (headword, dictionary, article)
CREATE TABLE IF NOT EXISTS words (
    id INTEGER PRIMARY KEY,
    word_iast TEXT NOT NULL,
    word_deva TEXT,
    article_id INTEGER NOT NULL,
    dict_code TEXT NOT NULL
);
"""

FULLTEXT_SQL = """
CREATE VIRTUAL TABLE IF NOT EXISTS words_fts USING fts5(
    word_iast,
    word_deva,
    content='words',
    content_rowid='id',
    tokenize='unicode61 remove_diacritics 0'
);

CREATE VIRTUAL TABLE IF NOT EXISTS articles_fts USING fts5(
    content,
    content='articles',
    content_rowid='id',
    tokenize='unicode61 remove_diacritics 0'
);
"""

# 'rebuild' discards whatever the index holds and re-reads the content table,
# so running it twice never duplicates rows
FULLTEXT_REBUILD_SQL = """
INSERT INTO words_fts(words_fts) VALUES ('rebuild');
INSERT INTO articles_fts(articles_fts) VALUES ('rebuild');
"""

INDEXES_SQL = """
CREATE INDEX IF NOT EXISTS idx_words_article ON words(article_id);
CREATE INDEX IF NOT EXISTS idx_words_dict ON words(dict_code);
CREATE INDEX IF NOT EXISTS idx_articles_dict ON articles(dict_code);
"""

TRIGGERS_SQL = """
CREATE TRIGGER IF NOT EXISTS words_ai AFTER INSERT ON words BEGIN
    INSERT INTO words_fts(rowid, word_iast, word_deva)
    VALUES (new.id, new.word_iast, new.word_deva);
END;

CREATE TRIGGER IF NOT EXISTS articles_ai AFTER INSERT ON articles BEGIN
    INSERT INTO articles_fts(rowid, content)
    VALUES (new.id, new.content);
END;
"""

INSERT_DICT_SQL = """
INSERT INTO dicts (code, name, from_lang, to_lang, favorite)
VALUES (?, ?, ?, ?, ?)
ON CONFLICT(code) DO UPDATE SET
    name = excluded.name,
    from_lang = excluded.from_lang,
    to_lang = excluded.to_lang,
    favorite = excluded.favorite
"""

INSERT_ARTICLE_SQL = "INSERT INTO articles (dict_code, content) VALUES (?, ?)"

INSERT_WORD_SQL = """
INSERT INTO words (word_iast, word_deva, article_id, dict_code)
VALUES (?, ?, ?, ?)
"""
