"""
Checks for verifying a built index: schema, full-text readiness and content.
"""

from pathlib import Path
from typing import Any, Dict

from kosha.config import get_database_path
from kosha.db import schema
from kosha.db.index import IndexStatus, IndexStore
from kosha.exceptions import KoshaError
from kosha.services.search import SearchMode, SearchService


def check_index_schema(store: IndexStore) -> Dict[str, bool]:
    """Check that tables, indexes, triggers and full-text tables exist."""
    results = {
        "tables_exist": False,
        "schema_valid": False,
        "indexes_exist": False,
        "fulltext_ready": False,
    }

    rows = store.query(
        "SELECT type, name FROM sqlite_master", operation="check index schema"
    )
    objects = {(kind, name) for kind, name in rows}

    results["tables_exist"] = all(
        ("table", name) in objects for name in schema.BASE_TABLES
    )
    if results["tables_exist"]:
        columns = {
            row[1]
            for row in store.query(
                "PRAGMA table_info(words)", operation="check index schema"
            )
        }
        required_columns = {"id", "word_iast", "word_deva", "article_id", "dict_code"}
        results["schema_valid"] = required_columns.issubset(columns)

    results["indexes_exist"] = all(
        ("index", name) in objects for name in schema.INDEXES
    ) and all(("trigger", name) in objects for name in schema.TRIGGERS)
    results["fulltext_ready"] = store.fulltext_ready()

    return results


def check_index_content(store: IndexStore) -> Dict[str, Any]:
    """Check that the index holds dictionaries, articles and searchable words."""
    results = {
        "has_data": False,
        "dictionary_count": 0,
        "article_count": 0,
        "word_count": 0,
        "sample_words_valid": False,
    }

    if store.status() is IndexStatus.EMPTY:
        return results

    counts = store.query(
        """
        SELECT
            (SELECT COUNT(*) FROM dicts),
            (SELECT COUNT(*) FROM articles),
            (SELECT COUNT(*) FROM words)
        """,
        operation="check index content",
    )[0]
    (
        results["dictionary_count"],
        results["article_count"],
        results["word_count"],
    ) = counts
    results["has_data"] = results["word_count"] > 0

    if results["has_data"]:
        # Any stored headword must be found again by an exact search
        sample = store.query(
            "SELECT word_iast FROM words ORDER BY id LIMIT 1",
            operation="check index content",
        )[0][0]
        hits = SearchService(store).search(sample, SearchMode.EXACT)
        results["sample_words_valid"] = any(hit.word == sample for hit in hits)

    return results


def run_all_checks(store: IndexStore) -> int:
    """Run all index checks, print a report and return an exit code."""
    print("Running index checks...")
    print("=" * 50)

    schema_results = check_index_schema(store)
    content_results = check_index_content(store)

    print("\nSchema:")
    print(f"  Tables exist: {schema_results['tables_exist']}")
    print(f"  Schema valid: {schema_results['schema_valid']}")
    print(f"  Indexes exist: {schema_results['indexes_exist']}")
    print(f"  Full-text ready: {schema_results['fulltext_ready']}")

    print("\nContent:")
    print(f"  Dictionaries: {content_results['dictionary_count']:,}")
    print(f"  Articles: {content_results['article_count']:,}")
    print(f"  Words: {content_results['word_count']:,}")
    print(f"  Sample words valid: {content_results['sample_words_valid']}")

    all_passed = (
        all(schema_results.values())
        and content_results["has_data"]
        and content_results["sample_words_valid"]
    )

    print("\n" + "=" * 50)
    if all_passed:
        print("All checks PASSED - index is ready to distribute.")
        return 0
    print("Some checks FAILED - index may not be usable.")
    return 1


def main() -> int:
    import argparse

    parser = argparse.ArgumentParser(description="Check a dictionary index")
    parser.add_argument(
        "db_path",
        nargs="?",
        default=str(get_database_path()),
        help="Path to index database",
    )
    args = parser.parse_args()

    if not Path(args.db_path).exists():
        print(f"Index not found: {args.db_path}")
        return 1

    try:
        with IndexStore.open(args.db_path) as store:
            return run_all_checks(store)
    except KoshaError as e:
        print(f"Error checking index: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
