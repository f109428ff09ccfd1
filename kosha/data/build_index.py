"""
Build a dictionary index from a directory of <code>.json source files.

Usage:
    kosha-build-index --input dicts/ --output sanskrit.db
"""

import argparse
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from tqdm import tqdm

from kosha.config import get_database_path, get_index_config
from kosha.data.check_index import run_all_checks
from kosha.data.sources import index_source, read_source_file
from kosha.db.index import IndexStore
from kosha.exceptions import KoshaError
from kosha.logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    """Outcome of one index build."""

    output: Path
    dictionaries: List[str] = field(default_factory=list)
    failures: Dict[str, str] = field(default_factory=dict)  # file name -> error
    word_count: int = 0
    article_count: int = 0
    elapsed: float = 0.0
    optimized: bool = False

    @property
    def succeeded(self) -> bool:
        return bool(self.dictionaries)


def find_source_files(input_dir: Path) -> List[Path]:
    """All <code>.json files in a directory, sorted by name."""
    return sorted(input_dir.glob("*.json"))


def build_index(
    input_dir: Union[str, Path],
    output: Union[str, Path],
    show_progress: bool = True,
) -> BuildReport:
    """
    Index every source file in input_dir into a fresh database at output.

    A file that fails to read or insert is rolled back on its own and
    recorded in the report; the other files are still indexed.
    """
    input_dir = Path(input_dir)
    output = Path(output)
    report = BuildReport(output=output)
    start = time.time()

    files = find_source_files(input_dir)
    if not files:
        raise KoshaError(f"No .json source files found in {input_dir}")

    output.parent.mkdir(parents=True, exist_ok=True)
    if output.exists():
        logger.info(f"Removing existing index {output}")
        output.unlink()

    with IndexStore.open_for_bulk_insert(output) as store:
        store.init_bulk_schema()

        with store.begin_bulk_load() as loader:
            progress = tqdm(
                files, desc="Indexing", unit="dict", disable=not show_progress
            )
            for path in progress:
                code = path.stem
                try:
                    with loader.dictionary_scope(code):
                        source = read_source_file(path)
                        words, articles = index_source(loader, source)
                except (OSError, KoshaError) as e:
                    report.failures[path.name] = str(e)
                    logger.error(f"Skipping {path.name}: {e}")
                    continue

                report.dictionaries.append(code)
                report.word_count += words
                report.article_count += articles
                logger.debug(f"{code}: {words:,} words, {articles:,} articles")

        store.rebuild_fulltext_indexes()
        report.optimized = store.finalize()

    report.elapsed = time.time() - start
    return report


def print_summary(report: BuildReport):
    print("\n" + "=" * 50)
    print(f"Dictionaries: {len(report.dictionaries)}")
    print(f"Articles: {report.article_count:,}")
    print(f"Words: {report.word_count:,}")
    print(f"Time: {report.elapsed:.1f}s")
    if report.output.exists():
        size_mb = report.output.stat().st_size / (1024 * 1024)
        print(f"Database size: {size_mb:.1f} MB")
    if not report.optimized:
        print("Warning: index was not optimized")

    if report.failures:
        print(f"\nFailed files ({len(report.failures)}):")
        for name, error in report.failures.items():
            print(f"  {name}: {error}")


def main(argv: Optional[List[str]] = None) -> int:
    config = get_index_config()
    setup_logging(config["log_level"], config["log_file"])

    parser = argparse.ArgumentParser(description="Build a Sanskrit dictionary index")
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Directory containing <code>.json dictionary files",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Index database to create (default: KOSHA_DB_PATH or data dir)",
    )
    parser.add_argument(
        "--no-progress", action="store_true", help="Disable the progress bar"
    )
    parser.add_argument(
        "--check", action="store_true", help="Run index checks after building"
    )
    args = parser.parse_args(argv)

    input_dir = Path(args.input)
    if not input_dir.is_dir():
        print(f"Input directory {input_dir} does not exist.")
        return 1

    output = Path(args.output) if args.output else get_database_path()
    print(f"Building index {output} from {input_dir}")

    try:
        report = build_index(input_dir, output, show_progress=not args.no_progress)
    except KoshaError as e:
        print(f"Build failed: {e}")
        return 1

    print_summary(report)
    if not report.succeeded:
        return 1

    if args.check:
        with IndexStore.open(output) as store:
            return run_all_checks(store)
    return 0


if __name__ == "__main__":
    exit(main())
