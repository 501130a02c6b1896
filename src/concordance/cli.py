"""Command-line interface for building and querying the concordance.

Usage:
  concordance ingest                            # ingest every *.txt under $CONCORDANCE_DOCUMENTS_DIR
  concordance ingest "Dom Casmurro"             # ingest selected documents
  concordance search --words dizer              # every window anchored on "dizer"
  concordance search --words "cat, dog" --documents test
  concordance search --interactive              # prompt for words and documents
  concordance documents                         # list ingested documents
  concordance stats --metrics                   # row counts plus Prometheus metrics
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys

from concordance.adapters.filesystem import FileSystemDocumentSource, load_stopwords
from concordance.config import Settings
from concordance.domain.errors import ConcordanceError
from concordance.domain.model import ConcordanceHit
from concordance.observability.logging import configure_logging
from concordance.observability.metrics import get_metrics
from concordance.search.query import WILDCARD
from concordance.search.sqlite_storage import ConcordanceStore
from concordance.service_layer.services import ingest_corpus, search_contexts
from concordance.service_layer.unit_of_work import SqliteUnitOfWork


logger = logging.getLogger(__name__)


def parse_terms(raw: str | None) -> list[str]:
    """Split comma-separated input; nothing given means the wildcard."""
    if raw is None:
        return [WILDCARD]
    terms = [term.strip() for term in raw.split(",")]
    return [term for term in terms if term] or [WILDCARD]


def format_hit(hit: ConcordanceHit) -> str:
    return f"{hit.context} (from '{hit.line}')"


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="concordance",
        description="Build and query a keyword-in-context concordance over plain-text documents",
    )
    parser.add_argument("--database", type=Path, help="SQLite database file (default: $CONCORDANCE_DATABASE_PATH)")
    parser.add_argument("--log-level", help="Logging level (default: $CONCORDANCE_LOG_LEVEL)")
    parser.add_argument("--json-logs", action="store_true", default=None, help="Emit structured JSON logs")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    ingest_parser = subparsers.add_parser("ingest", help="Ingest documents into the concordance")
    ingest_parser.add_argument("names", nargs="*", help="Document names (default: every *.txt in the directory)")
    ingest_parser.add_argument("--documents-dir", type=Path, help="Corpus directory (default: $CONCORDANCE_DOCUMENTS_DIR)")
    ingest_parser.add_argument("--stopwords", type=Path, help="Stop-word list (default: $CONCORDANCE_STOPWORDS_PATH)")

    search_parser = subparsers.add_parser("search", help="Search context windows")
    search_parser.add_argument("--words", help="Comma-separated anchor words (default: any)")
    search_parser.add_argument("--documents", help="Comma-separated document names (default: any)")
    search_parser.add_argument("--interactive", action="store_true", help="Prompt for words and documents")

    subparsers.add_parser("documents", help="List ingested documents")

    stats_parser = subparsers.add_parser("stats", help="Show row counts")
    stats_parser.add_argument("--metrics", action="store_true", help="Also print Prometheus metrics")

    return parser


def _prompt_terms(label: str) -> list[str]:
    return parse_terms(input(f"{label} (comma-separated, empty for any): "))


def ingest_command(args: argparse.Namespace, settings: Settings, store: ConcordanceStore) -> int:
    source = FileSystemDocumentSource(args.documents_dir or settings.documents_dir)
    stopwords = load_stopwords(args.stopwords or settings.stopwords_path)
    names = args.names or source.list_documents()
    if not names:
        logger.info("No documents found in %s; nothing to ingest", source.documents_dir)
        return 0

    results = ingest_corpus(names, SqliteUnitOfWork(store), source, stopwords)
    ingested = sum(1 for result in results if not result.skipped)
    logger.info("Ingestion finished: %d ingested, %d skipped", ingested, len(results) - ingested)
    return 0


def search_command(args: argparse.Namespace, store: ConcordanceStore) -> int:
    if args.interactive:
        try:
            words = _prompt_terms("Words")
            documents = _prompt_terms("Documents")
        except (EOFError, KeyboardInterrupt):
            logger.error("Search cancelled: no input")
            return 1
    else:
        words = parse_terms(args.words)
        documents = parse_terms(args.documents)

    hits = search_contexts(words, documents, store)
    for hit in hits:
        sys.stdout.write(format_hit(hit) + "\n")
    if not hits:
        logger.info("No context windows matched")
    return 0


def documents_command(store: ConcordanceStore) -> int:
    for name in store.list_documents():
        sys.stdout.write(name + "\n")
    return 0


def stats_command(args: argparse.Namespace, store: ConcordanceStore) -> int:
    stats = store.stats()
    sys.stdout.write(f"documents: {stats.documents}\nlines: {stats.lines}\ncontexts: {stats.contexts}\n")
    if args.metrics:
        sys.stdout.write(get_metrics().decode("utf-8"))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logging(
        level=args.log_level or settings.log_level,
        json_output=settings.log_json if args.json_logs is None else args.json_logs,
    )

    if not args.command:
        parser.print_help()
        return 1

    try:
        with ConcordanceStore(args.database or settings.database_path, busy_timeout_ms=settings.busy_timeout_ms) as store:
            if args.command == "ingest":
                return ingest_command(args, settings, store)
            if args.command == "search":
                return search_command(args, store)
            if args.command == "documents":
                return documents_command(store)
            if args.command == "stats":
                return stats_command(args, store)
    except ConcordanceError as exc:
        logger.error("%s", exc)
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
