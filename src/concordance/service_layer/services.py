"""Service layer - ingestion and search use cases.

Following Cosmic Python Chapter 4: Service Layer
- Orchestrates the analyzer, window builder and store
- Uses the Unit of Work so each document is all-or-nothing
"""

from collections.abc import Sequence
import logging

from concordance.adapters.filesystem import AbstractDocumentSource
from concordance.domain.errors import ConcordanceError, InvalidDocumentNameError
from concordance.domain.model import ConcordanceHit, ContextWindow, IngestResult, Line
from concordance.observability.metrics import CONTEXTS_WRITTEN, DOCUMENTS_INGESTED
from concordance.observability.tracing import create_span
from concordance.search.analyzers import StopWordSet, analyze_line, filter_content_words
from concordance.search.query import ConcordanceQueryEngine
from concordance.search.sqlite_storage import ConcordanceStore
from concordance.search.windows import build_windows
from concordance.service_layer.unit_of_work import AbstractUnitOfWork


logger = logging.getLogger(__name__)


def ingest_document(
    name: str,
    uow: AbstractUnitOfWork,
    source: AbstractDocumentSource,
    stopwords: StopWordSet,
) -> IngestResult:
    """Ingest one document atomically, or skip it if it is already stored.

    The document row is inserted first, ignoring a name conflict; a conflict
    means another run already ingested it and nothing else is done. Any read
    or storage failure rolls the whole document back and propagates.

    Raises:
        InvalidDocumentNameError: ``name`` is blank; nothing is written
    """
    with create_span("concordance.ingest_document", attributes={"document.name": name}) as span:
        try:
            if not name.strip():
                raise InvalidDocumentNameError(name)
            result = _ingest_in_transaction(name, uow, source, stopwords)
        except ConcordanceError:
            DOCUMENTS_INGESTED.labels(status="failed").inc()
            logger.error("Ingestion of %r failed; nothing was committed", name, exc_info=True)
            raise

        span.set_attribute("document.skipped", result.skipped)
        span.set_attribute("document.contexts", result.contexts_written)

    if result.skipped:
        DOCUMENTS_INGESTED.labels(status="skipped").inc()
        logger.info("Document %r already ingested; skipping", name)
    else:
        DOCUMENTS_INGESTED.labels(status="ingested").inc()
        CONTEXTS_WRITTEN.inc(result.contexts_written)
        logger.info(
            "Ingested %r: %d lines, %d context windows",
            name,
            result.lines_written,
            result.contexts_written,
        )
    return result


def _ingest_in_transaction(
    name: str,
    uow: AbstractUnitOfWork,
    source: AbstractDocumentSource,
    stopwords: StopWordSet,
) -> IngestResult:
    with uow:
        if not uow.store.add_document(name):
            return IngestResult(document=name, skipped=True)

        lines_written = 0
        contexts_written = 0
        for position, raw in enumerate(source.read_lines(name), start=1):
            analyzed = analyze_line(raw)
            uow.store.add_line(Line(position=position, content=analyzed.normalized, document=name))
            lines_written += 1

            content_words = filter_content_words(analyzed.tokens, stopwords)
            windows = [
                ContextWindow(
                    position=draft.position,
                    word=draft.word,
                    content=draft.content,
                    line=position,
                    document=name,
                )
                for draft in build_windows(analyzed.tokens, content_words)
            ]
            contexts_written += uow.store.add_contexts(windows)

        uow.commit()

    return IngestResult(
        document=name,
        lines_written=lines_written,
        contexts_written=contexts_written,
    )


def ingest_corpus(
    names: Sequence[str],
    uow: AbstractUnitOfWork,
    source: AbstractDocumentSource,
    stopwords: StopWordSet,
) -> list[IngestResult]:
    """Ingest documents one at a time, stopping at the first failure.

    Each document commits on its own, so documents ingested before a failure
    stay in the store.
    """
    results = []
    for name in names:
        results.append(ingest_document(name, uow, source, stopwords))
    return results


def search_contexts(
    words: Sequence[str],
    documents: Sequence[str],
    store: ConcordanceStore,
) -> list[ConcordanceHit]:
    """Return (line, context) hits sorted case-insensitively by context."""
    return ConcordanceQueryEngine(store).search(words, documents)
