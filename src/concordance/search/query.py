"""Query engine: wildcard-aware predicate selection and the sort contract.

Callers hand in raw word and document filters. They are turned once into a
list of tagged predicates, each predicate is executed against the store, and
the concatenated rows are sorted case-insensitively by context.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from itertools import product
import logging
from typing import TYPE_CHECKING

from concordance.domain.model import ConcordanceHit
from concordance.observability.metrics import SEARCH_LATENCY, track_latency
from concordance.observability.tracing import create_span


if TYPE_CHECKING:
    from concordance.search.sqlite_storage import ConcordanceStore

logger = logging.getLogger(__name__)

WILDCARD = ""


@dataclass(frozen=True, slots=True)
class AllContexts:
    """Match every stored window."""


@dataclass(frozen=True, slots=True)
class ByWord:
    word: str


@dataclass(frozen=True, slots=True)
class ByDocument:
    document: str


@dataclass(frozen=True, slots=True)
class ByWordAndDocument:
    word: str
    document: str


SearchPredicate = AllContexts | ByWord | ByDocument | ByWordAndDocument


def normalize_terms(values: Sequence[str]) -> list[str] | None:
    """Trim caller values; return None when the sequence means "match anything".

    An empty sequence, or one whose values are all blank (the canonical
    ``[""]`` sentinel), is the wildcard. Otherwise blank entries are dropped.
    """
    trimmed = [value.strip() for value in values]
    specific = [value for value in trimmed if value != WILDCARD]
    return specific or None


def build_predicates(words: Sequence[str], documents: Sequence[str]) -> list[SearchPredicate]:
    """Choose the predicate shape from which side(s) are wildcarded."""
    specific_words = normalize_terms(words)
    specific_documents = normalize_terms(documents)

    if specific_words is None and specific_documents is None:
        return [AllContexts()]
    if specific_documents is None:
        return [ByWord(word.lower()) for word in specific_words]
    if specific_words is None:
        return [ByDocument(document) for document in specific_documents]
    return [
        ByWordAndDocument(word=word.lower(), document=document)
        for document, word in product(specific_documents, specific_words)
    ]


def sort_hits(hits: list[ConcordanceHit]) -> list[ConcordanceHit]:
    """Sort ascending by context, case-insensitive; ties keep retrieval order."""
    return sorted(hits, key=lambda hit: hit.context.lower())


class ConcordanceQueryEngine:
    """Read-only search over a ``ConcordanceStore``."""

    def __init__(self, store: ConcordanceStore) -> None:
        self.store = store

    def search(self, words: Sequence[str], documents: Sequence[str]) -> list[ConcordanceHit]:
        predicates = build_predicates(words, documents)
        with (
            create_span("concordance.search", attributes={"search.predicates": len(predicates)}) as span,
            track_latency(SEARCH_LATENCY),
        ):
            hits: list[ConcordanceHit] = []
            for predicate in predicates:
                hits.extend(self.store.find_contexts(predicate))
            span.set_attribute("search.hits", len(hits))

        logger.debug("Search over %d predicate(s) returned %d hit(s)", len(predicates), len(hits))
        return sort_hits(hits)
