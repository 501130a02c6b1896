"""Adapters - filesystem implementations of the corpus and stop-word ports."""

from concordance.adapters.filesystem import AbstractDocumentSource, FileSystemDocumentSource, load_stopwords


__all__ = [
    "AbstractDocumentSource",
    "FileSystemDocumentSource",
    "load_stopwords",
]
