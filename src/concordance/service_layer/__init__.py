"""Service layer - Business logic orchestration.

- Service functions orchestrate ingestion and search use cases
- The Unit of Work makes each document's ingestion one transaction
"""

from .services import ingest_corpus, ingest_document, search_contexts
from .unit_of_work import AbstractUnitOfWork, SqliteUnitOfWork


__all__ = [
    "AbstractUnitOfWork",
    "SqliteUnitOfWork",
    "ingest_corpus",
    "ingest_document",
    "search_contexts",
]
