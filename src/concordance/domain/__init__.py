"""Domain layer - entities, value objects and errors for the concordance.

Nothing in this package touches SQLite or the filesystem:
- Entities: Document, Line, ContextWindow
- Value objects: ConcordanceHit, IngestResult, StoreStats
- Errors: ConcordanceError and its subclasses
"""

from concordance.domain.errors import (
    ConcordanceError,
    DocumentReadError,
    InvalidDocumentNameError,
    StorageError,
)
from concordance.domain.model import (
    ConcordanceHit,
    ContextWindow,
    Document,
    IngestResult,
    Line,
    StoreStats,
)


__all__ = [
    "ConcordanceError",
    "ConcordanceHit",
    "ContextWindow",
    "Document",
    "DocumentReadError",
    "IngestResult",
    "InvalidDocumentNameError",
    "Line",
    "StorageError",
    "StoreStats",
]
