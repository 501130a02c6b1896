"""Domain model - entities and value objects of the concordance.

Following Cosmic Python principles:
- Domain model has NO dependencies on infrastructure
- Document is the aggregate root; Lines and ContextWindows belong to it
- Everything is immutable once ingested (frozen Pydantic dataclasses)
"""

from typing import NamedTuple

from pydantic import Field
from pydantic.dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """Aggregate root: one ingested text, identified by its unique name."""

    name: str = Field(min_length=1)


@dataclass(frozen=True)
class Line:
    """One normalized row of a document.

    ``position`` is 1-based and dense within the document. ``content`` is the
    normalized raw line (may be empty for blank source lines).
    """

    position: int = Field(ge=1)
    content: str = Field()
    document: str = Field(min_length=1)


@dataclass(frozen=True)
class ContextWindow:
    """One occurrence of an anchor word, rotated to the front of its line.

    ``position`` is 1-based and dense within the owning line, in emission order.
    """

    position: int = Field(ge=1)
    word: str = Field(min_length=1)
    content: str = Field(min_length=1)
    line: int = Field(ge=1)
    document: str = Field(min_length=1)

    def __post_init__(self) -> None:
        if self.word != self.word.lower():
            raise ValueError("Anchor word must be stored lowercase")


class ConcordanceHit(NamedTuple):
    """A search result row: the source line and the rotated context."""

    line: str
    context: str


@dataclass(frozen=True)
class IngestResult:
    """Outcome of ingesting a single document."""

    document: str
    skipped: bool = False
    lines_written: int = Field(default=0, ge=0)
    contexts_written: int = Field(default=0, ge=0)


@dataclass(frozen=True)
class StoreStats:
    """Row counts of the persisted concordance."""

    documents: int = Field(default=0, ge=0)
    lines: int = Field(default=0, ge=0)
    contexts: int = Field(default=0, ge=0)
