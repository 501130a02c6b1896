"""Domain exceptions raised across the concordance core."""


class ConcordanceError(Exception):
    """Base class for every error the concordance core raises."""


class DocumentReadError(ConcordanceError):
    """A document's raw lines could not be read."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Failed to read document '{name}': {reason}")
        self.name = name
        self.reason = reason


class StorageError(ConcordanceError):
    """Schema set-up, constraint or transaction failure in the store."""


class InvalidDocumentNameError(ConcordanceError):
    """A document name is empty or whitespace-only."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid document name: {name!r}")
        self.name = name
