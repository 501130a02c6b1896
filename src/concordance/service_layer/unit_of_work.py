"""Unit of Work for the SQLite concordance store."""

from abc import ABC, abstractmethod
import logging

from concordance.search.sqlite_storage import ConcordanceStore


logger = logging.getLogger(__name__)


class AbstractUnitOfWork(ABC):
    """Abstract Unit of Work.

    Used as a context manager around one document's ingestion: leaving the
    block without an explicit ``commit()`` rolls everything back.
    """

    store: ConcordanceStore

    def __enter__(self):
        """Enter transaction context."""
        self._committed = False
        self._begin()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit transaction context - rollback unless explicitly committed."""
        if not getattr(self, "_committed", False):
            self.rollback()

    @abstractmethod
    def _begin(self):
        raise NotImplementedError

    @abstractmethod
    def commit(self):
        """Commit the transaction."""
        raise NotImplementedError

    @abstractmethod
    def rollback(self):
        """Rollback the transaction."""
        raise NotImplementedError


class SqliteUnitOfWork(AbstractUnitOfWork):
    """Unit of Work over a single long-lived ``ConcordanceStore`` connection.

    Every ingestion shares the same connection, so the "already ingested"
    check and the write happen inside one transaction rather than across
    separately opened handles.
    """

    def __init__(self, store: ConcordanceStore):
        self.store = store
        self._committed = False

    def _begin(self):
        self.store.begin()

    def commit(self):
        self.store.commit()
        self._committed = True

    def rollback(self):
        if self.store.in_transaction:
            logger.debug("Rolling back open transaction on %s", self.store.db_path)
        self.store.rollback()
        self._committed = False
