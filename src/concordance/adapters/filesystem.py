"""Filesystem adapters: the document corpus and the stop-word list."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
import logging
from pathlib import Path

from concordance.domain.errors import DocumentReadError
from concordance.search.analyzers import StopWordSet


logger = logging.getLogger(__name__)

TEXT_SUFFIX = ".txt"


class AbstractDocumentSource(ABC):
    """Port for enumerating documents and reading their raw lines."""

    @abstractmethod
    def list_documents(self) -> list[str]:
        """Return the names of all available documents."""
        raise NotImplementedError

    @abstractmethod
    def read_lines(self, name: str) -> Iterator[str]:
        """Yield the raw lines of a document, without line terminators.

        Raises:
            DocumentReadError: the document cannot be opened or read
        """
        raise NotImplementedError


class FileSystemDocumentSource(AbstractDocumentSource):
    """Documents are ``<documents_dir>/<name>.txt`` files.

    A document's name is its file name without directory and ``.txt`` suffix.
    """

    def __init__(self, documents_dir: str | Path):
        self.documents_dir = Path(documents_dir)

    def path_for(self, name: str) -> Path:
        return self.documents_dir / f"{name}{TEXT_SUFFIX}"

    def list_documents(self) -> list[str]:
        try:
            entries = list(self.documents_dir.iterdir())
        except OSError as e:
            raise DocumentReadError(str(self.documents_dir), f"cannot list directory: {e}") from e
        return sorted(path.stem for path in entries if path.is_file() and path.suffix == TEXT_SUFFIX)

    def read_lines(self, name: str) -> Iterator[str]:
        """Yield decoded lines; text that is not valid UTF-8 is a read error."""
        path = self.path_for(name)
        try:
            with path.open("r", encoding="utf-8") as handle:
                for line in handle:
                    yield line.rstrip("\r\n")
        except UnicodeDecodeError as e:
            raise DocumentReadError(name, f"not valid UTF-8: {e}") from e
        except OSError as e:
            raise DocumentReadError(name, str(e)) from e


def load_stopwords(path: str | Path | None) -> StopWordSet:
    """Load a newline-delimited stop-word list.

    A missing or unreadable file is not an error: the filter simply gets an
    empty set.
    """
    if path is None:
        return StopWordSet.empty()

    stopwords_path = Path(path)
    try:
        text = stopwords_path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Stop-word list %s unavailable (%s); continuing without stop words", stopwords_path, e)
        return StopWordSet.empty()

    stopwords = StopWordSet(text.splitlines())
    logger.info("Loaded %d stop words from %s", len(stopwords), stopwords_path)
    return stopwords
