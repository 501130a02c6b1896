"""Shared test fixtures and configuration."""

from collections.abc import Callable, Iterator
import os
from pathlib import Path

import pytest

from concordance.adapters.filesystem import FileSystemDocumentSource
from concordance.search.analyzers import StopWordSet
from concordance.search.sqlite_storage import ConcordanceStore
from concordance.service_layer.unit_of_work import SqliteUnitOfWork


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Keep CONCORDANCE_* variables and a stray .env out of every test."""
    for key in list(os.environ):
        if key.upper().startswith("CONCORDANCE_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store() -> Iterator[ConcordanceStore]:
    """In-memory store, closed after the test."""
    with ConcordanceStore() as concordance_store:
        yield concordance_store


@pytest.fixture
def uow(store: ConcordanceStore) -> SqliteUnitOfWork:
    return SqliteUnitOfWork(store)


@pytest.fixture
def corpus_dir(tmp_path: Path) -> Path:
    path = tmp_path / "Texts"
    path.mkdir()
    return path


@pytest.fixture
def write_document(corpus_dir: Path) -> Callable[[str, str], Path]:
    """Write ``<name>.txt`` into the corpus directory."""

    def _write(name: str, text: str) -> Path:
        path = corpus_dir / f"{name}.txt"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def source(corpus_dir: Path) -> FileSystemDocumentSource:
    return FileSystemDocumentSource(corpus_dir)


@pytest.fixture
def no_stopwords() -> StopWordSet:
    return StopWordSet.empty()
