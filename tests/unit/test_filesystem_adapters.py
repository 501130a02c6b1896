"""Unit tests for the filesystem document source and stop-word loader."""

from pathlib import Path

import pytest

from concordance.adapters.filesystem import FileSystemDocumentSource, load_stopwords
from concordance.domain.errors import DocumentReadError


class TestFileSystemDocumentSource:
    def test_lists_txt_documents_by_stem(self, corpus_dir: Path, write_document):
        write_document("Dom Casmurro", "x")
        write_document("alpha", "y")
        (corpus_dir / "notes.md").write_text("ignored")
        (corpus_dir / "nested.txt").mkdir()

        assert FileSystemDocumentSource(corpus_dir).list_documents() == ["Dom Casmurro", "alpha"]

    def test_missing_directory_raises(self, tmp_path: Path):
        with pytest.raises(DocumentReadError):
            FileSystemDocumentSource(tmp_path / "nope").list_documents()

    def test_reads_lines_without_terminators(self, source: FileSystemDocumentSource, write_document):
        write_document("doc", "first\r\nsecond\n\nlast")
        assert list(source.read_lines("doc")) == ["first", "second", "", "last"]

    def test_invalid_utf8_is_a_read_error(self, source: FileSystemDocumentSource, corpus_dir: Path):
        (corpus_dir / "latin.txt").write_bytes("Cap\u00edtulo primeiro\n".encode("latin-1"))
        with pytest.raises(DocumentReadError, match="not valid UTF-8"):
            list(source.read_lines("latin"))

    def test_missing_document_raises_on_read(self, source: FileSystemDocumentSource):
        lines = source.read_lines("absent")
        with pytest.raises(DocumentReadError, match="absent"):
            next(lines)


class TestLoadStopwords:
    def test_loads_lowercased_entries(self, tmp_path: Path):
        path = tmp_path / "stop.txt"
        path.write_text("The\n\n  of \nand\n", encoding="utf-8")

        stopwords = load_stopwords(path)

        assert list(stopwords) == ["and", "of", "the"]

    def test_missing_file_yields_empty_set(self, tmp_path: Path, caplog):
        with caplog.at_level("WARNING"):
            stopwords = load_stopwords(tmp_path / "missing.txt")
        assert len(stopwords) == 0
        assert "continuing without stop words" in caplog.text

    def test_none_yields_empty_set(self):
        assert not load_stopwords(None)
