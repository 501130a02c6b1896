"""Unit tests for the config module."""

from pathlib import Path

from pydantic import ValidationError
import pytest

from concordance.config import Settings


class TestConfig:
    def test_defaults(self):
        settings = Settings()
        assert settings.documents_dir == Path("./Texts")
        assert settings.stopwords_path == Path("./stopwords.txt")
        assert settings.database_path == Path("./concordance.db")
        assert settings.log_level == "info"
        assert settings.log_json is False

    def test_environment_overrides(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CONCORDANCE_DOCUMENTS_DIR", str(tmp_path / "corpus"))
        monkeypatch.setenv("CONCORDANCE_DATABASE_PATH", str(tmp_path / "words.db"))
        monkeypatch.setenv("CONCORDANCE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("CONCORDANCE_LOG_JSON", "true")

        settings = Settings()

        assert settings.documents_dir == tmp_path / "corpus"
        assert settings.database_path == tmp_path / "words.db"
        assert settings.log_level == "debug"
        assert settings.log_json is True

    def test_dotenv_file_is_read(self, tmp_path: Path):
        (tmp_path / ".env").write_text("CONCORDANCE_STOPWORDS_PATH=/data/stop.txt\n", encoding="utf-8")
        assert Settings().stopwords_path == Path("/data/stop.txt")

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setenv("CONCORDANCE_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError, match="Unknown log level"):
            Settings()

    def test_negative_busy_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("CONCORDANCE_BUSY_TIMEOUT_MS", "-1")
        with pytest.raises(ValidationError):
            Settings()
