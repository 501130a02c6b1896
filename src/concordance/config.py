"""Centralized configuration for the concordance using Pydantic Settings."""

import logging
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Strictly typed configuration loaded from ``CONCORDANCE_*`` environment variables.

    Paths that used to be fixed locations (the text directory, the stop-word
    list, the database file) are all configurable here and can be overridden
    again from the command line.
    """

    model_config = SettingsConfigDict(
        env_prefix="CONCORDANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    documents_dir: Path = Field(default=Path("./Texts"), description="Directory holding the *.txt corpus")
    stopwords_path: Path = Field(
        default=Path("./stopwords.txt"),
        description="Newline-delimited stop-word list; a missing file means no stop words",
    )
    database_path: Path = Field(default=Path("./concordance.db"), description="SQLite database file")

    busy_timeout_ms: int = Field(default=30000, ge=0, description="SQLite busy timeout in milliseconds")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=False, description="Emit structured JSON logs")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        if not isinstance(logging.getLevelName(value.upper()), int):
            raise ValueError(f"Unknown log level: {value}")
        return value.lower()
