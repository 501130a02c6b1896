"""Shared SQLite PRAGMA helpers for the concordance store."""

from __future__ import annotations

import sqlite3


def apply_store_pragmas(
    conn: sqlite3.Connection,
    *,
    busy_timeout_ms: int | None = 30000,
    cache_size_kb: int = -16384,
    temp_store: str = "MEMORY",
    journal_mode: str = "WAL",
) -> None:
    """Apply PRAGMAs for the single long-lived read/write connection."""
    if busy_timeout_ms is not None:
        conn.execute(f"PRAGMA busy_timeout = {busy_timeout_ms}")
    conn.execute("PRAGMA foreign_keys = ON")
    conn.execute(f"PRAGMA journal_mode = {journal_mode}")
    conn.execute("PRAGMA synchronous = NORMAL")
    conn.execute(f"PRAGMA cache_size = {cache_size_kb}")
    conn.execute(f"PRAGMA temp_store = {temp_store}")
