from __future__ import annotations

import sqlite3
from typing import Callable, Optional


def get_connection(db_path: str, timeout: Optional[float] = 30.0) -> sqlite3.Connection:
    """Open a SQLite connection for one import session.

    - WAL journal so readers do not block the single writer
    - busy timeout so a concurrent import waits for the write lock instead of failing
    - foreign_keys ON to enforce integrity
    """
    conn = sqlite3.connect(db_path, timeout=timeout or 30.0)
    try:
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA synchronous=NORMAL;")
        conn.execute("PRAGMA foreign_keys=ON;")
    except sqlite3.Error:
        conn.close()
        raise
    return conn


def connection_factory(db_path: str, timeout: Optional[float] = 30.0) -> Callable[[], sqlite3.Connection]:
    """Zero-arg factory handed to the batch persister; each call opens a fresh session."""
    def _connect() -> sqlite3.Connection:
        return get_connection(db_path, timeout=timeout)
    return _connect
