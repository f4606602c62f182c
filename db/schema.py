from __future__ import annotations

import sqlite3


def bootstrap(conn: sqlite3.Connection) -> None:
    """Create the friends table if it does not exist (idempotent, no migrations)."""
    cur = conn.cursor()
    cur.execute(
        (
            "CREATE TABLE IF NOT EXISTS friends (\n"
            "  id INTEGER PRIMARY KEY AUTOINCREMENT,\n"
            "  name TEXT NOT NULL,\n"
            "  gender TEXT NOT NULL,\n"
            "  birth_date TEXT NOT NULL,\n"
            "  company TEXT,\n"
            "  title TEXT,\n"
            "  phone TEXT,\n"
            "  wechat TEXT,\n"
            "  created_at TEXT NOT NULL DEFAULT (datetime('now'))\n"
            ")"
        )
    )
    cur.execute("CREATE INDEX IF NOT EXISTS idx_friends_name ON friends(name);")
    conn.commit()
