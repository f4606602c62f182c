from __future__ import annotations

import sqlite3
from typing import Any, Dict, List, Sequence, Tuple

from models.friend_record import FRIEND_COLUMNS


class FriendsRepo:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def insert_many(self, rows: Sequence[Tuple]) -> Tuple[int, int]:
        """Insert every row with a single multi-row INSERT; returns (affected, first_id).

        Does not commit; the caller owns the transaction.
        """
        if not rows:
            return 0, 0
        width = len(FRIEND_COLUMNS)
        placeholders = "(" + ", ".join(["?"] * width) + ")"
        sql = (
            f"INSERT INTO friends ({', '.join(FRIEND_COLUMNS)}) "
            f"VALUES {', '.join([placeholders] * len(rows))};"
        )
        params: List[Any] = []
        for row in rows:
            if len(row) != width:
                raise ValueError(f"friend row has {len(row)} values, expected {width}")
            params.extend(row)
        cur = self.conn.cursor()
        cur.execute(sql, params)
        affected = int(cur.rowcount)
        # lastrowid is the id of the last row the statement inserted
        first_id = int(cur.lastrowid) - affected + 1
        return affected, first_id

    def get_by_ids(self, ids: Sequence[int]) -> List[Dict[str, Any]]:
        """Fetch rows by id, ascending; unknown ids are skipped."""
        if not ids:
            return []
        cols = ("id",) + FRIEND_COLUMNS + ("created_at",)
        sql = (
            f"SELECT {', '.join(cols)} FROM friends "
            f"WHERE id IN ({', '.join(['?'] * len(ids))}) ORDER BY id;"
        )
        cur = self.conn.cursor()
        cur.execute(sql, tuple(ids))
        return [dict(zip(cols, r)) for r in cur.fetchall()]

    def list_recent(self, limit: int = 10) -> List[Dict[str, Any]]:
        cols = ("id",) + FRIEND_COLUMNS + ("created_at",)
        cur = self.conn.cursor()
        cur.execute(f"SELECT {', '.join(cols)} FROM friends ORDER BY id DESC LIMIT ?;", (limit,))
        return [dict(zip(cols, r)) for r in cur.fetchall()]

    def count(self) -> int:
        cur = self.conn.cursor()
        cur.execute("SELECT COUNT(*) FROM friends;")
        return int(cur.fetchone()[0])
