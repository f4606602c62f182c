from __future__ import annotations

import logging
import sqlite3
import time
from contextlib import closing
from typing import Callable, Sequence

from db.repos.friends_repo import FriendsRepo
from models.friend_record import FriendRecord
from models.persisted_batch_result import PersistedBatchResult
from services.errors import PersistenceFailure


logger = logging.getLogger(__name__)


class BatchPersister:
    """Stores one extracted batch with a single INSERT and reports the ids it got.

    The id range is computed as [first_id, first_id + affected - 1]. That holds
    because SQLite lets one writer hold the database lock for the whole
    statement, so AUTOINCREMENT values inside it cannot interleave with
    another session's rows. A different engine needs that re-checked.
    """

    def __init__(self, connect: Callable[[], sqlite3.Connection]) -> None:
        self.connect = connect

    def persist(self, records: Sequence[FriendRecord]) -> PersistedBatchResult:
        if not records:
            logger.info("No records to store", extra={"step": "persist", "status": "skipped", "count": 0})
            return PersistedBatchResult.empty()

        rows = [r.as_row() for r in records]
        t0 = time.monotonic()
        try:
            with closing(self.connect()) as conn:
                try:
                    affected, first_id = FriendsRepo(conn).insert_many(rows)
                    conn.commit()
                except Exception:
                    conn.rollback()
                    raise
        except sqlite3.Error as e:
            logger.error(
                "Batch insert failed",
                extra={"step": "persist", "status": "error", "count": len(rows), "error": type(e).__name__},
            )
            raise PersistenceFailure(f"batch insert of {len(rows)} friends failed: {e}", cause=e) from e

        result = PersistedBatchResult.from_range(first_id, affected)
        logger.info(
            "Stored %d friends, ids %d-%d", affected, first_id, first_id + affected - 1,
            extra={
                "step": "persist",
                "status": "ok",
                "count": affected,
                "duration_ms": int((time.monotonic() - t0) * 1000),
            },
        )
        return result
