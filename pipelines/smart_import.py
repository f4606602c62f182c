from __future__ import annotations

from typing import Optional

from models.persisted_batch_result import PersistedBatchResult
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import ExtractFriends, NormalizeFriends, PersistFriends
from services.batch_persister import BatchPersister
from services.extractor import FriendExtractor


def process_text(
    text: str,
    *,
    extractor: FriendExtractor,
    persister: BatchPersister,
    ctx: Optional[RunContext] = None,
) -> PersistedBatchResult:
    """Extract friends from `text` and store them in one batch.

    Raises ExtractionFailure, SchemaViolation, IncompleteRecord or
    PersistenceFailure; nothing is stored unless the whole batch validated.
    Pass `ctx` to inspect the extracted records afterwards.
    """
    ctx = ctx or RunContext()
    ctx.text = text
    pipeline = Pipeline([
        ExtractFriends(extractor),
        NormalizeFriends(),
        PersistFriends(persister),
    ])
    ctx = pipeline.run(ctx)
    return ctx.result
