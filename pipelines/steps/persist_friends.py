from __future__ import annotations

from pipelines.runner import RunContext
from services.batch_persister import BatchPersister


class PersistFriends:
    def __init__(self, persister: BatchPersister) -> None:
        self.persister = persister

    def run(self, ctx: RunContext) -> RunContext:
        ctx.result = self.persister.persist(ctx.friends)
        ctx.meta["processed_friends"] = ctx.result.count
        return ctx
