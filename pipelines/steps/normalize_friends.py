from __future__ import annotations

from pipelines.runner import RunContext
from services.normalizer import normalize


class NormalizeFriends:
    def run(self, ctx: RunContext) -> RunContext:
        ctx.friends = normalize(ctx.friends)
        return ctx
