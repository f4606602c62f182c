from __future__ import annotations

from pipelines.runner import RunContext
from services.extractor import FriendExtractor


class ExtractFriends:
    def __init__(self, extractor: FriendExtractor) -> None:
        self.extractor = extractor

    def run(self, ctx: RunContext) -> RunContext:
        ctx.friends = self.extractor.extract(ctx.text)
        ctx.meta["extracted_friends"] = len(ctx.friends)
        return ctx
