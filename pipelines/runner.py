from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from models.friend_record import FriendRecord
from models.persisted_batch_result import PersistedBatchResult


@dataclass
class RunContext:
    text: str = ""
    friends: List[FriendRecord] = field(default_factory=list)
    result: Optional[PersistedBatchResult] = None
    meta: dict = field(default_factory=dict)


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    """Runs steps in order; each step fully finishes before the next starts."""

    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        for step in self.steps:
            ctx = step.run(ctx)
        return ctx
