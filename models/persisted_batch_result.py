from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PersistedBatchResult(BaseModel):
    """Outcome of one batch insert: row count plus the ids assigned, ascending."""

    count: int = Field(ge=0)
    insert_ids: List[int] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _ids_match_count(self) -> "PersistedBatchResult":
        if len(self.insert_ids) != self.count:
            raise ValueError(f"expected {self.count} insert ids, got {len(self.insert_ids)}")
        return self

    @classmethod
    def empty(cls) -> "PersistedBatchResult":
        return cls(count=0, insert_ids=[])

    @classmethod
    def from_range(cls, first_id: int, count: int) -> "PersistedBatchResult":
        return cls(count=count, insert_ids=list(range(first_id, first_id + count)))

    def to_dict(self) -> Dict[str, Any]:
        return {"count": self.count, "insertIds": list(self.insert_ids)}
