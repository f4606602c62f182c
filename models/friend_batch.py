from __future__ import annotations

from typing import Any, Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from models.friend_record import FriendRecord
from services.errors import SchemaViolation


class FriendBatch(BaseModel):
    """LLM structured output: envelope around the extracted friends array."""

    friends: List[FriendRecord] = Field(default_factory=list, description="Every person mentioned in the text")

    model_config = ConfigDict(extra="forbid")


_RECORDS = TypeAdapter(List[FriendRecord])


def friends_json_schema() -> Dict[str, Any]:
    """JSON Schema handed to the service as the output constraint."""
    return FriendBatch.model_json_schema()


def validate_record(candidate: Any) -> FriendRecord:
    """Validate one decoded JSON object; raises SchemaViolation."""
    if isinstance(candidate, FriendRecord):
        return candidate
    try:
        return FriendRecord.model_validate(candidate)
    except ValidationError as e:
        raise SchemaViolation(
            f"friend record does not match schema ({e.error_count()} errors)",
            payload=candidate,
            errors=e.errors(include_url=False),
            cause=e,
        ) from e


def validate_sequence(candidates: Any) -> List[FriendRecord]:
    """Validate a whole batch; any bad element rejects the batch.

    Accepts a bare JSON array or the {"friends": [...]} envelope.
    """
    items = candidates
    if isinstance(candidates, Mapping):
        if set(candidates.keys()) != {"friends"}:
            raise SchemaViolation("expected a JSON array of friend records", payload=candidates)
        items = candidates["friends"]
    if not isinstance(items, list):
        raise SchemaViolation("expected a JSON array of friend records", payload=candidates)
    try:
        return _RECORDS.validate_python(items)
    except ValidationError as e:
        raise SchemaViolation(
            f"friend batch does not match schema ({e.error_count()} errors)",
            payload=candidates,
            errors=e.errors(include_url=False),
            cause=e,
        ) from e
