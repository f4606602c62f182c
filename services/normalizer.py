from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Union

from models.friend_batch import validate_record
from models.friend_record import REQUIRED_FIELDS, FriendRecord
from services.errors import IncompleteRecord


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _check_required(get, index: int) -> None:
    for field in REQUIRED_FIELDS:
        if _is_blank(get(field)):
            raise IncompleteRecord(field, index)


def normalize(records: Iterable[Union[FriendRecord, Mapping[str, Any]]]) -> List[FriendRecord]:
    """Last gate before storage.

    Required fields must carry a non-blank value. Optional fields the text did
    not mention are None on the model and go to the database as NULL; empty
    strings are kept as given.
    """
    normalized: List[FriendRecord] = []
    for index, raw in enumerate(records):
        if isinstance(raw, Mapping):
            # Missing/blank required keys are reported before type checks
            _check_required(raw.get, index)
            record = validate_record(raw)
        else:
            record = validate_record(raw)
            _check_required(lambda f: getattr(record, f, None), index)
        normalized.append(record)
    return normalized
