from __future__ import annotations

import pytest

from models.friend_record import FriendRecord
from services.errors import IncompleteRecord, SchemaViolation
from services.normalizer import normalize


def test_normalize_keeps_records_and_fills_absent_optionals():
    out = normalize([{"name": "张三", "gender": "male", "birth_date": "1996-03-01", "company": ""}])
    assert len(out) == 1
    rec = out[0]
    assert rec.company == ""  # empty string is not "absent"
    assert rec.title is None and rec.phone is None and rec.wechat is None
    assert rec.as_row()[3:] == ("", None, None, None)


def test_blank_required_field_raises_incomplete_record():
    good = FriendRecord(name="张三", gender="male", birth_date="1996-03-01")
    blank = FriendRecord(name="   ", gender="female", birth_date="1990-01-01")
    with pytest.raises(IncompleteRecord) as exc:
        normalize([good, blank])
    assert exc.value.field == "name"
    assert exc.value.index == 1


def test_unvalidated_record_missing_field_raises_incomplete_record():
    rec = FriendRecord.model_construct(name="张三", gender="male", birth_date=None)
    with pytest.raises(IncompleteRecord) as exc:
        normalize([rec])
    assert exc.value.field == "birth_date"


def test_mapping_without_name_raises_incomplete_record():
    good = {"name": "张三", "gender": "male", "birth_date": "1996-03-01"}
    with pytest.raises(IncompleteRecord) as exc:
        normalize([good, {"gender": "male", "birth_date": "1990-01-01"}])
    assert exc.value.field == "name"
    assert exc.value.index == 1
    assert exc.value.stage.value == "normalize"


@pytest.mark.parametrize("blank", ["", "  ", None])
def test_mapping_with_blank_required_value_raises_incomplete_record(blank):
    with pytest.raises(IncompleteRecord) as exc:
        normalize([{"name": "张三", "gender": "female", "birth_date": blank}])
    assert exc.value.field == "birth_date"
    assert exc.value.index == 0


def test_mapping_with_wrong_type_is_schema_violation():
    with pytest.raises(SchemaViolation):
        normalize([{"name": "张三", "gender": "unknown", "birth_date": "1990-01-01"}])


def test_empty_batch():
    assert normalize([]) == []
