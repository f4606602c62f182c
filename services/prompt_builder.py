from __future__ import annotations

import json

from models.friend_record import FriendRecord, OPTIONAL_FIELDS, REQUIRED_FIELDS


PROMPT_NAME = "friend_extraction_v1"

EXAMPLE_RECORD = {
    "name": "张总",
    "gender": "female",
    "birth_date": "1993-01-01",
    "company": "腾讯",
    "title": "技术总监",
    "phone": "13800138000",
    "wechat": "zhangzong2024",
}


def _field_lines() -> str:
    fields = FriendRecord.model_fields
    lines = []
    for name in REQUIRED_FIELDS:
        lines.append(f"- {name}: {fields[name].description} (required)")
    for name in OPTIONAL_FIELDS:
        lines.append(f"- {name}: {fields[name].description} (optional)")
    return "\n".join(lines)


def build_prompt(text: str) -> str:
    """Render the extraction request for one block of text.

    Pure: the same text always yields the same prompt.
    """
    example = json.dumps([EXAMPLE_RECORD], ensure_ascii=False, indent=2)
    return (
        "Extract every person (friend) described in the text below and return the data as JSON.\n"
        "\n"
        "Text:\n"
        f"{text}\n"
        "\n"
        "Return one JSON object per person. Each object must use exactly these English keys:\n"
        f"{_field_lines()}\n"
        "\n"
        "gender must be \"male\" or \"female\". birth_date must be a calendar date in YYYY-MM-DD form; "
        "when the text only gives an age or an age range, estimate a plausible birth date from it.\n"
        "Use null for optional fields the text does not mention.\n"
        "\n"
        "Example:\n"
        f"{example}\n"
        "\n"
        "Always return a JSON array (the \"friends\" list when an object wrapper is required), "
        "even when the text describes only one person. "
        "Return an empty array when no person can be identified."
    )
