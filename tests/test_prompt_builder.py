from __future__ import annotations

import json

from services.prompt_builder import EXAMPLE_RECORD, build_prompt


TEXT = "张三, male, about 30, works at Acme as Engineer, phone 13900000000"


def test_prompt_is_deterministic():
    assert build_prompt(TEXT) == build_prompt(TEXT)
    assert build_prompt(TEXT) != build_prompt(TEXT + ".")


def test_prompt_embeds_text_verbatim():
    odd = "  line one\n\tline two {braces} %s  "
    assert odd in build_prompt(odd)


def test_prompt_lists_every_field_and_example():
    prompt = build_prompt(TEXT)
    for key in ("name", "gender", "birth_date", "company", "title", "phone", "wechat"):
        assert f"- {key}:" in prompt
    assert "- name:" in prompt and "(required)" in prompt
    assert "- wechat:" in prompt and "(optional)" in prompt
    assert json.dumps([EXAMPLE_RECORD], ensure_ascii=False, indent=2) in prompt
    assert "JSON array" in prompt
