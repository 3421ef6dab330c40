from __future__ import annotations

import json

from llm_scraper.utils.text import repair_json_prefix, strip_code_fence


def test_strip_code_fence_with_language_tag() -> None:
    assert strip_code_fence('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_code_fence_without_language_tag() -> None:
    assert strip_code_fence('```\n[1, 2]\n```\n') == "[1, 2]"


def test_strip_code_fence_leaves_unfenced_text() -> None:
    assert strip_code_fence('  {"a": 1}  ') == '{"a": 1}'
    assert strip_code_fence("Intro\n```json\n{}\n```") == "Intro\n```json\n{}\n```"


def test_repair_restores_brace_the_model_continued_from() -> None:
    fenced = '```json\n"title": "Example", "tags": ["a", "b"]}\n```'
    repaired = repair_json_prefix(fenced)

    assert repaired.startswith("{")
    assert json.loads(repaired) == {"title": "Example", "tags": ["a", "b"]}


def test_repair_keeps_complete_object() -> None:
    fenced = '```json\n{"title": "Example", "n": 2}\n```'
    repaired = repair_json_prefix(fenced)

    assert repaired == '{"title": "Example", "n": 2}'
    assert json.loads(repaired) == json.loads(strip_code_fence(fenced))


def test_repair_passes_malformed_json_through() -> None:
    assert repair_json_prefix('"a": ') == '{"a":'
