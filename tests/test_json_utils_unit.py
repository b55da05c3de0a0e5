from __future__ import annotations

from agriscript.shared.json_utils import as_str_list, extract_json_object


def test_extract_json_object_from_code_fence():
    text = '```json\n{"warmUp": {"script": "家人们好"}}\n```'
    assert extract_json_object(text) == {"warmUp": {"script": "家人们好"}}


def test_extract_json_object_ignores_surrounding_prose():
    text = '好的，以下是话术：\n{"a": 1, "b": [1, 2]}\n希望对你有帮助。'
    assert extract_json_object(text) == {"a": 1, "b": [1, 2]}


def test_extract_json_object_braces_inside_strings():
    text = '{"script": "今天的价格 {超低} 哦", "quote": "他说\\"}\\""}'
    parsed = extract_json_object(text)
    assert parsed == {"script": "今天的价格 {超低} 哦", "quote": '他说"}"'}


def test_extract_json_object_skips_invalid_candidate():
    text = '注意 {不是 JSON} 然后 {"ok": true}'
    assert extract_json_object(text) == {"ok": True}


def test_extract_json_object_returns_none_when_unparsable():
    assert extract_json_object("完全没有结构化输出") is None
    assert extract_json_object('{"unterminated": ') is None
    assert extract_json_object("") is None
    assert extract_json_object(None) is None


def test_as_str_list_accepts_common_shapes():
    assert as_str_list(["甜", "", None, "脆"]) == ["甜", "脆"]
    assert as_str_list('["最", "第一"]') == ["最", "第一"]
    assert as_str_list("最，第一、顶级,国家级") == ["最", "第一", "顶级", "国家级"]
    assert as_str_list(None) == []
    assert as_str_list("  ") == []


def test_extract_json_object_skips_unclosed_brace_in_prose():
    text = '说明：用 { 标注重点\n{"warmUp": {"script": "X"}}'
    assert extract_json_object(text) == {"warmUp": {"script": "X"}}
