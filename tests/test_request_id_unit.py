from __future__ import annotations

from agriscript.shared.request_id import get_request_id, normalize_request_id, request_id_scope


def test_normalize_keeps_safe_ids():
    assert normalize_request_id("trace-01:abc.def") == "trace-01:abc.def"


def test_normalize_replaces_missing_or_unsafe_ids():
    assert len(normalize_request_id(None)) == 32
    assert normalize_request_id("a" * 65) != "a" * 65
    assert normalize_request_id("含中文") != "含中文"


def test_scope_restores_outer_value():
    assert get_request_id() is None
    with request_id_scope("outer"):
        with request_id_scope("inner"):
            assert get_request_id() == "inner"
        assert get_request_id() == "outer"
    assert get_request_id() is None
