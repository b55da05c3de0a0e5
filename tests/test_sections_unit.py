from __future__ import annotations

from agriscript.application.services.script_generation.sections import (
    SECTIONS_BY_COLUMN,
    apply_legacy_update,
    normalize_section,
    project_legacy,
)
from agriscript.domain.entities import Script


def test_normalize_section_fills_title_target_and_tips():
    section = normalize_section({"script": " 家人们好 "}, SECTIONS_BY_COLUMN["warm_up"])
    assert section == {
        "script": "家人们好",
        "title": "预热环节",
        "target": "提升停留时长",
        "keyPoints": [],
    }


def test_normalize_section_joins_options_when_script_missing():
    section = normalize_section(
        {"options": [{"script": "点点关注"}, "扣1领福利"], "interactionTips": "扣1，点赞"},
        SECTIONS_BY_COLUMN["retention"],
    )
    assert section["script"] == "点点关注\n扣1领福利"
    assert section["interactionTips"] == ["扣1", "点赞"]


def test_normalize_section_missing_script_is_absent():
    spec = SECTIONS_BY_COLUMN["push_order"]
    assert normalize_section(None, spec) is None
    assert normalize_section({"title": "逼单"}, spec) is None
    assert normalize_section(42, spec) is None
    assert normalize_section("最后三单", spec)["script"] == "最后三单"


def test_project_legacy_prefers_sections_then_stored_columns():
    script = Script(
        warm_up={"script": "预热话术"},
        lock_customer={"script": "锁客话术"},
        closing="旧版逼单",
        selling_points=["卖点一"],
        faq=[{"q": "包邮吗", "a": "包邮"}],
    )
    view = project_legacy(script)
    assert view["opening"] == "预热话术"
    assert view["product_intro"] == "锁客话术"
    assert view["closing"] == "旧版逼单"
    assert view["selling_points"] == ["卖点一"]
    assert view["promotions"] is None
    assert view["faq"] == [{"q": "包邮吗", "a": "包邮"}]


def test_legacy_update_writes_through_to_section():
    script = Script(push_order={"title": "逼单环节", "script": "旧话术", "urgencyTechniques": []})
    apply_legacy_update(script, "closing", "库存只剩10单")

    assert script.closing == "库存只剩10单"
    assert script.push_order["script"] == "库存只剩10单"
    assert script.push_order["title"] == "逼单环节"
    assert project_legacy(script)["closing"] == "库存只剩10单"


def test_legacy_list_update_without_section_keeps_column():
    script = Script()
    apply_legacy_update(script, "selling_points", "脆甜，多汁")
    assert script.selling_points == ["脆甜", "多汁"]
    assert script.retention is None
