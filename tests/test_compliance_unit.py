from __future__ import annotations

import json

import pytest

from agriscript.application.repositories.product_repository import ProductRepository
from agriscript.application.repositories.script_repository import ScriptRepository
from agriscript.application.services.script_generation.service import (
    GenerationContext,
    build_script_record,
)
from agriscript.application.services.compliance_service import (
    ComplianceService,
    assemble_script_content,
    parse_compliance_report,
    render_compliance_prompt,
)
from agriscript.domain.entities import Product, Script
from agriscript.shared.errors import AppError
from conftest import FakeLLMRuntime


@pytest.fixture()
def stored_script(session_factory):
    with session_factory() as session:
        ProductRepository(session).create(
            Product(
                id="p-1",
                name="赣南脐橙",
                category="水果",
                selling_points=[],
                certificates=[],
                prohibited_words=["最甜", "第一"],
                images=[],
                is_active=True,
            )
        )
        ScriptRepository(session).create(
            Script(
                id="s-1",
                product_id="p-1",
                style_template_id="t-1",
                title="脐橙专场",
                warm_up={"script": "家人们看过来"},
                push_order={"script": "最后20单"},
                status="draft",
            )
        )
    return "s-1"


def _checker(session, llm) -> ComplianceService:
    return ComplianceService(ScriptRepository(session), ProductRepository(session), llm)


def test_assemble_content_uses_legacy_blocks_in_order():
    script = Script(warm_up={"script": "开场"}, push_order={"script": "逼单"}, promotions=["满减"])
    assert assemble_script_content(script) == "【开场白】\n开场\n\n【促销话术】\n满减\n\n【逼单话术】\n逼单"


def test_prompt_lists_prohibited_words_or_default():
    assert "最甜、第一" in render_compliance_prompt("话术", ["最甜", "第一"])
    assert "暂无特殊禁用词" in render_compliance_prompt("话术", [])


def test_unparsable_report_falls_back_to_manual_review():
    report = parse_compliance_report("我觉得还行")
    assert report["status"] == "warning"
    assert report["score"] == 70
    assert report["issues"] == []
    assert report["summary"] == "无法解析检查结果，请人工审核"
    assert report["rawContent"] == "我觉得还行"


def test_check_persists_status_and_quality_score(session_factory, stored_script):
    reply = json.dumps(
        {
            "status": "warning",
            "score": 85,
            "issues": [{"type": "绝对化用语", "content": "最", "suggestion": "删除"}],
            "summary": "基本合规",
        },
        ensure_ascii=False,
    )
    llm = FakeLLMRuntime(reply=reply)

    with session_factory() as session:
        report = _checker(session, llm).check(stored_script)

    assert report["status"] == "warning"
    assert report["score"] == 85
    prompt = llm.calls[0][0]["content"]
    assert "最甜、第一" in prompt
    assert "家人们看过来" in prompt
    assert "最后20单" in prompt

    with session_factory() as session:
        script = ScriptRepository(session).get_by_id(stored_script)
        assert script.compliance_status == "warning"
        assert script.quality_score == 8.5
        assert script.compliance_issues[0]["type"] == "绝对化用语"


def test_check_fallback_report_scores_seven(session_factory, stored_script):
    with session_factory() as session:
        report = _checker(session, FakeLLMRuntime(reply="无法判断")).check(stored_script)
    assert report["summary"] == "无法解析检查结果，请人工审核"

    with session_factory() as session:
        script = ScriptRepository(session).get_by_id(stored_script)
        assert script.compliance_status == "warning"
        assert script.quality_score == 7.0


def test_check_rejects_missing_and_unknown_script(session_factory):
    llm = FakeLLMRuntime(reply="{}")
    with session_factory() as session:
        checker = _checker(session, llm)
        with pytest.raises(AppError) as missing:
            checker.check(None)
        with pytest.raises(AppError) as unknown:
            checker.check("nope")

    assert missing.value.status_code == 400
    assert missing.value.message == "缺少话术ID"
    assert unknown.value.status_code == 404
    assert llm.calls == []


def test_assemble_content_without_sections_keeps_block_labels():
    content = assemble_script_content(Script())
    assert content.startswith("【开场白】")
    assert "【逼单话术】" in content


def test_check_script_without_sections_still_persists_fallback(session_factory):
    context = GenerationContext(
        product_id="p-none", style_template_id="t-1", title="无段落", prompt="prompt"
    )
    with session_factory() as session:
        script_id = ScriptRepository(session).create(
            build_script_record(context, {"summary": "没有段落"})
        ).id

    llm = FakeLLMRuntime(reply="看不出来")
    with session_factory() as session:
        report = _checker(session, llm).check(script_id)

    assert report["status"] == "warning"
    assert report["score"] == 70
    assert "【开场白】" in llm.calls[0][0]["content"]

    with session_factory() as session:
        script = ScriptRepository(session).get_by_id(script_id)
        assert script.compliance_status == "warning"
        assert script.quality_score == 7.0


def test_check_report_without_score_clears_quality_score(session_factory, stored_script):
    with session_factory() as session:
        _checker(session, FakeLLMRuntime(reply='{"status": "pass", "score": 90}')).check(
            stored_script
        )
    with session_factory() as session:
        _checker(session, FakeLLMRuntime(reply='{"status": "pass"}')).check(stored_script)

    with session_factory() as session:
        script = ScriptRepository(session).get_by_id(stored_script)
        assert script.compliance_status == "pass"
        assert script.quality_score is None
