"""话术合规检查服务。"""

from __future__ import annotations

from typing import Any

from agriscript.application.repositories.product_repository import ProductRepository
from agriscript.application.repositories.script_repository import ScriptRepository
from agriscript.application.services.script_generation.prompt_composer import render_slots
from agriscript.application.services.script_generation.sections import (
    legacy_value_as_text,
    project_legacy,
)
from agriscript.shared.config import Settings, get_settings
from agriscript.shared.constants.prompts import (
    COMPLIANCE_CHECK_PROMPT,
    DEFAULT_COMPLIANCE_PROHIBITED_WORDS,
)
from agriscript.shared.errors import ERROR_MISSING_FIELD, AppError, not_found
from agriscript.shared.json_utils import as_str_list, extract_json_object
from agriscript.shared.logging import get_logger, log_extra

log = get_logger(__name__)

# 送检内容的分块顺序与标题
CHECK_BLOCKS: tuple[tuple[str, str], ...] = (
    ("opening", "开场白"),
    ("product_intro", "产品介绍"),
    ("selling_points", "卖点话术"),
    ("promotions", "促销话术"),
    ("closing", "逼单话术"),
)

UNPARSABLE_SUMMARY = "无法解析检查结果，请人工审核"


def assemble_script_content(script: Any) -> str:
    """按旧版视图拼装待检查的话术文本。"""
    legacy = project_legacy(script)
    blocks = []
    for field_name, label in CHECK_BLOCKS:
        text = legacy_value_as_text(legacy.get(field_name))
        if text:
            blocks.append(f"【{label}】\n{text}")
    if not blocks:
        raw = getattr(script, "raw_content", None)
        if raw:
            return raw
        # 无任何内容时仍按分块标题送检
        blocks = [f"【{label}】\n" for _, label in CHECK_BLOCKS]
    return "\n\n".join(blocks)


def render_compliance_prompt(script_content: str, prohibited_words: list[str]) -> str:
    words = "、".join(prohibited_words) or DEFAULT_COMPLIANCE_PROHIBITED_WORDS
    return render_slots(
        COMPLIANCE_CHECK_PROMPT,
        {"PROHIBITED_WORDS": words, "SCRIPT_CONTENT": script_content},
    )


def parse_compliance_report(raw: str) -> dict[str, Any]:
    """解析模型输出；无法解析时给出需人工审核的 warning 结论。"""
    parsed = extract_json_object(raw)
    if parsed is None:
        return {
            "status": "warning",
            "score": 70,
            "issues": [],
            "summary": UNPARSABLE_SUMMARY,
            "rawContent": raw,
        }

    status = parsed.get("status")
    score = parsed.get("score")
    issues = parsed.get("issues")
    return {
        "status": status if status in ("pass", "warning", "fail") else "warning",
        "score": score if isinstance(score, (int, float)) and not isinstance(score, bool) else None,
        "issues": [i for i in issues if isinstance(i, dict)] if isinstance(issues, list) else [],
        "summary": parsed.get("summary") if isinstance(parsed.get("summary"), str) else None,
        "passedContent": parsed.get("passedContent")
        if isinstance(parsed.get("passedContent"), str)
        else None,
    }


class ComplianceService:
    """合规检查服务类。"""

    def __init__(
        self,
        script_repository: ScriptRepository,
        product_repository: ProductRepository,
        llm_runtime: Any,
        settings: Settings | None = None,
    ):
        self.script_repository = script_repository
        self.product_repository = product_repository
        self.llm_runtime = llm_runtime
        self.settings = settings or get_settings()

    def check(self, script_id: str | None) -> dict[str, Any]:
        """检查话术并回写合规结论与质量分。"""
        if not script_id:
            raise AppError(code=ERROR_MISSING_FIELD, message="缺少话术ID", status_code=400)

        script = self.script_repository.get_by_id(script_id)
        if script is None:
            raise not_found("话术不存在")

        content = assemble_script_content(script)
        product = self.product_repository.get_by_id(script.product_id)
        words = as_str_list(product.prohibited_words) if product is not None else []
        prompt = render_compliance_prompt(content, words)

        raw = self.llm_runtime.invoke(
            [{"role": "user", "content": prompt}],
            temperature=self.settings.compliance_temperature,
        )
        report = parse_compliance_report(raw)

        score = report.get("score")
        script.compliance_status = report["status"]
        script.compliance_issues = report["issues"]
        # 质量分与本次报告保持一致，报告无分数时置空
        script.quality_score = round(score / 10, 2) if score is not None else None
        self.script_repository.update(script)

        log.info(
            "compliance.checked",
            extra=log_extra(
                script_id=script.id,
                status=report["status"],
                issues=len(report["issues"]),
            ),
        )
        return report
