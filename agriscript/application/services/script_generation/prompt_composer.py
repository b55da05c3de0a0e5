"""话术生成提示词组装。

纯函数：相同输入得到相同提示词，不做任何 I/O，也不抛出异常。
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable

from agriscript.shared.constants.prompts import (
    DEFAULT_DURATION_MINUTES,
    DEFAULT_GENERATION_PROHIBITED_WORDS,
    DEFAULT_TARGET_AUDIENCE,
    NO_REFERENCE_MATERIALS,
    SCRIPT_GENERATION_PROMPT,
)
from agriscript.shared.json_utils import as_str_list

_SLOT_RE = re.compile(r"\{\{([A-Z_]+)\}\}")
_MISSING = "未提供"


@dataclass(frozen=True)
class GenerationScenario:
    """生成场景参数。"""

    target_audience: str | None = None
    duration: int | None = None
    promotion_rules: dict[str, Any] | None = None
    prohibited_words: list[str] | None = None


def render_slots(template: str, values: dict[str, str]) -> str:
    """一次性替换 `{{NAME}}` 槽位；替换进来的内容不会再被解析。"""

    def _sub(match: re.Match[str]) -> str:
        return values.get(match.group(1), match.group(0))

    return _SLOT_RE.sub(_sub, template)


def _fence_safe(text: str) -> str:
    # 用户内容中的代码围栏会打断提示词结构
    return text.replace("```", "'''")


def _str_or_missing(value: Any) -> Any:
    if value is None:
        return _MISSING
    if isinstance(value, str):
        return _fence_safe(value.strip()) or _MISSING
    return value


def product_prompt_view(product: Any) -> dict[str, Any]:
    """提示词中的产品信息，只暴露与话术相关的字段。"""
    return {
        "name": _str_or_missing(getattr(product, "name", None)),
        "category": _str_or_missing(getattr(product, "category", None)),
        "origin": _str_or_missing(getattr(product, "origin", None)),
        "price": _str_or_missing(getattr(product, "price", None)),
        "specification": _str_or_missing(getattr(product, "specification", None)),
        "sellingPoints": [
            _fence_safe(s) for s in as_str_list(getattr(product, "selling_points", None))
        ],
        "certificates": [
            _fence_safe(s) for s in as_str_list(getattr(product, "certificates", None))
        ],
    }


def template_prompt_view(style_template: Any) -> dict[str, Any]:
    """提示词中的风格模板信息。"""
    examples = getattr(style_template, "example_scripts", None)
    return {
        "name": _str_or_missing(getattr(style_template, "name", None)),
        "styleType": _str_or_missing(getattr(style_template, "style_type", None)),
        "toneGuidelines": _str_or_missing(getattr(style_template, "tone_guidelines", None)),
        "exampleScripts": examples if isinstance(examples, list) else [],
    }


def format_reference_fragments(fragments: Iterable[dict[str, Any]] | None) -> str:
    """参考素材渲染为 `[素材N]` 段落，无素材时返回固定占位文本。"""
    blocks = []
    for fragment in fragments or []:
        content = _fence_safe(str(fragment.get("content") or "").strip())
        if content:
            blocks.append(f"[素材{len(blocks) + 1}]\n{content}")
    if not blocks:
        return NO_REFERENCE_MATERIALS
    return "\n\n".join(blocks)


def compose_script_prompt(
    product: Any,
    style_template: Any,
    fragments: Iterable[dict[str, Any]] | None,
    scenario: GenerationScenario,
) -> str:
    """组装话术生成提示词。"""
    audience = (scenario.target_audience or "").strip()
    words = as_str_list(scenario.prohibited_words)
    values = {
        "PRODUCT_INFO": json.dumps(
            product_prompt_view(product), ensure_ascii=False, default=str, indent=2
        ),
        "STYLE_TEMPLATE": json.dumps(
            template_prompt_view(style_template), ensure_ascii=False, default=str, indent=2
        ),
        "REFERENCE_MATERIALS": format_reference_fragments(fragments),
        "TARGET_AUDIENCE": _fence_safe(audience) or DEFAULT_TARGET_AUDIENCE,
        "DURATION": str(scenario.duration or DEFAULT_DURATION_MINUTES),
        "PROMOTION_RULES": json.dumps(
            scenario.promotion_rules or {}, ensure_ascii=False, default=str
        ),
        "PROHIBITED_WORDS": "、".join(_fence_safe(w) for w in words)
        or DEFAULT_GENERATION_PROHIBITED_WORDS,
    }
    return render_slots(SCRIPT_GENERATION_PROMPT, values)
