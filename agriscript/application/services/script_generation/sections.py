"""五段式话术环节的归一化与旧版字段投影。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from agriscript.shared.json_utils import as_str_list


@dataclass(frozen=True)
class SectionSpec:
    column: str
    key: str
    title: str
    target: str
    tips_key: str


SECTION_SPECS: tuple[SectionSpec, ...] = (
    SectionSpec("warm_up", "warmUp", "预热环节", "提升停留时长", "keyPoints"),
    SectionSpec("retention", "retention", "留人环节", "提升互动率", "interactionTips"),
    SectionSpec("lock_customer", "lockCustomer", "锁客环节", "提升转化率", "valuePoints"),
    SectionSpec("push_order", "pushOrder", "逼单环节", "提升GPM", "urgencyTechniques"),
    SectionSpec("atmosphere", "atmosphere", "气氛组", "整体参与度", "phrases"),
)
SECTIONS_BY_COLUMN = {spec.column: spec for spec in SECTION_SPECS}

# 旧版字段 -> 五段式环节
LEGACY_SECTION_MAP: dict[str, str] = {
    "opening": "warm_up",
    "product_intro": "lock_customer",
    "selling_points": "retention",
    "promotions": "atmosphere",
    "closing": "push_order",
}
LEGACY_LIST_FIELDS = {"selling_points", "promotions"}

# 旧版字段在模型输出中的键名
LEGACY_OUTPUT_KEYS: dict[str, str] = {
    "opening": "opening",
    "product_intro": "productIntro",
    "selling_points": "sellingPoints",
    "promotions": "promotions",
    "closing": "closing",
    "faq": "faq",
}


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _script_from_options(options: Any) -> str:
    if not isinstance(options, list):
        return ""
    parts = []
    for option in options:
        if isinstance(option, dict):
            s = _text(option.get("script"))
        else:
            s = _text(option)
        if s:
            parts.append(s)
    return "\n".join(parts)


def normalize_section(raw: Any, spec: SectionSpec) -> dict[str, Any] | None:
    """把模型输出或请求中的环节归一化为 `{title, target, script, <tips>}`。

    script 依次取自 script 字段、options[].script、content/text/description；
    一个都没有时视为该环节缺失。
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        raw = {"script": raw}
    elif isinstance(raw, list):
        raw = {"options": raw}
    elif not isinstance(raw, dict):
        return None

    script = _text(raw.get("script")) or _script_from_options(raw.get("options"))
    if not script:
        for key in ("content", "text", "description"):
            script = _text(raw.get(key))
            if script:
                break
    if not script:
        return None

    section = dict(raw)
    section["title"] = _text(raw.get("title")) or spec.title
    section["target"] = _text(raw.get("target")) or spec.target
    section["script"] = script
    section[spec.tips_key] = as_str_list(raw.get(spec.tips_key))
    return section


def _present(value: Any) -> bool:
    return value not in (None, "", [], {})


def project_legacy(script: Any) -> dict[str, Any]:
    """由五段式环节投影出旧版字段，环节缺失时回退到旧版列。"""
    view: dict[str, Any] = {}
    for legacy, column in LEGACY_SECTION_MAP.items():
        section = getattr(script, column, None)
        if isinstance(section, dict) and _text(section.get("script")):
            view[legacy] = section["script"]
            continue
        stored = getattr(script, legacy, None)
        view[legacy] = stored if _present(stored) else None
    faq = getattr(script, "faq", None)
    view["faq"] = faq if _present(faq) else None
    return view


def legacy_value_as_text(value: Any) -> str:
    """旧版字段（字符串或列表）转为可读文本。"""
    if isinstance(value, str):
        return value.strip()
    return "\n".join(as_str_list(value))


def apply_legacy_update(script: Any, legacy: str, value: Any) -> None:
    """更新旧版字段；对应环节存在时同步写入环节的 script，保持两种视图一致。"""
    if legacy in LEGACY_LIST_FIELDS and value is not None:
        stored = as_str_list(value)
    elif legacy == "faq":
        stored = list(value) if isinstance(value, list) else None
    else:
        stored = value
    setattr(script, legacy, stored)

    column = LEGACY_SECTION_MAP.get(legacy)
    if column is None or value is None:
        return
    section = getattr(script, column, None)
    text = legacy_value_as_text(value)
    if isinstance(section, dict) and text:
        # JSON 列需整体替换才会被识别为变更
        setattr(script, column, {**section, "script": text})
