"""模型输出的 JSON 提取与 JSON 列的宽松归一化。"""

from __future__ import annotations

import json
from typing import Any


def _strip_code_fences(text: str) -> str:
    s = text.strip()
    if s.startswith("```json"):
        s = s[7:]
    elif s.startswith("```"):
        s = s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


def _match_object_end(s: str, start: int) -> int | None:
    """从 `start` 处的 `{` 开始按括号深度扫描，返回与之匹配的 `}` 下标。

    字符串字面量中的括号与转义引号不参与计数。
    """
    depth = 0
    in_str = False
    esc = False
    for i in range(start, len(s)):
        ch = s[i]
        if in_str:
            if esc:
                esc = False
            elif ch == "\\":
                esc = True
            elif ch == '"':
                in_str = False
            continue

        if ch == '"':
            in_str = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_json_object(text: str | None) -> dict[str, Any] | None:
    """从任意文本中提取第一个可解析的 JSON 对象。

    依次尝试每个 `{` 起点，返回首个能解码为 dict 的候选；找不到时返回 None。
    """
    if not text:
        return None
    s = _strip_code_fences(text)

    start = s.find("{")
    while start != -1:
        end = _match_object_end(s, start)
        value = None
        if end is not None:
            try:
                value = json.loads(s[start : end + 1])
            except ValueError:
                value = None
        if isinstance(value, dict):
            return value
        start = s.find("{", start + 1)
    return None


def as_str_list(value: Any) -> list[str]:
    """把 JSON 列或请求体中的列表字段归一化为字符串列表。

    兼容历史数据中以 JSON 字符串保存的数组，以及逗号/顿号分隔的纯文本。
    """
    if value is None:
        return []
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return []
        if s.startswith("["):
            try:
                decoded = json.loads(s)
            except ValueError:
                decoded = None
            if isinstance(decoded, list):
                return [str(v) for v in decoded if v is not None and str(v).strip()]
        parts = s.replace("，", ",").replace("、", ",").split(",")
        return [p.strip() for p in parts if p.strip()]
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and str(v).strip()]
    return [str(value)]

