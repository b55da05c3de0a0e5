"""请求 ID 上下文。

HTTP 中间件为每个请求绑定一个 ID，日志过滤器与错误响应从这里读取。
流式生成在同一上下文中继续执行，chunk 之间的日志共用该 ID。
"""

from __future__ import annotations

import contextvars
import re
import uuid
from contextlib import contextmanager
from typing import Iterator

# 外部传入的 ID 只接受常见的 trace ID 字符集，避免污染日志
_SAFE_ID_RE = re.compile(r"^[A-Za-z0-9._:-]{1,64}$")

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "agriscript_request_id",
    default=None,
)


def new_request_id() -> str:
    return uuid.uuid4().hex


def normalize_request_id(raw: str | None) -> str:
    """沿用客户端传入的合法 ID，否则生成新 ID。"""
    candidate = (raw or "").strip()
    if candidate and _SAFE_ID_RE.match(candidate):
        return candidate
    return new_request_id()


def get_request_id() -> str | None:
    return _request_id.get()


@contextmanager
def request_id_scope(request_id: str) -> Iterator[str]:
    """在 with 块内绑定请求 ID，退出时恢复外层值。"""
    token = _request_id.set(request_id)
    try:
        yield request_id
    finally:
        _request_id.reset(token)
