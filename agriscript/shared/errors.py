"""业务异常与统一错误响应。

服务层只抛 `AppError`，由 API 层的异常处理器转换为
`{"success": false, "error": {...}}` 结构；流式生成开始后的错误改走 SSE error 事件。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ERROR_INTERNAL = "internal_error"
ERROR_VALIDATION = "validation_error"
ERROR_NOT_FOUND = "not_found"
ERROR_BAD_REQUEST = "bad_request"
ERROR_MISSING_FIELD = "missing_required_field"
ERROR_UPSTREAM = "upstream_error"


# 异常经由 contextlib 回传时会被写入 __traceback__，不能冻结
@dataclass(eq=False)
class AppError(Exception):
    code: str
    message: str
    status_code: int = 400
    details: dict[str, Any] | None = None

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.code}: {self.message}"


def not_found(message: str) -> AppError:
    return AppError(code=ERROR_NOT_FOUND, message=message, status_code=404)


def bad_request(message: str, code: str = ERROR_BAD_REQUEST) -> AppError:
    return AppError(code=code, message=message, status_code=400)


def upstream_error(message: str, code: str = ERROR_UPSTREAM, **details: Any) -> AppError:
    """上游服务（LLM、向量库、语音识别、网页抓取）失败。"""
    return AppError(code=code, message=message, status_code=502, details=details or None)


def error_response(
    *,
    code: str,
    message: str,
    request_id: str | None,
    details: dict[str, Any] | None = None,
) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message, "request_id": request_id}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}
