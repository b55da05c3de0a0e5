from __future__ import annotations

import logging
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from agriscript.shared.request_id import get_request_id

# 第三方客户端的请求级日志过多，只保留告警
_CHATTY_LOGGERS = ("httpx", "httpcore", "openai", "chromadb", "urllib3")


class RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


def configure_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level.upper())

    handler = logging.StreamHandler()
    handler.setFormatter(
        JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s %(request_id)s",
            rename_fields={"asctime": "time", "levelname": "level", "name": "logger"},
            json_ensure_ascii=False,
        )
    )
    handler.addFilter(RequestIdFilter())

    # 重置 handlers，重复创建应用时不会重复输出
    root.handlers = [handler]

    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(max(logging.WARNING, root.level))


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_extra(**kwargs: Any) -> dict[str, Any]:
    # 附加字段统一放在 extra 键下，值为 None 的字段不输出
    return {"extra": {k: v for k, v in kwargs.items() if v is not None}}
