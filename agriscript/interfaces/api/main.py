"""API 服务入口：`python -m agriscript.interfaces.api.main` 或 `agriscript-api`。"""

from __future__ import annotations

import uvicorn

from agriscript.interfaces.api.app import create_app
from agriscript.shared.config import get_settings


app = create_app()


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "agriscript.interfaces.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
        # 日志格式由 configure_logging 统一设置
        log_config=None,
    )


if __name__ == "__main__":
    main()
