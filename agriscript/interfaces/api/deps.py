"""FastAPI 依赖：数据库会话与进程级外部服务句柄。

外部服务句柄在 `create_app` 中创建并挂到 `app.state`，测试通过
`app.dependency_overrides` 替换。
"""

from __future__ import annotations

from typing import Iterator

from fastapi import Request
from sqlalchemy.orm import Session

from agriscript.application.services.asr_service import AsrService
from agriscript.application.services.llm_runtime_service import LLMRuntimeService
from agriscript.application.services.vector_storage_service import VectorStorageService
from agriscript.application.services.video_search_service import VideoSearchProvider


def get_db(request: Request) -> Iterator[Session]:
    session = request.app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def get_session_factory(request: Request):
    return request.app.state.session_factory


def get_llm_runtime(request: Request) -> LLMRuntimeService:
    return request.app.state.llm_runtime


def get_vector_storage(request: Request) -> VectorStorageService:
    return request.app.state.vector_storage


def get_asr_service(request: Request) -> AsrService:
    return request.app.state.asr_service


def get_video_search_provider(request: Request) -> VideoSearchProvider:
    return request.app.state.video_search_provider
