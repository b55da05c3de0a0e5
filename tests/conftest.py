from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from agriscript.shared.config import reset_settings_for_tests


class FakeLLMRuntime:
    """按预设片段流式输出的 LLM 替身，记录每次调用的消息。"""

    def __init__(
        self,
        fragments: list[str] | None = None,
        reply: str = "",
        fail_after: int | None = None,
    ):
        self.fragments = list(fragments or [])
        self.reply = reply
        self.fail_after = fail_after
        self.calls: list[list[dict[str, str]]] = []

    def invoke(self, messages, *, temperature: float) -> str:
        self.calls.append(messages)
        return self.reply

    async def astream(self, messages, *, temperature: float):
        self.calls.append(messages)
        for idx, fragment in enumerate(self.fragments):
            if self.fail_after is not None and idx >= self.fail_after:
                raise RuntimeError("upstream closed")
            yield fragment


class FakeVectorStorage:
    """内存中的向量库替身。"""

    def __init__(self, chunks: list[dict[str, Any]] | None = None, code: int = 0):
        self.chunks = list(chunks or [])
        self.code = code
        self.added: list[dict[str, Any]] = []
        self.deleted: list[str] = []
        self.searches: list[dict[str, Any]] = []

    def add_documents(self, texts, *, collection_id=None, metadata=None):
        ids = []
        for text in texts:
            doc_id = f"vec-{len(self.added) + 1}"
            self.added.append(
                {"doc_id": doc_id, "text": text, "collection_id": collection_id, "metadata": metadata}
            )
            ids.append(doc_id)
        return ids

    def delete_document(self, doc_id: str) -> None:
        self.deleted.append(doc_id)

    def search(self, query, scope_ids=None, top_k=5, min_score=0.5):
        self.searches.append(
            {"query": query, "scope_ids": scope_ids, "top_k": top_k, "min_score": min_score}
        )
        if self.code != 0:
            return {"code": self.code, "msg": "search failed", "chunks": []}
        return {"code": 0, "msg": "ok", "chunks": list(self.chunks)}


class FakeAsrService:
    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.urls: list[str] = []

    def transcribe(self, url: str) -> str:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def runtime_env(tmp_path: Path):
    """为每个测试隔离运行时目录与 sqlite 文件。"""
    runtime_dir = tmp_path / "runtime"
    os.environ["AGRI_STORAGE_ROOT"] = str(runtime_dir / "storage")
    os.environ["AGRI_SQLITE_PATH"] = str(runtime_dir / "sqlite" / "test.db")
    # 禁用加载 .env 文件，防止本地配置干扰测试
    os.environ["AGRI_DISABLE_DOTENV"] = "1"
    os.environ["AGRI_LLM_API_KEY"] = ""
    reset_settings_for_tests()
    yield runtime_dir
    reset_settings_for_tests()


@pytest.fixture()
def session_factory(runtime_env: Path):
    from agriscript.shared.config import get_settings
    from agriscript.shared.db import init_db, make_engine, make_session_factory

    engine = make_engine(get_settings().sqlite_path)
    init_db(engine)
    yield make_session_factory(engine)
    engine.dispose()


@pytest.fixture()
def fakes():
    """API 测试使用的外部服务替身，测试内可直接修改其行为。"""
    return {
        "llm": FakeLLMRuntime(),
        "vector": FakeVectorStorage(),
        "asr": FakeAsrService(),
    }


@pytest.fixture()
async def api_client(runtime_env: Path, fakes: dict[str, Any]):
    """全局 API 客户端 Fixture，外部服务均替换为替身。"""
    from agriscript.interfaces.api.app import create_app
    from agriscript.interfaces.api.deps import (
        get_asr_service,
        get_llm_runtime,
        get_vector_storage,
    )

    app = create_app()
    app.dependency_overrides[get_llm_runtime] = lambda: fakes["llm"]
    app.dependency_overrides[get_vector_storage] = lambda: fakes["vector"]
    app.dependency_overrides[get_asr_service] = lambda: fakes["asr"]

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.state.engine.dispose()
