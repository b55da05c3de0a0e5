"""LLM 运行时服务。

按配置构建 OpenAI 兼容的对话模型（langchain-openai），对外提供
同步 invoke 与异步 astream 两种调用方式。模型对象按温度/流式参数缓存，
进程内共享。
"""

from __future__ import annotations

import threading
from typing import Any, AsyncIterator, Iterable

from langchain_core.output_parsers import StrOutputParser
from langchain_openai import ChatOpenAI

from agriscript.shared.config import Settings, get_settings
from agriscript.shared.errors import AppError
from agriscript.shared.logging import get_logger, log_extra

log = get_logger(__name__)

Message = tuple[str, str]


class LLMRuntimeService:
    """LLM 运行时服务。"""

    ROLE_MAP = {"system": "system", "user": "human", "assistant": "ai"}

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self._runnables: dict[tuple[float, bool], Any] = {}
        self._lock = threading.Lock()

    @property
    def model_name(self) -> str:
        return self.settings.llm_model

    def _build_chat_model(self, *, temperature: float, streaming: bool) -> ChatOpenAI:
        """构建对话模型。"""
        if not self.settings.llm_api_key:
            raise AppError(
                code="llm_not_configured",
                message="未配置 LLM 密钥（AGRI_LLM_API_KEY）",
                status_code=503,
            )

        params: dict[str, Any] = {
            "model": self.settings.llm_model,
            "api_key": self.settings.llm_api_key,
            "temperature": temperature,
            "timeout": self.settings.llm_timeout_seconds,
            "streaming": streaming,
        }
        if self.settings.llm_base_url:
            params["base_url"] = self.settings.llm_base_url
        return ChatOpenAI(**params)

    def build_runnable(self, *, temperature: float, streaming: bool = False):
        """构建 `model | StrOutputParser()`，同参数复用同一实例。"""
        key = (float(temperature), bool(streaming))
        with self._lock:
            runnable = self._runnables.get(key)
            if runnable is None:
                model = self._build_chat_model(temperature=temperature, streaming=streaming)
                runnable = model | StrOutputParser()
                self._runnables[key] = runnable
        return runnable

    def _to_messages(self, messages: Iterable[dict[str, str]]) -> list[Message]:
        mapped: list[Message] = []
        for msg in messages:
            role = self.ROLE_MAP.get(msg.get("role", "user"))
            if role is None:
                raise AppError(
                    code="invalid_message_role",
                    message=f"不支持的消息角色: {msg.get('role')}",
                    status_code=400,
                )
            mapped.append((role, msg.get("content", "")))
        return mapped

    def invoke(self, messages: list[dict[str, str]], *, temperature: float) -> str:
        """同步调用，返回完整文本。"""
        runnable = self.build_runnable(temperature=temperature, streaming=False)
        log.info(
            "llm.invoke",
            extra=log_extra(model=self.model_name, temperature=temperature),
        )
        return runnable.invoke(self._to_messages(messages))

    async def astream(
        self, messages: list[dict[str, str]], *, temperature: float
    ) -> AsyncIterator[str]:
        """流式调用，按到达顺序逐段产出文本。"""
        runnable = self.build_runnable(temperature=temperature, streaming=True)
        log.info(
            "llm.astream",
            extra=log_extra(model=self.model_name, temperature=temperature),
        )
        async for chunk in runnable.astream(self._to_messages(messages)):
            s = "" if chunk is None else str(chunk)
            if s:
                yield s
