"""语音识别服务：下载音视频并调用 OpenAI 兼容的转写接口。"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any
from urllib.parse import urlparse

import httpx
from openai import OpenAI
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from agriscript.shared.config import Settings, get_settings
from agriscript.shared.errors import AppError
from agriscript.shared.logging import get_logger, log_extra

log = get_logger(__name__)


class AsrService:
    """语音识别服务（whisper 系列模型）。"""

    def __init__(self, settings: Settings | None = None, client: Any | None = None):
        self.settings = settings or get_settings()
        self._client = client

    def _get_client(self):
        if self._client is None:
            api_key = self.settings.asr_api_key or self.settings.llm_api_key
            if not api_key:
                raise AppError(
                    code="asr_not_configured",
                    message="未配置语音识别密钥（AGRI_ASR_API_KEY）",
                    status_code=503,
                )
            params: dict[str, Any] = {"api_key": api_key}
            base_url = self.settings.asr_base_url or self.settings.llm_base_url
            if base_url:
                params["base_url"] = base_url
            self._client = OpenAI(**params)
        return self._client

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        retry=retry_if_exception_type(httpx.TransportError),
        reraise=True,
    )
    def _download(self, url: str) -> tuple[str, bytes]:
        resp = httpx.get(
            url,
            timeout=self.settings.asr_download_timeout_seconds,
            follow_redirects=True,
        )
        resp.raise_for_status()
        filename = PurePosixPath(urlparse(url).path).name or "audio.mp3"
        return filename, resp.content

    def transcribe(self, url: str) -> str:
        """转写音视频地址对应的语音内容。"""
        client = self._get_client()
        filename, data = self._download(url)
        log.info(
            "asr.transcribe",
            extra=log_extra(model=self.settings.asr_model, bytes=len(data)),
        )
        transcript = client.audio.transcriptions.create(
            model=self.settings.asr_model,
            file=(filename, data),
        )
        return (getattr(transcript, "text", "") or "").strip()
