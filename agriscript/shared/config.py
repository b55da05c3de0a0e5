"""运行配置。

所有配置项均可用 `AGRI_` 前缀的环境变量覆盖，工作目录下的 `.env` 作为补充来源
（环境变量优先）。设置 `AGRI_DISABLE_DOTENV=1` 可跳过 `.env`。
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="AGRI_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_host: str = "127.0.0.1"
    api_port: int = 7911
    # 流式生成期间的文件变更会触发重启并中断连接，默认关闭
    api_reload: bool = False
    # 逗号分隔；allow_credentials=True 时浏览器不接受 "*"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"

    storage_root: Path = Path(".runtime/storage")
    sqlite_path: Path = Path(".runtime/sqlite/agriscript.db")

    log_level: str = "INFO"

    # LLM 配置（OpenAI 兼容接口）
    llm_api_key: str = ""
    llm_base_url: str = ""
    llm_model: str = "doubao-seed-2-0-pro-260215"
    llm_timeout_seconds: float = 180.0
    generation_temperature: float = 0.8
    compliance_temperature: float = 0.2
    analysis_temperature: float = 0.3

    # 向量化配置：未单独配置时复用 LLM 的密钥与地址
    embedding_model: str = "text-embedding-3-small"
    embedding_api_key: str = ""
    embedding_base_url: str = ""

    # 知识库
    knowledge_collection_name: str = "agri_script_knowledge"
    knowledge_chunk_size: int = 2000
    knowledge_chunk_overlap: int = 0

    # 话术生成时的参考素材检索参数
    generation_search_top_k: int = 5
    generation_search_min_score: float = 0.5

    # 语音识别
    asr_model: str = "whisper-1"
    asr_api_key: str = ""
    asr_base_url: str = ""
    asr_download_timeout_seconds: float = 60.0

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level: {value}")
        return level


_settings: Settings | None = None


def _dotenv_disabled() -> bool:
    return os.getenv("AGRI_DISABLE_DOTENV", "").strip().lower() in {"1", "true", "yes"}


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings(_env_file=None) if _dotenv_disabled() else Settings()
    return _settings


def reset_settings_for_tests() -> None:
    """仅用于测试：清空配置缓存，便于使用 monkeypatch 设置环境变量。"""
    global _settings
    _settings = None
