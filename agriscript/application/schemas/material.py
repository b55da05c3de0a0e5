"""视频素材 Pydantic 模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from agriscript.application.schemas.common import CamelModel


class MaterialCreate(CamelModel):
    """素材创建请求。"""

    title: str = Field(..., min_length=1, max_length=500)
    source_platform: str = Field("douyin", max_length=50)
    source_id: str | None = Field(None, max_length=100)
    source_url: str | None = None
    author: str | None = Field(None, max_length=200)
    duration: int | None = Field(None, ge=0, description="时长（秒）")
    cover_url: str | None = None
    likes: int | None = Field(None, ge=0)
    plays: int | None = Field(None, ge=0)
    tags: list[str] = Field(default_factory=list)


class MaterialResponse(CamelModel):
    """素材响应。"""

    id: str
    source_platform: str
    source_id: str | None
    source_url: str | None
    title: str
    author: str | None
    duration: int | None
    cover_url: str | None
    likes: int | None
    plays: int | None
    process_status: str
    process_error: str | None
    transcription: str | None
    analysis_result: dict[str, Any] | None
    tags: list[str] | None
    imported_to_knowledge: bool
    knowledge_doc_ids: list[str] | None
    created_at: datetime
    updated_at: datetime


class VideoSearchItem(CamelModel):
    """视频搜索结果条目。"""

    id: str
    title: str
    author: str
    duration: int
    likes: int
    plays: int
    cover_url: str
    source_url: str
    source_platform: str = "douyin"
    is_real_data: bool = False
    data_source: str = "mock"


class VideoSearchResult(CamelModel):
    """视频搜索结果。"""

    success: bool = True
    videos: list[VideoSearchItem]
    total: int
    page: int
    page_size: int
    keyword: str
    data_source: str
    note: str | None = None


class MaterialAnalyzeRequest(CamelModel):
    """素材分析请求。"""

    material_id: str | None = None
    video_url: str | None = None


class MaterialAnalyzeResult(CamelModel):
    """素材分析结果。"""

    material_id: str
    transcription: str
    analysis: dict[str, Any]
