"""视频素材实体。"""

from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import JSON, Boolean, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...shared.db import Base


class ProcessStatus(str, PyEnum):
    """素材处理状态枚举。"""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class VideoMaterial(Base):
    """视频素材表。

    来源于视频平台搜索结果，经语音转写与话术分析后可导入知识库。
    """

    __tablename__ = "video_materials"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # 来源信息
    source_platform: Mapped[str] = mapped_column(
        String(50), nullable=False, default="douyin"
    )
    source_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str | None] = mapped_column(String(200), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 秒
    cover_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    likes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    plays: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # 处理流程
    process_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ProcessStatus.PENDING.value, index=True
    )
    process_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    audio_file_key: Mapped[str | None] = mapped_column(Text, nullable=True)
    transcription: Mapped[str | None] = mapped_column(Text, nullable=True)
    analysis_result: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    tags: Mapped[list | None] = mapped_column(JSON, nullable=True)

    # 知识库关联
    imported_to_knowledge: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    knowledge_doc_ids: Mapped[list | None] = mapped_column(JSON, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
