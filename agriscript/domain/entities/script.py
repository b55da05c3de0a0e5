"""直播话术实体。"""

from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import JSON, DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...shared.db import Base


class ScriptStatus(str, PyEnum):
    """话术状态枚举。"""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ComplianceStatus(str, PyEnum):
    """合规检查结论。"""

    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class Script(Base):
    """话术表。

    五段式字段（warm_up/retention/lock_customer/push_order/atmosphere）是唯一的
    规范表示；opening 等旧版字段只保存模型直接输出的旧版键或人工编辑，
    对外展示时由五段式投影得到。
    """

    __tablename__ = "scripts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    product_id: Mapped[str] = mapped_column(String(36), nullable=False, index=True)
    style_template_id: Mapped[str] = mapped_column(String(36), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)

    # 生成场景参数
    target_audience: Mapped[str | None] = mapped_column(String(200), nullable=True)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # 分钟
    promotion_rules: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    # 五段式
    warm_up: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    retention: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    lock_customer: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    push_order: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    atmosphere: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    compliance_notes: Mapped[list | None] = mapped_column(JSON, nullable=True)
    estimated_duration: Mapped[str | None] = mapped_column(String(50), nullable=True)
    algorithm_tips: Mapped[str | None] = mapped_column(Text, nullable=True)
    raw_content: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )  # 模型输出无法解析时保存原文

    # 旧版字段
    opening: Mapped[str | None] = mapped_column(Text, nullable=True)
    product_intro: Mapped[str | None] = mapped_column(Text, nullable=True)
    selling_points: Mapped[list | None] = mapped_column(JSON, nullable=True)
    promotions: Mapped[list | None] = mapped_column(JSON, nullable=True)
    closing: Mapped[str | None] = mapped_column(Text, nullable=True)
    faq: Mapped[list | None] = mapped_column(JSON, nullable=True)

    # 质量与合规
    quality_score: Mapped[float | None] = mapped_column(Float, nullable=True)  # 0-10
    compliance_status: Mapped[str | None] = mapped_column(String(20), nullable=True)
    compliance_issues: Mapped[list | None] = mapped_column(JSON, nullable=True)

    referenced_materials: Mapped[list | None] = mapped_column(
        JSON, nullable=True
    )  # 生成时引用的知识库文档 ID
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ScriptStatus.DRAFT.value
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
