"""话术风格模板实体。"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...shared.db import Base


class StyleTemplate(Base):
    """风格模板表。

    四类规则集（开场/卖点/促销/收尾）结构一致：
    `{"patterns": [...], "keywords": [...], "tips": "..."}`，keywords 可缺省。
    """

    __tablename__ = "style_templates"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    style_type: Mapped[str] = mapped_column(
        String(50), nullable=False, index=True
    )  # 亲民型/促销型/故事型/...

    opening_rules: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    selling_rules: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    promotion_rules: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    closing_rules: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    tone_guidelines: Mapped[str | None] = mapped_column(Text, nullable=True)
    example_scripts: Mapped[list | None] = mapped_column(
        JSON, nullable=True
    )  # [{"scene": "开场白", "script": "..."}]

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )
