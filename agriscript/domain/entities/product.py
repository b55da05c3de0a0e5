"""农产品实体。"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...shared.db import Base


class Product(Base):
    """农产品表。

    话术生成时作为产品信息注入提示词，禁用词同时约束生成与合规检查。
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)  # UUID 格式
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )  # 品类，如 水果/粮油/干货
    origin: Mapped[str | None] = mapped_column(String(200), nullable=True)  # 产地
    price: Mapped[float | None] = mapped_column(Float, nullable=True)
    specification: Mapped[str | None] = mapped_column(
        String(500), nullable=True
    )  # 规格，如 5斤装

    # JSON 列：均为字符串数组
    selling_points: Mapped[list | None] = mapped_column(JSON, nullable=True)
    certificates: Mapped[list | None] = mapped_column(JSON, nullable=True)
    prohibited_words: Mapped[list | None] = mapped_column(JSON, nullable=True)
    images: Mapped[list | None] = mapped_column(JSON, nullable=True)

    description: Mapped[str | None] = mapped_column(Text, nullable=True)
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
