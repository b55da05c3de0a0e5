"""农产品 Pydantic 模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from agriscript.application.schemas.common import CamelModel
from agriscript.shared.json_utils import as_str_list

_LIST_FIELDS = ("selling_points", "certificates", "prohibited_words", "images")


def _coerce_list(value: Any) -> list[str] | None:
    if value is None:
        return None
    return as_str_list(value)


class ProductCreate(CamelModel):
    """产品创建请求。"""

    name: str = Field(..., min_length=1, max_length=200, description="产品名称")
    category: str = Field(..., min_length=1, max_length=100, description="品类")
    origin: str | None = Field(None, max_length=200, description="产地")
    price: float | None = Field(None, ge=0, description="价格")
    specification: str | None = Field(None, max_length=500, description="规格")
    selling_points: list[str] = Field(default_factory=list, description="卖点")
    certificates: list[str] = Field(default_factory=list, description="认证资质")
    prohibited_words: list[str] = Field(default_factory=list, description="禁用词")
    description: str | None = None
    images: list[str] = Field(default_factory=list)
    is_active: bool = True

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def _lists(cls, value: Any) -> list[str]:
        return as_str_list(value)


class ProductUpdate(CamelModel):
    """产品更新请求（仅更新显式传入的字段）。"""

    name: str | None = Field(None, min_length=1, max_length=200)
    category: str | None = Field(None, min_length=1, max_length=100)
    origin: str | None = Field(None, max_length=200)
    price: float | None = Field(None, ge=0)
    specification: str | None = Field(None, max_length=500)
    selling_points: list[str] | None = None
    certificates: list[str] | None = None
    prohibited_words: list[str] | None = None
    description: str | None = None
    images: list[str] | None = None
    is_active: bool | None = None

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def _lists(cls, value: Any) -> list[str] | None:
        return _coerce_list(value)


class ProductResponse(CamelModel):
    """产品响应。"""

    id: str
    name: str
    category: str
    origin: str | None
    price: float | None
    specification: str | None
    selling_points: list[str]
    certificates: list[str]
    prohibited_words: list[str]
    description: str | None
    images: list[str]
    is_active: bool
    created_at: datetime
    updated_at: datetime

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def _lists(cls, value: Any) -> list[str]:
        return as_str_list(value)
