"""通用 Pydantic 模型：camelCase 基类与统一响应信封。"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """对外 JSON 使用 camelCase，内部字段保持 snake_case。"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(CamelModel, Generic[T]):
    """单对象响应。"""

    success: bool = True
    data: T
    message: str | None = None


class ListEnvelope(CamelModel, Generic[T]):
    """分页列表响应。"""

    success: bool = True
    data: list[T]
    total: int
    page: int
    page_size: int


class DeleteResponse(CamelModel):
    """删除响应。"""

    success: bool = True
    id: str
    message: str
