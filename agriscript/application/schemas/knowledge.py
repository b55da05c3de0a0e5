"""知识库 Pydantic 模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from agriscript.application.schemas.common import CamelModel


class CollectionCreate(CamelModel):
    """集合创建请求。"""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    collection_type: str = Field("话术样本", max_length=50)


class CollectionResponse(CamelModel):
    """集合响应（document_count 为有效文档实时计数）。"""

    id: str
    name: str
    description: str | None
    collection_type: str
    document_count: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class DocumentImportRequest(CamelModel):
    """文档导入请求。

    - text：直接使用 content
    - url：抓取 source_url 页面正文
    - video_material：使用素材的转写文本，source_id 为素材 ID
    """

    collection_id: str = Field(..., min_length=1)
    source_type: Literal["text", "url", "video_material"] = "text"
    title: str | None = Field(None, max_length=500)
    content: str | None = None
    source_url: str | None = None
    source_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, Any] | None = None


class DocumentResponse(CamelModel):
    """文档响应。"""

    id: str
    collection_id: str
    title: str
    content: str
    source_type: str
    source_id: str | None
    source_url: str | None
    tags: list[str] | None
    doc_metadata: dict[str, Any] | None = Field(None, serialization_alias="metadata")
    vector_doc_id: str | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class KnowledgeSearchRequest(CamelModel):
    """知识库检索请求。"""

    query: str | None = None
    collection_ids: list[str] | None = None
    top_k: int = Field(5, ge=1, le=50)
    min_score: float = Field(0.5, ge=0, le=1)


class KnowledgeSearchHit(CamelModel):
    """检索命中的片段，附带文档元信息。"""

    content: str
    score: float
    doc_id: str
    title: str | None = None
    collection_id: str | None = None
    source_type: str | None = None
    tags: list[str] | None = None
