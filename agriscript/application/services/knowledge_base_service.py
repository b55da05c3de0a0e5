"""知识库服务：集合管理、文档导入与语义检索。"""

from __future__ import annotations

import re
from html import unescape
from typing import Any, Callable
from uuid import uuid4

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from agriscript.application.repositories.knowledge_repository import (
    KnowledgeCollectionRepository,
    KnowledgeDocumentRepository,
)
from agriscript.application.repositories.video_material_repository import (
    VideoMaterialRepository,
)
from agriscript.application.schemas.knowledge import (
    CollectionCreate,
    DocumentImportRequest,
    KnowledgeSearchRequest,
)
from agriscript.application.services.vector_storage_service import (
    SEARCH_OK,
    VectorStorageError,
    VectorStorageService,
)
from agriscript.domain.entities.knowledge import KnowledgeCollection, KnowledgeDocument
from agriscript.shared.errors import (
    ERROR_MISSING_FIELD,
    bad_request,
    not_found,
    upstream_error,
)
from agriscript.shared.json_utils import as_str_list
from agriscript.shared.logging import get_logger, log_extra

log = get_logger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*>.*?</\1>", re.S | re.I)
_BLANK_LINES_RE = re.compile(r"\n\s*\n+")


def html_to_text(html: str) -> str:
    """粗略提取网页正文：去掉脚本、样式与标签，合并多余空行。"""
    text = _SCRIPT_STYLE_RE.sub("", html)
    text = re.sub(r"<(br|/p|/div|/h[1-6]|/li)[^>]*>", "\n", text, flags=re.I)
    text = unescape(_TAG_RE.sub("", text))
    lines = [line.strip() for line in text.splitlines()]
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(httpx.TransportError),
    reraise=True,
)
def fetch_page_text(url: str) -> str:
    resp = httpx.get(url, timeout=30.0, follow_redirects=True)
    resp.raise_for_status()
    return html_to_text(resp.text)


class KnowledgeBaseService:
    """知识库服务类。"""

    def __init__(
        self,
        collection_repository: KnowledgeCollectionRepository,
        document_repository: KnowledgeDocumentRepository,
        material_repository: VideoMaterialRepository,
        vector_storage: VectorStorageService,
        page_fetcher: Callable[[str], str] = fetch_page_text,
    ):
        self.collection_repository = collection_repository
        self.document_repository = document_repository
        self.material_repository = material_repository
        self.vector_storage = vector_storage
        self.page_fetcher = page_fetcher

    # ============== 集合 ==============

    def list_collections(self) -> list[dict[str, Any]]:
        """列出集合，文档数按有效文档实时统计。"""
        counts = self.collection_repository.count_active_documents()
        items = []
        for collection in self.collection_repository.list_active():
            items.append(
                {
                    "id": collection.id,
                    "name": collection.name,
                    "description": collection.description,
                    "collection_type": collection.collection_type,
                    "document_count": counts.get(collection.id, 0),
                    "is_active": collection.is_active,
                    "created_at": collection.created_at,
                    "updated_at": collection.updated_at,
                }
            )
        return items

    def create_collection(self, payload: CollectionCreate) -> KnowledgeCollection:
        collection = KnowledgeCollection(
            id=str(uuid4()),
            name=payload.name,
            description=payload.description,
            collection_type=payload.collection_type or "话术样本",
            document_count=0,
            is_active=True,
        )
        return self.collection_repository.create(collection)

    # ============== 文档 ==============

    def import_document(self, payload: DocumentImportRequest) -> KnowledgeDocument:
        """导入文档到向量库并登记文档记录。"""
        collection = self.collection_repository.get_by_id(payload.collection_id)
        if collection is None:
            raise not_found("知识库集合不存在")

        title = payload.title
        content = payload.content
        source_url = payload.source_url
        source_id = payload.source_id
        material = None

        if payload.source_type == "video_material":
            if not source_id:
                raise bad_request("缺少视频素材ID", code=ERROR_MISSING_FIELD)
            material = self.material_repository.get_by_id(source_id)
            if material is None:
                raise not_found("视频素材不存在")
            title = title or material.title
            content = content or material.transcription
            source_url = material.source_url
        elif payload.source_type == "url" and not content:
            if not source_url:
                raise bad_request("缺少导入地址", code=ERROR_MISSING_FIELD)
            try:
                content = self.page_fetcher(source_url)
            except httpx.HTTPError as exc:
                raise upstream_error(f"抓取网页失败: {exc}", url=source_url) from exc

        if not content or not content.strip():
            raise bad_request("文档内容不能为空", code="empty_document")

        metadata = {"title": title or "", "source_type": payload.source_type}
        vector_doc_ids = self.vector_storage.add_documents(
            [content],
            collection_id=collection.id,
            metadata=metadata,
        )

        document = KnowledgeDocument(
            id=str(uuid4()),
            collection_id=collection.id,
            title=title or "未命名文档",
            content=content,
            source_type=payload.source_type,
            source_id=source_id,
            source_url=source_url,
            tags=list(payload.tags or []),
            doc_metadata=payload.metadata,
            vector_doc_id=vector_doc_ids[0] if vector_doc_ids else None,
            is_active=True,
        )
        document = self.document_repository.create(document)

        collection.document_count = (collection.document_count or 0) + 1
        self.collection_repository.update(collection)

        if material is not None:
            material.imported_to_knowledge = True
            material.knowledge_doc_ids = [*as_str_list(material.knowledge_doc_ids), document.id]
            self.material_repository.update(material)

        log.info(
            "knowledge.document_imported",
            extra=log_extra(
                collection_id=collection.id,
                document_id=document.id,
                source_type=payload.source_type,
            ),
        )
        return document

    def list_documents(
        self, collection_id: str | None, *, page: int, page_size: int
    ) -> tuple[list[KnowledgeDocument], int]:
        if not collection_id:
            raise bad_request("缺少集合ID", code=ERROR_MISSING_FIELD)
        offset = (page - 1) * page_size
        items = self.document_repository.list_active(
            collection_id, limit=page_size, offset=offset
        )
        return items, self.document_repository.count_active(collection_id)

    def delete_document(self, document_id: str) -> KnowledgeDocument:
        """软删除文档，同时移除向量切片并回减集合计数。"""
        document = self.document_repository.get_by_id(document_id)
        if document is None or not document.is_active:
            raise not_found("文档不存在")

        if document.vector_doc_id:
            try:
                self.vector_storage.delete_document(document.vector_doc_id)
            except VectorStorageError:
                # 残留切片在检索回查时按文档失效过滤
                log.warning(
                    "knowledge.vector_delete_failed",
                    extra=log_extra(document_id=document.id),
                )

        document.is_active = False
        self.document_repository.update(document)

        collection = self.collection_repository.get_by_id(document.collection_id)
        if collection is not None:
            collection.document_count = max((collection.document_count or 0) - 1, 0)
            self.collection_repository.update(collection)
        return document

    # ============== 检索 ==============

    def search(self, payload: KnowledgeSearchRequest) -> list[dict[str, Any]]:
        """语义检索，命中片段附带文档标题、集合与标签。"""
        query = (payload.query or "").strip()
        if not query:
            raise bad_request("查询内容不能为空", code=ERROR_MISSING_FIELD)

        result = self.vector_storage.search(
            query,
            payload.collection_ids or None,
            top_k=payload.top_k,
            min_score=payload.min_score,
        )
        if result.get("code") != SEARCH_OK:
            raise upstream_error(result.get("msg") or "知识库检索失败")

        chunks = result.get("chunks") or []
        docs = self.document_repository.get_by_vector_ids(
            [c.get("doc_id") for c in chunks if c.get("doc_id")]
        )
        hits = []
        for chunk in chunks:
            doc = docs.get(chunk.get("doc_id"))
            if doc is not None and not doc.is_active:
                continue
            hits.append(
                {
                    "content": chunk.get("content", ""),
                    "score": chunk.get("score", 0.0),
                    "doc_id": chunk.get("doc_id", ""),
                    "title": doc.title if doc else None,
                    "collection_id": doc.collection_id if doc else None,
                    "source_type": doc.source_type if doc else None,
                    "tags": as_str_list(doc.tags) if doc else None,
                }
            )
        return hits
