"""知识库 API 路由。"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agriscript.application.repositories.knowledge_repository import (
    KnowledgeCollectionRepository,
    KnowledgeDocumentRepository,
)
from agriscript.application.repositories.video_material_repository import (
    VideoMaterialRepository,
)
from agriscript.application.schemas.common import DeleteResponse, Envelope, ListEnvelope
from agriscript.application.schemas.knowledge import (
    CollectionCreate,
    CollectionResponse,
    DocumentImportRequest,
    DocumentResponse,
    KnowledgeSearchHit,
    KnowledgeSearchRequest,
)
from agriscript.application.services.knowledge_base_service import KnowledgeBaseService
from agriscript.application.services.vector_storage_service import VectorStorageService
from agriscript.interfaces.api.deps import get_db, get_vector_storage


router = APIRouter()


def get_knowledge_base_service(
    db: Session = Depends(get_db),
    vector_storage: VectorStorageService = Depends(get_vector_storage),
) -> KnowledgeBaseService:
    """获取知识库服务实例。"""
    return KnowledgeBaseService(
        KnowledgeCollectionRepository(db),
        KnowledgeDocumentRepository(db),
        VideoMaterialRepository(db),
        vector_storage,
    )


@router.get(
    "/knowledge/collections",
    response_model=Envelope[list[CollectionResponse]],
    summary="列出知识库集合",
)
def list_collections(
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
):
    items = service.list_collections()
    return Envelope[list[CollectionResponse]](
        data=[CollectionResponse.model_validate(item) for item in items]
    )


@router.post(
    "/knowledge/collections",
    response_model=Envelope[CollectionResponse],
    status_code=201,
    summary="创建知识库集合",
)
def create_collection(
    payload: CollectionCreate,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
):
    collection = service.create_collection(payload)
    return Envelope[CollectionResponse](data=CollectionResponse.model_validate(collection))


@router.post(
    "/knowledge/documents",
    response_model=Envelope[DocumentResponse],
    status_code=201,
    summary="导入知识库文档",
    description="支持文本、网页地址与已转写的视频素材三种来源。",
)
def import_document(
    payload: DocumentImportRequest,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
):
    document = service.import_document(payload)
    return Envelope[DocumentResponse](data=DocumentResponse.model_validate(document))


@router.get(
    "/knowledge/documents",
    response_model=ListEnvelope[DocumentResponse],
    summary="列出集合内文档",
)
def list_documents(
    collection_id: Annotated[str | None, Query(alias="collectionId")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=100)] = 20,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
):
    items, total = service.list_documents(collection_id, page=page, page_size=page_size)
    return ListEnvelope[DocumentResponse](
        data=[DocumentResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.delete(
    "/knowledge/documents/{document_id}",
    response_model=DeleteResponse,
    summary="删除知识库文档",
    description="软删除文档并移除其向量切片。",
)
def delete_document(
    document_id: str,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
):
    service.delete_document(document_id)
    return DeleteResponse(id=document_id, message="文档已删除")


@router.post(
    "/knowledge/search",
    response_model=Envelope[list[KnowledgeSearchHit]],
    summary="知识库语义检索",
)
def search_knowledge(
    payload: KnowledgeSearchRequest,
    service: KnowledgeBaseService = Depends(get_knowledge_base_service),
):
    hits = service.search(payload)
    return Envelope[list[KnowledgeSearchHit]](
        data=[KnowledgeSearchHit.model_validate(hit) for hit in hits]
    )
