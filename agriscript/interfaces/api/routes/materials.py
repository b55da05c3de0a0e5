"""视频素材 API 路由。"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agriscript.application.repositories.video_material_repository import (
    VideoMaterialRepository,
)
from agriscript.application.schemas.common import DeleteResponse, Envelope, ListEnvelope
from agriscript.application.schemas.material import (
    MaterialAnalyzeRequest,
    MaterialAnalyzeResult,
    MaterialCreate,
    MaterialResponse,
    VideoSearchResult,
)
from agriscript.application.services.asr_service import AsrService
from agriscript.application.services.llm_runtime_service import LLMRuntimeService
from agriscript.application.services.material_service import MaterialService
from agriscript.application.services.video_search_service import VideoSearchProvider
from agriscript.interfaces.api.deps import (
    get_asr_service,
    get_db,
    get_llm_runtime,
    get_video_search_provider,
)


router = APIRouter()

ProcessStatusQuery = Annotated[
    str | None,
    Query(alias="status", pattern="^(pending|processing|completed|failed)$"),
]


def get_material_service(
    db: Session = Depends(get_db),
    search_provider: VideoSearchProvider = Depends(get_video_search_provider),
    asr_service: AsrService = Depends(get_asr_service),
    llm_runtime: LLMRuntimeService = Depends(get_llm_runtime),
) -> MaterialService:
    """获取素材服务实例。"""
    return MaterialService(
        VideoMaterialRepository(db),
        search_provider=search_provider,
        asr_service=asr_service,
        llm_runtime=llm_runtime,
    )


@router.get(
    "/materials",
    response_model=ListEnvelope[MaterialResponse],
    summary="列出素材",
)
def list_materials(
    process_status: ProcessStatusQuery = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=100)] = 20,
    service: MaterialService = Depends(get_material_service),
):
    items, total = service.list_materials(
        process_status=process_status, page=page, page_size=page_size
    )
    return ListEnvelope[MaterialResponse](
        data=[MaterialResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post(
    "/materials",
    response_model=Envelope[MaterialResponse],
    status_code=201,
    summary="添加素材",
    description="通常由搜索结果一键保存，初始处理状态为 pending。",
)
def create_material(
    payload: MaterialCreate,
    service: MaterialService = Depends(get_material_service),
):
    material = service.create_material(payload)
    return Envelope[MaterialResponse](data=MaterialResponse.model_validate(material))


@router.get(
    "/materials/search",
    response_model=VideoSearchResult,
    summary="搜索视频素材",
)
def search_materials(
    keyword: Annotated[str | None, Query(max_length=100)] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=50)] = 10,
    service: MaterialService = Depends(get_material_service),
):
    return VideoSearchResult.model_validate(
        service.search_videos(keyword, page=page, page_size=page_size)
    )


@router.post(
    "/materials/analyze",
    response_model=Envelope[MaterialAnalyzeResult],
    summary="转写并分析素材",
    description="语音转写后由 LLM 拆解话术结构、技巧与金句，结果写回素材。",
)
def analyze_material(
    payload: MaterialAnalyzeRequest,
    service: MaterialService = Depends(get_material_service),
):
    result = service.analyze(payload)
    return Envelope[MaterialAnalyzeResult](data=MaterialAnalyzeResult.model_validate(result))


@router.delete(
    "/materials/{material_id}",
    response_model=DeleteResponse,
    summary="删除素材",
)
def delete_material(
    material_id: str,
    service: MaterialService = Depends(get_material_service),
):
    service.delete_material(material_id)
    return DeleteResponse(id=material_id, message="素材已删除")
