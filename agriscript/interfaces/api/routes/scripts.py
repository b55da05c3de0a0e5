"""话术 API 路由：查询编辑、流式生成与合规检查。"""

from __future__ import annotations

import asyncio
import json
from typing import Annotated, Any, AsyncIterator

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from agriscript.application.repositories.product_repository import ProductRepository
from agriscript.application.repositories.script_repository import ScriptRepository
from agriscript.application.repositories.style_template_repository import (
    StyleTemplateRepository,
)
from agriscript.application.schemas.common import DeleteResponse, Envelope, ListEnvelope
from agriscript.application.schemas.script import (
    ComplianceCheckRequest,
    ComplianceReport,
    ScriptGenerateRequest,
    ScriptResponse,
    ScriptStatusLiteral,
    ScriptUpdate,
)
from agriscript.application.services.compliance_service import ComplianceService
from agriscript.application.services.llm_runtime_service import LLMRuntimeService
from agriscript.application.services.script_generation.service import (
    ScriptGenerationService,
)
from agriscript.application.services.script_service import ScriptService
from agriscript.application.services.vector_storage_service import VectorStorageService
from agriscript.interfaces.api.deps import (
    get_db,
    get_llm_runtime,
    get_session_factory,
    get_vector_storage,
)


router = APIRouter()

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
    # 避免反向代理缓冲 SSE
    "X-Accel-Buffering": "no",
}


def get_script_service(db: Session = Depends(get_db)) -> ScriptService:
    """获取话术服务实例。"""
    return ScriptService(
        ScriptRepository(db),
        ProductRepository(db),
        StyleTemplateRepository(db),
    )


def get_script_generation_service(
    session_factory=Depends(get_session_factory),
    llm_runtime: LLMRuntimeService = Depends(get_llm_runtime),
    vector_storage: VectorStorageService = Depends(get_vector_storage),
) -> ScriptGenerationService:
    """获取话术生成服务实例（自行管理数据库会话，流式阶段不依赖请求会话）。"""
    return ScriptGenerationService(
        session_factory=session_factory,
        llm_runtime=llm_runtime,
        knowledge_client=vector_storage,
    )


def get_compliance_service(
    db: Session = Depends(get_db),
    llm_runtime: LLMRuntimeService = Depends(get_llm_runtime),
) -> ComplianceService:
    """获取合规检查服务实例。"""
    return ComplianceService(ScriptRepository(db), ProductRepository(db), llm_runtime)


def encode_sse(evt: dict[str, Any]) -> bytes:
    return f"data: {json.dumps(evt, ensure_ascii=False, default=str)}\n\n".encode("utf-8")


@router.post(
    "/scripts/generate",
    summary="流式生成话术",
    description=(
        "以 text/event-stream 返回生成过程：若干 chunk 事件后接一个 done 或 error 事件。"
        "参数缺失或产品/模板不存在时直接返回 JSON 错误。"
    ),
)
async def generate_script(
    payload: ScriptGenerateRequest,
    service: ScriptGenerationService = Depends(get_script_generation_service),
):
    context = await asyncio.to_thread(service.prepare, payload)

    async def _event_stream() -> AsyncIterator[bytes]:
        async for evt in service.stream(context):
            yield encode_sse(evt)

    return StreamingResponse(
        _event_stream(),
        media_type="text/event-stream",
        headers=SSE_HEADERS,
    )


@router.post(
    "/scripts/compliance",
    response_model=Envelope[ComplianceReport],
    summary="话术合规检查",
    description="检查广告法与平台规则风险，并回写合规状态与质量分。",
)
def check_compliance(
    payload: ComplianceCheckRequest,
    service: ComplianceService = Depends(get_compliance_service),
):
    report = service.check(payload.script_id)
    return Envelope[ComplianceReport](data=ComplianceReport.model_validate(report))


@router.get(
    "/scripts",
    response_model=ListEnvelope[ScriptResponse],
    summary="列出话术",
    description="支持按产品与状态过滤，结果附带产品与风格模板摘要。",
)
def list_scripts(
    product_id: Annotated[str | None, Query(alias="productId")] = None,
    status: Annotated[ScriptStatusLiteral | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=100)] = 20,
    service: ScriptService = Depends(get_script_service),
):
    items, total = service.list_scripts(
        product_id=product_id, status=status, page=page, page_size=page_size
    )
    return ListEnvelope[ScriptResponse](
        data=[ScriptResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get(
    "/scripts/{script_id}",
    response_model=Envelope[ScriptResponse],
    summary="获取话术详情",
)
def get_script(
    script_id: str,
    service: ScriptService = Depends(get_script_service),
):
    return Envelope[ScriptResponse](
        data=ScriptResponse.model_validate(service.get_script(script_id))
    )


@router.patch(
    "/scripts/{script_id}",
    response_model=Envelope[ScriptResponse],
    summary="更新话术",
    description="仅更新请求体中出现的字段；编辑旧版字段会同步到对应的五段式环节。",
)
def update_script(
    script_id: str,
    payload: ScriptUpdate,
    service: ScriptService = Depends(get_script_service),
):
    return Envelope[ScriptResponse](
        data=ScriptResponse.model_validate(service.update_script(script_id, payload))
    )


@router.delete(
    "/scripts/{script_id}",
    response_model=DeleteResponse,
    summary="删除话术",
)
def delete_script(
    script_id: str,
    service: ScriptService = Depends(get_script_service),
):
    service.delete_script(script_id)
    return DeleteResponse(id=script_id, message="话术已删除")
