"""风格模板 API 路由。"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agriscript.application.repositories.style_template_repository import (
    StyleTemplateRepository,
)
from agriscript.application.schemas.common import DeleteResponse, Envelope, ListEnvelope
from agriscript.application.schemas.style_template import (
    StyleTemplateCreate,
    StyleTemplateInitResponse,
    StyleTemplateResponse,
    StyleTemplateUpdate,
)
from agriscript.application.services.style_template_service import StyleTemplateService
from agriscript.interfaces.api.deps import get_db


router = APIRouter()


def get_style_template_service(db: Session = Depends(get_db)) -> StyleTemplateService:
    """获取风格模板服务实例。"""
    return StyleTemplateService(StyleTemplateRepository(db))


@router.get(
    "/style-templates",
    response_model=ListEnvelope[StyleTemplateResponse],
    summary="列出风格模板",
    description="支持按风格类型与启用状态过滤。",
)
def list_style_templates(
    style_type: Annotated[str | None, Query(alias="styleType", max_length=50)] = None,
    is_active: Annotated[bool | None, Query(alias="isActive")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=100)] = 50,
    service: StyleTemplateService = Depends(get_style_template_service),
):
    items, total = service.list_templates(
        style_type=style_type, is_active=is_active, page=page, page_size=page_size
    )
    return ListEnvelope[StyleTemplateResponse](
        data=[StyleTemplateResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post(
    "/style-templates/init",
    response_model=StyleTemplateInitResponse,
    summary="初始化内置风格模板",
    description="补齐六个农产品专属风格模板，已存在的同名模板不会被覆盖。",
)
def init_style_templates(
    service: StyleTemplateService = Depends(get_style_template_service),
):
    inserted = service.init_builtin_templates()
    if inserted:
        message = f"成功初始化 {len(inserted)} 个农产品专属风格模板"
    else:
        message = "所有模板已存在，无需重复初始化"
    return StyleTemplateInitResponse(
        message=message,
        inserted_count=len(inserted),
        data=[StyleTemplateResponse.model_validate(t) for t in inserted],
    )


@router.post(
    "/style-templates",
    response_model=Envelope[StyleTemplateResponse],
    status_code=201,
    summary="创建风格模板",
)
def create_style_template(
    payload: StyleTemplateCreate,
    service: StyleTemplateService = Depends(get_style_template_service),
):
    template = service.create_template(payload)
    return Envelope[StyleTemplateResponse](data=StyleTemplateResponse.model_validate(template))


@router.get(
    "/style-templates/{template_id}",
    response_model=Envelope[StyleTemplateResponse],
    summary="获取风格模板详情",
)
def get_style_template(
    template_id: str,
    service: StyleTemplateService = Depends(get_style_template_service),
):
    template = service.get_template(template_id)
    return Envelope[StyleTemplateResponse](data=StyleTemplateResponse.model_validate(template))


@router.patch(
    "/style-templates/{template_id}",
    response_model=Envelope[StyleTemplateResponse],
    summary="更新风格模板",
)
def update_style_template(
    template_id: str,
    payload: StyleTemplateUpdate,
    service: StyleTemplateService = Depends(get_style_template_service),
):
    template = service.update_template(template_id, payload)
    return Envelope[StyleTemplateResponse](data=StyleTemplateResponse.model_validate(template))


@router.delete(
    "/style-templates/{template_id}",
    response_model=DeleteResponse,
    summary="删除风格模板",
)
def delete_style_template(
    template_id: str,
    service: StyleTemplateService = Depends(get_style_template_service),
):
    service.delete_template(template_id)
    return DeleteResponse(id=template_id, message="风格模板已删除")
