"""农产品 API 路由。"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from agriscript.application.repositories.product_repository import ProductRepository
from agriscript.application.schemas.common import DeleteResponse, Envelope, ListEnvelope
from agriscript.application.schemas.product import (
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from agriscript.application.services.product_service import ProductService
from agriscript.interfaces.api.deps import get_db


router = APIRouter()


def get_product_service(db: Session = Depends(get_db)) -> ProductService:
    """获取产品服务实例。"""
    return ProductService(ProductRepository(db))


@router.get(
    "/products",
    response_model=ListEnvelope[ProductResponse],
    summary="列出产品",
    description="获取农产品列表，支持按品类与启用状态过滤。",
)
def list_products(
    category: Annotated[str | None, Query(max_length=100)] = None,
    is_active: Annotated[bool | None, Query(alias="isActive")] = None,
    page: Annotated[int, Query(ge=1)] = 1,
    page_size: Annotated[int, Query(alias="pageSize", ge=1, le=100)] = 20,
    service: ProductService = Depends(get_product_service),
):
    items, total = service.list_products(
        category=category, is_active=is_active, page=page, page_size=page_size
    )
    return ListEnvelope[ProductResponse](
        data=[ProductResponse.model_validate(item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post(
    "/products",
    response_model=Envelope[ProductResponse],
    status_code=201,
    summary="创建产品",
)
def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
):
    product = service.create_product(payload)
    return Envelope[ProductResponse](data=ProductResponse.model_validate(product))


@router.get(
    "/products/{product_id}",
    response_model=Envelope[ProductResponse],
    summary="获取产品详情",
)
def get_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    product = service.get_product(product_id)
    return Envelope[ProductResponse](data=ProductResponse.model_validate(product))


@router.patch(
    "/products/{product_id}",
    response_model=Envelope[ProductResponse],
    summary="更新产品",
    description="仅更新请求体中出现的字段。",
)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
):
    product = service.update_product(product_id, payload)
    return Envelope[ProductResponse](data=ProductResponse.model_validate(product))


@router.delete(
    "/products/{product_id}",
    response_model=DeleteResponse,
    summary="删除产品",
)
def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
):
    service.delete_product(product_id)
    return DeleteResponse(id=product_id, message="产品已删除")
