"""农产品服务层。"""

from __future__ import annotations

from uuid import uuid4

from agriscript.application.repositories.product_repository import ProductRepository
from agriscript.application.schemas.product import ProductCreate, ProductUpdate
from agriscript.domain.entities.product import Product
from agriscript.shared.errors import not_found


class ProductService:
    """农产品服务类。"""

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def create_product(self, payload: ProductCreate) -> Product:
        product = Product(id=str(uuid4()), **payload.model_dump())
        return self.repository.create(product)

    def get_product(self, product_id: str) -> Product:
        product = self.repository.get_by_id(product_id)
        if product is None:
            raise not_found("产品不存在")
        return product

    def list_products(
        self,
        *,
        category: str | None,
        is_active: bool | None,
        page: int,
        page_size: int,
    ) -> tuple[list[Product], int]:
        offset = (page - 1) * page_size
        items = self.repository.list(
            category=category, is_active=is_active, limit=page_size, offset=offset
        )
        return items, self.repository.count(category=category, is_active=is_active)

    def update_product(self, product_id: str, payload: ProductUpdate) -> Product:
        product = self.get_product(product_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if key in ("name", "category", "is_active") and value is None:
                continue
            setattr(product, key, value)
        return self.repository.update(product)

    def delete_product(self, product_id: str) -> None:
        if not self.repository.delete(product_id):
            raise not_found("产品不存在")
