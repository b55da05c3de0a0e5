"""农产品仓储层。"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from agriscript.domain.entities.product import Product


class ProductRepository:
    """农产品仓储类。"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, product: Product) -> Product:
        """创建产品。"""
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def get_by_id(self, product_id: str) -> Product | None:
        """根据ID获取产品。"""
        return self.db.query(Product).filter(Product.id == product_id).first()

    def get_many(self, product_ids: list[str]) -> dict[str, Product]:
        """批量获取产品，返回 id -> 产品 的映射。"""
        if not product_ids:
            return {}
        rows = self.db.query(Product).filter(Product.id.in_(set(product_ids))).all()
        return {row.id: row for row in rows}

    def _filtered(self, category: str | None, is_active: bool | None):
        query = self.db.query(Product)
        if category is not None:
            query = query.filter(Product.category == category)
        if is_active is not None:
            query = query.filter(Product.is_active == is_active)
        return query

    def list(
        self,
        category: str | None = None,
        is_active: bool | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Product]:
        """列出产品（按创建时间倒序）。"""
        query = self._filtered(category, is_active)
        return query.order_by(Product.created_at.desc()).offset(offset).limit(limit).all()

    def count(self, category: str | None = None, is_active: bool | None = None) -> int:
        """统计产品数量。"""
        return self._filtered(category, is_active).count()

    def update(self, product: Product) -> Product:
        """更新产品。"""
        product.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete(self, product_id: str) -> bool:
        """删除产品。"""
        product = self.get_by_id(product_id)
        if product is None:
            return False

        self.db.delete(product)
        self.db.commit()
        return True
