"""话术仓储层。"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from agriscript.domain.entities.script import Script


class ScriptRepository:
    """话术仓储类。"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, script: Script) -> Script:
        """创建话术。"""
        self.db.add(script)
        self.db.commit()
        self.db.refresh(script)
        return script

    def get_by_id(self, script_id: str) -> Script | None:
        """根据ID获取话术。"""
        return self.db.query(Script).filter(Script.id == script_id).first()

    def _filtered(self, product_id: str | None, status: str | None):
        query = self.db.query(Script)
        if product_id is not None:
            query = query.filter(Script.product_id == product_id)
        if status is not None:
            query = query.filter(Script.status == status)
        return query

    def list(
        self,
        product_id: str | None = None,
        status: str | None = None,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Script]:
        """列出话术（按创建时间倒序）。"""
        query = self._filtered(product_id, status)
        return query.order_by(Script.created_at.desc()).offset(offset).limit(limit).all()

    def count(self, product_id: str | None = None, status: str | None = None) -> int:
        """统计话术数量。"""
        return self._filtered(product_id, status).count()

    def update(self, script: Script) -> Script:
        """更新话术。"""
        script.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(script)
        return script

    def delete(self, script_id: str) -> bool:
        """删除话术。"""
        script = self.get_by_id(script_id)
        if script is None:
            return False

        self.db.delete(script)
        self.db.commit()
        return True
