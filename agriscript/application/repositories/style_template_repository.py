"""风格模板仓储层。"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from agriscript.domain.entities.style_template import StyleTemplate


class StyleTemplateRepository:
    """风格模板仓储类。"""

    def __init__(self, db: Session):
        self.db = db

    def create(self, template: StyleTemplate) -> StyleTemplate:
        """创建风格模板。"""
        self.db.add(template)
        self.db.commit()
        self.db.refresh(template)
        return template

    def create_many(self, templates: list[StyleTemplate]) -> list[StyleTemplate]:
        """批量创建风格模板（单次提交）。"""
        if not templates:
            return []
        self.db.add_all(templates)
        self.db.commit()
        for template in templates:
            self.db.refresh(template)
        return templates

    def get_by_id(self, template_id: str) -> StyleTemplate | None:
        """根据ID获取风格模板。"""
        return (
            self.db.query(StyleTemplate).filter(StyleTemplate.id == template_id).first()
        )

    def get_many(self, template_ids: list[str]) -> dict[str, StyleTemplate]:
        """批量获取风格模板，返回 id -> 模板 的映射。"""
        if not template_ids:
            return {}
        rows = (
            self.db.query(StyleTemplate)
            .filter(StyleTemplate.id.in_(set(template_ids)))
            .all()
        )
        return {row.id: row for row in rows}

    def list_names(self) -> set[str]:
        """获取所有已存在的模板名称。"""
        return {name for (name,) in self.db.query(StyleTemplate.name).all()}

    def _filtered(self, style_type: str | None, is_active: bool | None):
        query = self.db.query(StyleTemplate)
        if style_type is not None:
            query = query.filter(StyleTemplate.style_type == style_type)
        if is_active is not None:
            query = query.filter(StyleTemplate.is_active == is_active)
        return query

    def list(
        self,
        style_type: str | None = None,
        is_active: bool | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[StyleTemplate]:
        """列出风格模板。"""
        query = self._filtered(style_type, is_active)
        return (
            query.order_by(StyleTemplate.created_at.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self, style_type: str | None = None, is_active: bool | None = None) -> int:
        """统计风格模板数量。"""
        return self._filtered(style_type, is_active).count()

    def update(self, template: StyleTemplate) -> StyleTemplate:
        """更新风格模板。"""
        template.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(template)
        return template

    def delete(self, template_id: str) -> bool:
        """删除风格模板。"""
        template = self.get_by_id(template_id)
        if template is None:
            return False

        self.db.delete(template)
        self.db.commit()
        return True
