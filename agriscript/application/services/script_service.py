"""话术服务层：查询、编辑与删除。

对外视图中的旧版字段始终由 `project_legacy` 投影得到。
"""

from __future__ import annotations

from typing import Any

from agriscript.application.repositories.product_repository import ProductRepository
from agriscript.application.repositories.script_repository import ScriptRepository
from agriscript.application.repositories.style_template_repository import (
    StyleTemplateRepository,
)
from agriscript.application.schemas.script import ScriptUpdate
from agriscript.application.services.script_generation.sections import (
    LEGACY_OUTPUT_KEYS,
    SECTIONS_BY_COLUMN,
    apply_legacy_update,
    normalize_section,
    project_legacy,
)
from agriscript.domain.entities.product import Product
from agriscript.domain.entities.script import Script
from agriscript.domain.entities.style_template import StyleTemplate
from agriscript.shared.errors import bad_request, not_found

_PLAIN_FIELDS = (
    "id",
    "product_id",
    "style_template_id",
    "title",
    "target_audience",
    "duration",
    "promotion_rules",
    "warm_up",
    "retention",
    "lock_customer",
    "push_order",
    "atmosphere",
    "compliance_notes",
    "estimated_duration",
    "algorithm_tips",
    "raw_content",
    "quality_score",
    "compliance_status",
    "compliance_issues",
    "referenced_materials",
    "status",
    "created_at",
    "updated_at",
)


def script_view(
    script: Script,
    product: Product | None = None,
    template: StyleTemplate | None = None,
) -> dict[str, Any]:
    """话术记录 -> 响应字段（含旧版投影与关联摘要）。"""
    view = {name: getattr(script, name) for name in _PLAIN_FIELDS}
    view.update(project_legacy(script))
    view["product"] = (
        {"id": product.id, "name": product.name, "category": product.category}
        if product is not None
        else None
    )
    view["style_template"] = (
        {"id": template.id, "name": template.name, "style_type": template.style_type}
        if template is not None
        else None
    )
    return view


class ScriptService:
    """话术服务类。"""

    def __init__(
        self,
        repository: ScriptRepository,
        product_repository: ProductRepository,
        template_repository: StyleTemplateRepository,
    ):
        self.repository = repository
        self.product_repository = product_repository
        self.template_repository = template_repository

    def _get(self, script_id: str) -> Script:
        script = self.repository.get_by_id(script_id)
        if script is None:
            raise not_found("话术不存在")
        return script

    def _view(self, script: Script) -> dict[str, Any]:
        return script_view(
            script,
            self.product_repository.get_by_id(script.product_id),
            self.template_repository.get_by_id(script.style_template_id),
        )

    def get_script(self, script_id: str) -> dict[str, Any]:
        return self._view(self._get(script_id))

    def list_scripts(
        self,
        *,
        product_id: str | None,
        status: str | None,
        page: int,
        page_size: int,
    ) -> tuple[list[dict[str, Any]], int]:
        offset = (page - 1) * page_size
        scripts = self.repository.list(
            product_id=product_id, status=status, limit=page_size, offset=offset
        )
        products = self.product_repository.get_many([s.product_id for s in scripts])
        templates = self.template_repository.get_many(
            [s.style_template_id for s in scripts]
        )
        items = [
            script_view(s, products.get(s.product_id), templates.get(s.style_template_id))
            for s in scripts
        ]
        return items, self.repository.count(product_id=product_id, status=status)

    def update_script(self, script_id: str, payload: ScriptUpdate) -> dict[str, Any]:
        """按字段更新；环节先于旧版字段写入，旧版编辑会同步到对应环节。"""
        script = self._get(script_id)
        changes = payload.model_dump(exclude_unset=True)

        for column, spec in SECTIONS_BY_COLUMN.items():
            if column not in changes:
                continue
            raw = changes.pop(column)
            section = normalize_section(raw, spec)
            if raw is not None and section is None:
                raise bad_request(f"{spec.title}缺少话术内容", code="invalid_section")
            setattr(script, column, section)

        for legacy in LEGACY_OUTPUT_KEYS:
            if legacy in changes:
                apply_legacy_update(script, legacy, changes.pop(legacy))

        for key, value in changes.items():
            if key in ("title", "status") and value is None:
                continue
            setattr(script, key, value)

        return self._view(self.repository.update(script))

    def delete_script(self, script_id: str) -> None:
        if not self.repository.delete(script_id):
            raise not_found("话术不存在")
