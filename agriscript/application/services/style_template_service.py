"""风格模板服务层。"""

from __future__ import annotations

import copy
from uuid import uuid4

from agriscript.application.repositories.style_template_repository import (
    StyleTemplateRepository,
)
from agriscript.application.schemas.style_template import (
    StyleTemplateCreate,
    StyleTemplateUpdate,
)
from agriscript.domain.entities.style_template import StyleTemplate
from agriscript.shared.constants.style_templates import BUILTIN_STYLE_TEMPLATES
from agriscript.shared.errors import not_found
from agriscript.shared.logging import get_logger, log_extra

log = get_logger(__name__)

_REQUIRED = ("name", "style_type", "is_active")


class StyleTemplateService:
    """风格模板服务类。"""

    def __init__(self, repository: StyleTemplateRepository):
        self.repository = repository

    def create_template(self, payload: StyleTemplateCreate) -> StyleTemplate:
        template = StyleTemplate(id=str(uuid4()), **payload.model_dump())
        return self.repository.create(template)

    def get_template(self, template_id: str) -> StyleTemplate:
        template = self.repository.get_by_id(template_id)
        if template is None:
            raise not_found("风格模板不存在")
        return template

    def list_templates(
        self,
        *,
        style_type: str | None,
        is_active: bool | None,
        page: int,
        page_size: int,
    ) -> tuple[list[StyleTemplate], int]:
        offset = (page - 1) * page_size
        items = self.repository.list(
            style_type=style_type, is_active=is_active, limit=page_size, offset=offset
        )
        return items, self.repository.count(style_type=style_type, is_active=is_active)

    def update_template(self, template_id: str, payload: StyleTemplateUpdate) -> StyleTemplate:
        template = self.get_template(template_id)
        for key, value in payload.model_dump(exclude_unset=True).items():
            if key in _REQUIRED and value is None:
                continue
            setattr(template, key, value)
        return self.repository.update(template)

    def delete_template(self, template_id: str) -> None:
        if not self.repository.delete(template_id):
            raise not_found("风格模板不存在")

    def init_builtin_templates(self) -> list[StyleTemplate]:
        """补齐内置模板（按名称判重，不覆盖已有模板）。"""
        existing = self.repository.list_names()
        missing = [
            StyleTemplate(id=str(uuid4()), is_active=True, **copy.deepcopy(data))
            for data in BUILTIN_STYLE_TEMPLATES
            if data["name"] not in existing
        ]
        inserted = self.repository.create_many(missing)
        log.info(
            "style_templates.initialized",
            extra=log_extra(inserted=len(inserted), existing=len(existing)),
        )
        return inserted
