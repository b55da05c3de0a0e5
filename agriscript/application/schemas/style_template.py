"""风格模板 Pydantic 模型。"""

from __future__ import annotations

from datetime import datetime

from pydantic import ConfigDict, Field

from agriscript.application.schemas.common import CamelModel


class RuleSet(CamelModel):
    """某一环节的话术规则。"""

    model_config = ConfigDict(extra="allow")

    patterns: list[str] = Field(default_factory=list, description="句式套路")
    keywords: list[str] | None = Field(None, description="推荐关键词")
    tips: str | None = Field(None, description="使用提示")


class ExampleScript(CamelModel):
    """示例话术。"""

    scene: str
    script: str


class StyleTemplateCreate(CamelModel):
    """风格模板创建请求。"""

    name: str = Field(..., min_length=1, max_length=100)
    style_type: str = Field(..., min_length=1, max_length=50, description="风格类型")
    description: str | None = None
    opening_rules: RuleSet | None = None
    selling_rules: RuleSet | None = None
    promotion_rules: RuleSet | None = None
    closing_rules: RuleSet | None = None
    tone_guidelines: str | None = None
    example_scripts: list[ExampleScript] = Field(default_factory=list)
    is_active: bool = True


class StyleTemplateUpdate(CamelModel):
    """风格模板更新请求（仅更新显式传入的字段）。"""

    name: str | None = Field(None, min_length=1, max_length=100)
    style_type: str | None = Field(None, min_length=1, max_length=50)
    description: str | None = None
    opening_rules: RuleSet | None = None
    selling_rules: RuleSet | None = None
    promotion_rules: RuleSet | None = None
    closing_rules: RuleSet | None = None
    tone_guidelines: str | None = None
    example_scripts: list[ExampleScript] | None = None
    is_active: bool | None = None


class StyleTemplateResponse(CamelModel):
    """风格模板响应。"""

    id: str
    name: str
    style_type: str
    description: str | None
    opening_rules: RuleSet | None
    selling_rules: RuleSet | None
    promotion_rules: RuleSet | None
    closing_rules: RuleSet | None
    tone_guidelines: str | None
    example_scripts: list[ExampleScript] | None
    is_active: bool
    created_at: datetime
    updated_at: datetime


class StyleTemplateInitResponse(CamelModel):
    """内置模板初始化响应。"""

    success: bool = True
    message: str
    inserted_count: int
    data: list[StyleTemplateResponse] = Field(default_factory=list)
