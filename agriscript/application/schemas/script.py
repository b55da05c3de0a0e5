"""话术 Pydantic 模型。"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import Field

from agriscript.application.schemas.common import CamelModel

ScriptStatusLiteral = Literal["draft", "published", "archived"]
ComplianceStatusLiteral = Literal["pass", "warning", "fail"]


class ScriptGenerateRequest(CamelModel):
    """话术生成请求。

    productId/styleTemplateId 缺失时由服务层返回 400，而不是校验层的 422。
    """

    product_id: str | None = None
    style_template_id: str | None = None
    target_audience: str | None = Field(None, max_length=200)
    duration: int | None = Field(None, ge=1, le=600, description="直播时长（分钟）")
    promotion_rules: dict[str, Any] | None = None
    title: str | None = Field(None, max_length=200)


class ScriptUpdate(CamelModel):
    """话术更新请求（仅更新显式传入的字段）。"""

    title: str | None = Field(None, min_length=1, max_length=200)
    target_audience: str | None = Field(None, max_length=200)
    duration: int | None = Field(None, ge=1, le=600)
    promotion_rules: dict[str, Any] | None = None

    warm_up: dict[str, Any] | None = None
    retention: dict[str, Any] | None = None
    lock_customer: dict[str, Any] | None = None
    push_order: dict[str, Any] | None = None
    atmosphere: dict[str, Any] | None = None

    opening: str | None = None
    product_intro: str | None = None
    selling_points: list[str] | str | None = None
    promotions: list[str] | str | None = None
    closing: str | None = None
    faq: list[Any] | None = None

    quality_score: float | None = Field(None, ge=0, le=10)
    compliance_status: ComplianceStatusLiteral | None = None
    compliance_issues: list[dict[str, Any]] | None = None
    status: ScriptStatusLiteral | None = None


class ProductSummary(CamelModel):
    id: str
    name: str
    category: str


class StyleTemplateSummary(CamelModel):
    id: str
    name: str
    style_type: str


class ScriptResponse(CamelModel):
    """话术响应。

    opening/productIntro/sellingPoints/promotions/closing 为旧版视图，
    优先取自对应的五段式环节。
    """

    id: str
    product_id: str
    style_template_id: str
    title: str
    target_audience: str | None = None
    duration: int | None = None
    promotion_rules: dict[str, Any] | None = None

    warm_up: dict[str, Any] | None = None
    retention: dict[str, Any] | None = None
    lock_customer: dict[str, Any] | None = None
    push_order: dict[str, Any] | None = None
    atmosphere: dict[str, Any] | None = None
    compliance_notes: list[str] | None = None
    estimated_duration: str | None = None
    algorithm_tips: str | None = None
    raw_content: str | None = None

    opening: str | None = None
    product_intro: str | None = None
    selling_points: Any = None
    promotions: Any = None
    closing: str | None = None
    faq: list[Any] | None = None

    quality_score: float | None = None
    compliance_status: str | None = None
    compliance_issues: list[dict[str, Any]] | None = None
    referenced_materials: list[str] | None = None
    status: str
    created_at: datetime
    updated_at: datetime

    product: ProductSummary | None = None
    style_template: StyleTemplateSummary | None = None


class ComplianceCheckRequest(CamelModel):
    """合规检查请求。"""

    script_id: str | None = None


class ComplianceReport(CamelModel):
    """合规检查结果。"""

    status: str
    score: float | None = None
    issues: list[dict[str, Any]] = Field(default_factory=list)
    summary: str | None = None
    passed_content: str | None = None
    raw_content: str | None = None
