"""话术流式生成编排。

分两步执行：
1. `prepare`：校验请求、读取产品与风格模板、检索参考素材并组装提示词；
   此阶段的错误以 AppError 抛出，由 API 层返回普通 JSON 错误。
2. `stream`：调用 LLM 流式输出，逐段产出 chunk 事件；结束后解析 JSON、
   落库并产出 done 事件。开始流式后出现的任何异常都转为单个 error 事件。

客户端断开时生成器被关闭，上游流随之关闭，不落库。
"""

from __future__ import annotations

import asyncio
import threading
from contextlib import aclosing
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Callable
from uuid import uuid4

from agriscript.application.repositories.product_repository import ProductRepository
from agriscript.application.repositories.script_repository import ScriptRepository
from agriscript.application.repositories.style_template_repository import (
    StyleTemplateRepository,
)
from agriscript.application.schemas.script import ScriptGenerateRequest
from agriscript.application.services.script_generation.prompt_composer import (
    GenerationScenario,
    compose_script_prompt,
)
from agriscript.application.services.script_generation.sections import (
    LEGACY_LIST_FIELDS,
    LEGACY_OUTPUT_KEYS,
    SECTION_SPECS,
    normalize_section,
)
from agriscript.application.services.vector_storage_service import SEARCH_OK
from agriscript.domain.entities.script import Script, ScriptStatus
from agriscript.shared.config import Settings, get_settings
from agriscript.shared.errors import ERROR_MISSING_FIELD, AppError, not_found
from agriscript.shared.json_utils import as_str_list, extract_json_object
from agriscript.shared.logging import get_logger, log_extra

log = get_logger(__name__)


@dataclass
class GenerationContext:
    """prepare 阶段的产物，stream 阶段只依赖它。"""

    product_id: str
    style_template_id: str
    title: str
    prompt: str
    target_audience: str | None = None
    duration: int | None = None
    promotion_rules: dict[str, Any] | None = None
    referenced_doc_ids: list[str] = field(default_factory=list)


def build_script_record(context: GenerationContext, parsed: dict[str, Any]) -> Script:
    """把解析后的模型输出映射为话术记录。"""
    script = Script(
        id=str(uuid4()),
        product_id=context.product_id,
        style_template_id=context.style_template_id,
        title=context.title,
        target_audience=context.target_audience,
        duration=context.duration,
        promotion_rules=context.promotion_rules,
        referenced_materials=list(context.referenced_doc_ids),
        status=ScriptStatus.DRAFT.value,
    )

    for spec in SECTION_SPECS:
        setattr(script, spec.column, normalize_section(parsed.get(spec.key), spec))

    notes = parsed.get("complianceNotes")
    script.compliance_notes = as_str_list(notes) if notes is not None else None
    estimated = parsed.get("estimatedDuration")
    script.estimated_duration = str(estimated)[:50] if estimated is not None else None
    tips = parsed.get("algorithmTips")
    if isinstance(tips, list):
        tips = "\n".join(as_str_list(tips))
    script.algorithm_tips = str(tips) if tips else None

    raw = parsed.get("rawContent")
    script.raw_content = raw if isinstance(raw, str) else None

    # 模型直接给出的旧版字段
    for column, key in LEGACY_OUTPUT_KEYS.items():
        value = parsed.get(key)
        if value is None:
            continue
        if column in LEGACY_LIST_FIELDS:
            value = as_str_list(value)
        elif column == "faq":
            value = value if isinstance(value, list) else None
        elif not isinstance(value, str):
            value = str(value)
        setattr(script, column, value)
    return script


class ScriptGenerationService:
    """话术流式生成服务。"""

    def __init__(
        self,
        *,
        session_factory: Callable[[], Any],
        llm_runtime: Any,
        knowledge_client: Any,
        settings: Settings | None = None,
    ):
        self.session_factory = session_factory
        self.llm_runtime = llm_runtime
        self.knowledge_client = knowledge_client
        self.settings = settings or get_settings()

    def prepare(self, request: ScriptGenerateRequest) -> GenerationContext:
        """校验请求并组装提示词（同步，含数据库与检索调用）。"""
        if not request.product_id or not request.style_template_id:
            raise AppError(
                code=ERROR_MISSING_FIELD,
                message="缺少产品ID或风格模板ID",
                status_code=400,
            )

        with self.session_factory() as session:
            product = ProductRepository(session).get_by_id(request.product_id)
            if product is None:
                raise not_found("产品不存在")
            template = StyleTemplateRepository(session).get_by_id(
                request.style_template_id
            )
            if template is None:
                raise not_found("风格模板不存在")
            # 会话关闭后实体保持已加载的属性，检索期间不占用连接
            session.expunge_all()

        fragments = self._search_references(
            f"{product.name} {product.category} 直播话术"
        )
        prompt = compose_script_prompt(
            product,
            template,
            fragments,
            GenerationScenario(
                target_audience=request.target_audience,
                duration=request.duration,
                promotion_rules=request.promotion_rules,
                prohibited_words=as_str_list(product.prohibited_words),
            ),
        )
        title = (request.title or "").strip() or f"{product.name} - {template.name}话术"

        return GenerationContext(
            product_id=request.product_id,
            style_template_id=request.style_template_id,
            title=title,
            prompt=prompt,
            target_audience=request.target_audience,
            duration=request.duration,
            promotion_rules=request.promotion_rules,
            referenced_doc_ids=[
                str(f["doc_id"]) for f in fragments if f.get("doc_id")
            ],
        )

    def _search_references(self, query: str) -> list[dict[str, Any]]:
        """检索参考素材；任何失败都降级为无素材。"""
        try:
            result = self.knowledge_client.search(
                query,
                None,
                top_k=self.settings.generation_search_top_k,
                min_score=self.settings.generation_search_min_score,
            )
        except Exception as exc:
            log.warning(
                "script_generation.search_failed",
                extra=log_extra(query=query, error=str(exc)),
            )
            return []

        if not isinstance(result, dict) or result.get("code") != SEARCH_OK:
            log.warning(
                "script_generation.search_failed",
                extra=log_extra(
                    query=query,
                    code=result.get("code") if isinstance(result, dict) else None,
                ),
            )
            return []
        return list(result.get("chunks") or [])

    async def stream(self, context: GenerationContext) -> AsyncIterator[dict[str, Any]]:
        """产出 chunk* 后接恰好一个 done 或 error 事件。"""
        messages = [{"role": "user", "content": context.prompt}]
        parts: list[str] = []
        try:
            upstream = self.llm_runtime.astream(
                messages, temperature=self.settings.generation_temperature
            )
            async with aclosing(upstream) as fragments:
                async for fragment in fragments:
                    if not fragment:
                        continue
                    parts.append(fragment)
                    yield {"type": "chunk", "content": fragment}

            full_text = "".join(parts)
            parsed = extract_json_object(full_text)
            if parsed is None:
                log.warning(
                    "script_generation.unparsable_output",
                    extra=log_extra(length=len(full_text)),
                )
                parsed = {"rawContent": full_text}

            cancelled = threading.Event()
            try:
                script_id = await asyncio.to_thread(
                    self._persist, context, parsed, cancelled
                )
            except asyncio.CancelledError:
                # 工作线程无法中断；尚未写入时放弃落库
                cancelled.set()
                raise
            log.info(
                "script_generation.done",
                extra=log_extra(
                    script_id=script_id,
                    product_id=context.product_id,
                    chunks=len(parts),
                ),
            )
            yield {"type": "done", "scriptId": script_id, "scriptData": parsed}
        except Exception as exc:
            log.exception(
                "script_generation.failed",
                extra=log_extra(product_id=context.product_id),
            )
            message = exc.message if isinstance(exc, AppError) else str(exc)
            yield {"type": "error", "message": message or exc.__class__.__name__}

    def _persist(
        self,
        context: GenerationContext,
        parsed: dict[str, Any],
        cancelled: threading.Event | None = None,
    ) -> str | None:
        """落库失败或已取消时只记录日志，返回 None。"""
        try:
            record = build_script_record(context, parsed)
            with self.session_factory() as session:
                if cancelled is not None and cancelled.is_set():
                    log.info(
                        "script_generation.persist_skipped",
                        extra=log_extra(product_id=context.product_id),
                    )
                    return None
                saved = ScriptRepository(session).create(record)
                return saved.id
        except Exception:
            log.exception(
                "script_generation.persist_failed",
                extra=log_extra(product_id=context.product_id),
            )
            return None
