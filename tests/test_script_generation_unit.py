from __future__ import annotations

import json
import threading
from unittest.mock import MagicMock

import pytest

from agriscript.application.repositories.product_repository import ProductRepository
from agriscript.application.repositories.script_repository import ScriptRepository
from agriscript.application.repositories.style_template_repository import (
    StyleTemplateRepository,
)
from agriscript.application.schemas.script import ScriptGenerateRequest
from agriscript.application.services.script_generation.sections import project_legacy
from agriscript.application.services.script_generation.service import (
    GenerationContext,
    ScriptGenerationService,
)
from agriscript.domain.entities import Product, StyleTemplate
from agriscript.shared.errors import AppError
from conftest import FakeLLMRuntime, FakeVectorStorage


SCRIPT_OUTPUT = {
    "warmUp": {"title": "预热环节", "target": "提升停留时长", "script": "家人们早上好", "keyPoints": ["福利预告"]},
    "retention": {"script": "扣1抽奖", "interactionTips": ["扣1"]},
    "lockCustomer": {"script": "洛川苹果脆甜多汁", "valuePoints": ["产地直发"]},
    "pushOrder": {"script": "最后30单", "urgencyTechniques": ["限量"]},
    "atmosphere": {"script": "冲冲冲", "phrases": ["好评如潮"]},
    "complianceNotes": ["避免绝对化用语"],
    "estimatedDuration": "20分钟",
    "algorithmTips": ["前3分钟拉停留"],
}


def _split(text: str, parts: int = 3) -> list[str]:
    size = len(text) // parts + 1
    return [text[i : i + size] for i in range(0, len(text), size)]


async def _collect(stream) -> list[dict]:
    return [evt async for evt in stream]


@pytest.fixture()
def seeded(session_factory):
    with session_factory() as session:
        product = ProductRepository(session).create(
            Product(
                id="p-apple",
                name="红富士苹果",
                category="水果",
                selling_points=["脆甜"],
                certificates=[],
                prohibited_words=["最甜"],
                images=[],
                is_active=True,
            )
        )
        template = StyleTemplateRepository(session).create(
            StyleTemplate(id="t-warm", name="热情型", style_type="热情型", is_active=True)
        )
        return product.id, template.id


def _service(session_factory, llm, knowledge) -> ScriptGenerationService:
    return ScriptGenerationService(
        session_factory=session_factory, llm_runtime=llm, knowledge_client=knowledge
    )


@pytest.mark.anyio
async def test_stream_emits_chunks_then_done_and_persists(session_factory, seeded):
    product_id, template_id = seeded
    full = json.dumps(SCRIPT_OUTPUT, ensure_ascii=False)
    llm = FakeLLMRuntime(fragments=_split(full))
    knowledge = FakeVectorStorage()
    service = _service(session_factory, llm, knowledge)

    context = service.prepare(
        ScriptGenerateRequest(productId=product_id, styleTemplateId=template_id, duration=20)
    )
    events = await _collect(service.stream(context))

    assert [e["type"] for e in events[:-1]] == ["chunk"] * (len(events) - 1)
    assert "".join(e["content"] for e in events[:-1]) == full
    done = events[-1]
    assert done["type"] == "done"
    assert done["scriptData"] == SCRIPT_OUTPUT
    assert done["scriptId"]

    assert knowledge.searches[0]["query"] == "红富士苹果 水果 直播话术"
    assert "直播时长：20分钟" in llm.calls[0][0]["content"]

    with session_factory() as session:
        script = ScriptRepository(session).get_by_id(done["scriptId"])
        assert script.title == "红富士苹果 - 热情型话术"
        assert script.status == "draft"
        assert script.warm_up["script"] == "家人们早上好"
        assert script.algorithm_tips == "前3分钟拉停留"
        legacy = project_legacy(script)
        assert legacy["opening"] == "家人们早上好"
        assert legacy["product_intro"] == "洛川苹果脆甜多汁"
        assert legacy["selling_points"] == "扣1抽奖"
        assert legacy["promotions"] == "冲冲冲"
        assert legacy["closing"] == "最后30单"


def test_prepare_missing_ids_makes_no_calls():
    session_factory = MagicMock()
    llm = MagicMock()
    knowledge = MagicMock()
    service = ScriptGenerationService(
        session_factory=session_factory,
        llm_runtime=llm,
        knowledge_client=knowledge,
        settings=MagicMock(),
    )

    with pytest.raises(AppError) as exc_info:
        service.prepare(ScriptGenerateRequest(styleTemplateId="t-1"))

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "缺少产品ID或风格模板ID"
    session_factory.assert_not_called()
    knowledge.search.assert_not_called()
    llm.astream.assert_not_called()


def test_prepare_unknown_product_is_404(session_factory, seeded):
    _, template_id = seeded
    knowledge = FakeVectorStorage()
    service = _service(session_factory, FakeLLMRuntime(), knowledge)

    with pytest.raises(AppError) as exc_info:
        service.prepare(ScriptGenerateRequest(productId="missing", styleTemplateId=template_id))

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "产品不存在"
    assert knowledge.searches == []


def test_prepare_search_failure_falls_back_to_marker(session_factory, seeded):
    product_id, template_id = seeded
    service = _service(session_factory, FakeLLMRuntime(), FakeVectorStorage(code=1))

    context = service.prepare(
        ScriptGenerateRequest(productId=product_id, styleTemplateId=template_id)
    )

    assert "暂无参考素材" in context.prompt
    assert context.referenced_doc_ids == []


def test_prepare_search_exception_falls_back_to_marker(session_factory, seeded):
    product_id, template_id = seeded
    knowledge = MagicMock()
    knowledge.search.side_effect = RuntimeError("chroma down")
    service = _service(session_factory, FakeLLMRuntime(), knowledge)

    context = service.prepare(
        ScriptGenerateRequest(productId=product_id, styleTemplateId=template_id)
    )
    assert "暂无参考素材" in context.prompt


def test_prepare_includes_reference_fragments(session_factory, seeded):
    product_id, template_id = seeded
    knowledge = FakeVectorStorage(
        chunks=[{"content": "去年爆款话术", "score": 0.9, "doc_id": "vec-9"}]
    )
    service = _service(session_factory, FakeLLMRuntime(), knowledge)

    context = service.prepare(
        ScriptGenerateRequest(productId=product_id, styleTemplateId=template_id, title=" 专场 ")
    )

    assert "[素材1]\n去年爆款话术" in context.prompt
    assert context.referenced_doc_ids == ["vec-9"]
    assert context.title == "专场"


@pytest.mark.anyio
async def test_unparsable_output_is_kept_as_raw_content(session_factory, seeded):
    product_id, template_id = seeded
    service = _service(
        session_factory, FakeLLMRuntime(fragments=["抱歉，", "暂时无法生成"]), FakeVectorStorage()
    )
    context = service.prepare(
        ScriptGenerateRequest(productId=product_id, styleTemplateId=template_id)
    )

    events = await _collect(service.stream(context))
    done = events[-1]
    assert done["type"] == "done"
    assert done["scriptData"] == {"rawContent": "抱歉，暂时无法生成"}

    with session_factory() as session:
        script = ScriptRepository(session).get_by_id(done["scriptId"])
        assert script.raw_content == "抱歉，暂时无法生成"
        assert script.warm_up is None


@pytest.mark.anyio
async def test_persist_failure_still_emits_done_without_id(runtime_env):
    failing_factory = MagicMock(side_effect=RuntimeError("db down"))
    service = _service(failing_factory, FakeLLMRuntime(fragments=['{"a": 1}']), FakeVectorStorage())
    context = GenerationContext(
        product_id="p-1", style_template_id="t-1", title="标题", prompt="prompt"
    )

    events = await _collect(service.stream(context))

    assert events[-1] == {"type": "done", "scriptId": None, "scriptData": {"a": 1}}


@pytest.mark.anyio
async def test_upstream_error_emits_single_error_event(session_factory, seeded):
    product_id, template_id = seeded
    llm = FakeLLMRuntime(fragments=["a", "b", "c"], fail_after=2)
    service = _service(session_factory, llm, FakeVectorStorage())
    context = service.prepare(
        ScriptGenerateRequest(productId=product_id, styleTemplateId=template_id)
    )

    events = await _collect(service.stream(context))

    assert events == [
        {"type": "chunk", "content": "a"},
        {"type": "chunk", "content": "b"},
        {"type": "error", "message": "upstream closed"},
    ]
    with session_factory() as session:
        assert ScriptRepository(session).count() == 0


class _TrackedUpstream:
    def __init__(self, fragments: list[str]):
        self.fragments = fragments
        self.closed = False

    async def astream(self, messages, *, temperature: float):
        try:
            for fragment in self.fragments:
                yield fragment
        finally:
            self.closed = True


@pytest.mark.anyio
async def test_closing_stream_closes_upstream_and_skips_persist(session_factory):
    upstream = _TrackedUpstream(['{"warmUp": ', '{"script": "早上好"}}'])
    service = _service(session_factory, upstream, FakeVectorStorage())
    context = GenerationContext(
        product_id="p-1", style_template_id="t-1", title="标题", prompt="prompt"
    )

    stream = service.stream(context)
    first = await stream.__anext__()
    await stream.aclose()

    assert first == {"type": "chunk", "content": '{"warmUp": '}
    assert upstream.closed is True
    with session_factory() as session:
        assert ScriptRepository(session).count() == 0


def test_persist_after_cancellation_writes_nothing(session_factory):
    service = _service(session_factory, FakeLLMRuntime(), FakeVectorStorage())
    context = GenerationContext(
        product_id="p-1", style_template_id="t-1", title="标题", prompt="prompt"
    )
    cancelled = threading.Event()
    cancelled.set()

    assert service._persist(context, {"a": 1}, cancelled) is None
    with session_factory() as session:
        assert ScriptRepository(session).count() == 0
