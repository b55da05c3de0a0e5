from __future__ import annotations

import httpx
import pytest

from agriscript.application.repositories.knowledge_repository import (
    KnowledgeCollectionRepository,
    KnowledgeDocumentRepository,
)
from agriscript.application.repositories.video_material_repository import (
    VideoMaterialRepository,
)
from agriscript.application.schemas.knowledge import CollectionCreate, DocumentImportRequest
from agriscript.application.services.knowledge_base_service import (
    KnowledgeBaseService,
    html_to_text,
)
from agriscript.shared.errors import AppError
from conftest import FakeVectorStorage


def _service(session, vector, page_fetcher) -> KnowledgeBaseService:
    return KnowledgeBaseService(
        KnowledgeCollectionRepository(session),
        KnowledgeDocumentRepository(session),
        VideoMaterialRepository(session),
        vector,
        page_fetcher=page_fetcher,
    )


def test_html_to_text_strips_markup():
    html = "<html><style>p{}</style><h1>洛川苹果</h1><p>脆甜&amp;多汁</p><script>x()</script></html>"
    assert html_to_text(html) == "洛川苹果\n脆甜&多汁"


def test_import_from_url_fetches_page(session_factory):
    fetched = []

    def fetcher(url: str) -> str:
        fetched.append(url)
        return "网页正文"

    vector = FakeVectorStorage()
    with session_factory() as session:
        service = _service(session, vector, fetcher)
        collection = service.create_collection(CollectionCreate(name="网页"))
        document = service.import_document(
            DocumentImportRequest(
                collectionId=collection.id,
                sourceType="url",
                sourceUrl="https://example.com/a",
            )
        )
        assert document.content == "网页正文"
        assert document.title == "未命名文档"

    assert fetched == ["https://example.com/a"]
    assert vector.added[0]["text"] == "网页正文"


def test_import_url_fetch_failure_is_upstream_error(session_factory):
    def fetcher(url: str) -> str:
        raise httpx.ConnectError("refused")

    with session_factory() as session:
        service = _service(session, FakeVectorStorage(), fetcher)
        collection = service.create_collection(CollectionCreate(name="网页"))
        with pytest.raises(AppError) as exc_info:
            service.import_document(
                DocumentImportRequest(
                    collectionId=collection.id, sourceType="url", sourceUrl="https://x"
                )
            )
    assert exc_info.value.status_code == 502


def test_import_empty_text_is_rejected(session_factory):
    vector = FakeVectorStorage()
    with session_factory() as session:
        service = _service(session, vector, lambda url: "")
        collection = service.create_collection(CollectionCreate(name="空"))
        with pytest.raises(AppError) as exc_info:
            service.import_document(
                DocumentImportRequest(collectionId=collection.id, content="   ")
            )
    assert exc_info.value.status_code == 400
    assert vector.added == []
