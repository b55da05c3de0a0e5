from __future__ import annotations

import json

import httpx
import pytest


@pytest.mark.anyio
async def test_video_search_returns_mock_results(api_client: httpx.AsyncClient):
    resp = await api_client.get("/v1/materials/search", params={"keyword": "苹果", "page": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["total"] == 50
    assert body["pageSize"] == 10
    assert body["keyword"] == "苹果"
    assert body["dataSource"] == "mock"
    assert len(body["videos"]) == 10
    assert body["videos"][0]["isRealData"] is False

    resp = await api_client.get("/v1/materials/search")
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "关键词不能为空"


@pytest.mark.anyio
async def test_material_lifecycle_and_analysis(api_client: httpx.AsyncClient, fakes):
    resp = await api_client.post(
        "/v1/materials",
        json={"title": "脐橙带货", "sourceUrl": "https://cdn.example.com/v.mp4", "likes": 10},
    )
    assert resp.status_code == 201
    material = resp.json()["data"]
    assert material["processStatus"] == "pending"

    fakes["asr"].text = "家人们这个脐橙"
    fakes["llm"].reply = json.dumps({"structure": "三段式"}, ensure_ascii=False)
    resp = await api_client.post("/v1/materials/analyze", json={"materialId": material["id"]})
    assert resp.status_code == 200
    result = resp.json()["data"]
    assert result["materialId"] == material["id"]
    assert result["transcription"] == "家人们这个脐橙"
    assert result["analysis"] == {"structure": "三段式"}

    resp = await api_client.get("/v1/materials", params={"status": "completed"})
    assert resp.json()["total"] == 1

    resp = await api_client.post("/v1/materials/analyze", json={})
    assert resp.status_code == 400

    resp = await api_client.delete(f"/v1/materials/{material['id']}")
    assert resp.json()["success"] is True
    resp = await api_client.delete(f"/v1/materials/{material['id']}")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_knowledge_import_list_search_delete(api_client: httpx.AsyncClient, fakes):
    resp = await api_client.post("/v1/knowledge/collections", json={"name": "爆款话术"})
    assert resp.status_code == 201
    collection_id = resp.json()["data"]["id"]

    resp = await api_client.post(
        "/v1/knowledge/documents",
        json={
            "collectionId": collection_id,
            "sourceType": "text",
            "title": "苹果开场",
            "content": "家人们，洛川苹果来了",
            "tags": ["开场"],
            "metadata": {"author": "运营"},
        },
    )
    assert resp.status_code == 201
    document = resp.json()["data"]
    assert document["vectorDocId"] == "vec-1"
    assert document["metadata"] == {"author": "运营"}
    assert fakes["vector"].added[0]["collection_id"] == collection_id

    resp = await api_client.get("/v1/knowledge/collections")
    assert resp.json()["data"][0]["documentCount"] == 1

    resp = await api_client.get("/v1/knowledge/documents", params={"collectionId": collection_id})
    assert resp.json()["total"] == 1

    fakes["vector"].chunks = [{"content": "家人们，洛川苹果来了", "score": 0.91, "doc_id": "vec-1"}]
    resp = await api_client.post(
        "/v1/knowledge/search", json={"query": "苹果开场", "collectionIds": [collection_id]}
    )
    hits = resp.json()["data"]
    assert hits[0]["title"] == "苹果开场"
    assert hits[0]["collectionId"] == collection_id
    assert fakes["vector"].searches[-1]["scope_ids"] == [collection_id]

    resp = await api_client.delete(f"/v1/knowledge/documents/{document['id']}")
    assert resp.json()["success"] is True
    assert fakes["vector"].deleted == ["vec-1"]

    resp = await api_client.post("/v1/knowledge/search", json={"query": "苹果开场"})
    assert resp.json()["data"] == []

    resp = await api_client.get("/v1/knowledge/collections")
    assert resp.json()["data"][0]["documentCount"] == 0


@pytest.mark.anyio
async def test_knowledge_import_from_material_transcription(api_client: httpx.AsyncClient, fakes):
    resp = await api_client.post("/v1/knowledge/collections", json={"name": "素材库"})
    collection_id = resp.json()["data"]["id"]
    resp = await api_client.post(
        "/v1/materials", json={"title": "大米直播", "sourceUrl": "https://cdn.example.com/r.mp4"}
    )
    material_id = resp.json()["data"]["id"]
    fakes["asr"].text = "五常大米香软"
    fakes["llm"].reply = "{}"
    await api_client.post("/v1/materials/analyze", json={"materialId": material_id})

    resp = await api_client.post(
        "/v1/knowledge/documents",
        json={"collectionId": collection_id, "sourceType": "video_material", "sourceId": material_id},
    )
    assert resp.status_code == 201
    document = resp.json()["data"]
    assert document["title"] == "大米直播"
    assert document["content"] == "五常大米香软"

    resp = await api_client.get("/v1/materials")
    material = resp.json()["data"][0]
    assert material["importedToKnowledge"] is True
    assert material["knowledgeDocIds"] == [document["id"]]


@pytest.mark.anyio
async def test_knowledge_errors(api_client: httpx.AsyncClient, fakes):
    resp = await api_client.post(
        "/v1/knowledge/documents", json={"collectionId": "missing", "content": "x"}
    )
    assert resp.status_code == 404

    resp = await api_client.get("/v1/knowledge/documents")
    assert resp.status_code == 400

    resp = await api_client.post("/v1/knowledge/search", json={"query": "  "})
    assert resp.status_code == 400

    fakes["vector"].code = 1
    resp = await api_client.post("/v1/knowledge/search", json={"query": "苹果"})
    assert resp.status_code == 502
