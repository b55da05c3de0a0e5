from __future__ import annotations

import httpx
import pytest


APPLE = {
    "name": "红富士苹果",
    "category": "水果",
    "origin": "陕西洛川",
    "price": 39.9,
    "specification": "5斤装",
    "sellingPoints": ["脆甜多汁", "产地直发"],
    "prohibitedWords": "最甜，第一",
}


@pytest.mark.anyio
async def test_product_crud(api_client: httpx.AsyncClient):
    resp = await api_client.post("/v1/products", json=APPLE)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    product = body["data"]
    assert product["prohibitedWords"] == ["最甜", "第一"]
    assert product["isActive"] is True
    product_id = product["id"]

    resp = await api_client.patch(f"/v1/products/{product_id}", json={"price": 35, "isActive": False})
    assert resp.status_code == 200
    assert resp.json()["data"]["price"] == 35
    assert resp.json()["data"]["name"] == "红富士苹果"

    resp = await api_client.get("/v1/products", params={"isActive": "false"})
    listing = resp.json()
    assert listing["total"] == 1
    assert listing["page"] == 1
    assert listing["pageSize"] == 20
    assert listing["data"][0]["id"] == product_id

    resp = await api_client.get("/v1/products", params={"category": "粮油"})
    assert resp.json()["total"] == 0

    resp = await api_client.delete(f"/v1/products/{product_id}")
    assert resp.json() == {"success": True, "id": product_id, "message": "产品已删除"}

    resp = await api_client.get(f"/v1/products/{product_id}")
    assert resp.status_code == 404


@pytest.mark.anyio
async def test_init_builtin_templates_is_idempotent(api_client: httpx.AsyncClient):
    resp = await api_client.post("/v1/style-templates/init")
    assert resp.status_code == 200
    first = resp.json()
    assert first["success"] is True
    assert first["insertedCount"] == 6
    assert len(first["data"]) == 6

    resp = await api_client.post("/v1/style-templates/init")
    second = resp.json()
    assert second["insertedCount"] == 0
    assert second["message"] == "所有模板已存在，无需重复初始化"

    resp = await api_client.get("/v1/style-templates", params={"pageSize": 50})
    assert resp.json()["total"] == 6


@pytest.mark.anyio
async def test_style_template_crud(api_client: httpx.AsyncClient):
    resp = await api_client.post(
        "/v1/style-templates",
        json={
            "name": "温情型",
            "styleType": "温情型",
            "openingRules": {"greeting": "亲切问候"},
            "exampleScripts": [{"scene": "开场", "script": "欢迎回家"}],
        },
    )
    assert resp.status_code == 201
    template = resp.json()["data"]
    assert template["openingRules"]["greeting"] == "亲切问候"

    resp = await api_client.patch(
        f"/v1/style-templates/{template['id']}", json={"toneGuidelines": "语速放慢"}
    )
    assert resp.json()["data"]["toneGuidelines"] == "语速放慢"

    resp = await api_client.delete(f"/v1/style-templates/{template['id']}")
    assert resp.json()["success"] is True

    resp = await api_client.get(f"/v1/style-templates/{template['id']}")
    assert resp.status_code == 404
