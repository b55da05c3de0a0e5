from __future__ import annotations

import httpx
import pytest


@pytest.mark.anyio
async def test_health(api_client: httpx.AsyncClient):
    resp = await api_client.get("/v1/health")
    assert resp.status_code == 200
    data = resp.json()

    assert data["status"] == "ok"
    assert data["version"] == "0.1.0"
    assert data["components"] == {"db": True}
    assert data["info"]["db"]["type"] == "SQLite"
    assert "path" in data["info"]["db"]


@pytest.mark.anyio
async def test_validation_error_format(api_client: httpx.AsyncClient):
    resp = await api_client.post("/v1/products", json={})
    assert resp.status_code == 422

    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == "validation_error"
    assert body["error"]["request_id"]
    assert body["error"]["details"]["errors"]
    assert resp.headers.get("X-Request-ID")


@pytest.mark.anyio
async def test_request_id_is_echoed(api_client: httpx.AsyncClient):
    resp = await api_client.get("/v1/products/missing", headers={"X-Request-ID": "rid-123"})
    assert resp.status_code == 404
    assert resp.headers["X-Request-ID"] == "rid-123"
    assert resp.json()["error"] == {
        "code": "not_found",
        "message": "产品不存在",
        "request_id": "rid-123",
    }


@pytest.mark.anyio
async def test_unknown_route_uses_error_envelope(api_client: httpx.AsyncClient):
    resp = await api_client.get("/v1/nothing-here")
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "http_404"


@pytest.mark.anyio
async def test_unsafe_request_id_is_replaced(api_client: httpx.AsyncClient):
    resp = await api_client.get("/v1/health", headers={"X-Request-ID": "not a trace id <script>"})
    rid = resp.headers["X-Request-ID"]
    assert rid != "not a trace id <script>"
    assert len(rid) == 32
