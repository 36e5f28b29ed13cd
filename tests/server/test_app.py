"""End-to-end tests for the HTTP transport (ASGI, no network)."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from typing import Any
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi import FastAPI

from mcptime.protocol.dispatcher import ProtocolDispatcher
from mcptime.server.app import SERVER_DESCRIPTION, create_app
from mcptime.settings.models import ServerSettings


@pytest.fixture
def app(dispatcher: ProtocolDispatcher) -> FastAPI:
    return create_app(ServerSettings(), dispatcher=dispatcher)


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


def _rpc(method: str, params: dict[str, Any] | None = None, request_id: Any = 1) -> dict[str, Any]:
    body: dict[str, Any] = {"jsonrpc": "2.0", "method": method}
    if request_id is not None:
        body["id"] = request_id
    if params is not None:
        body["params"] = params
    return body


class TestRpcEndpoint:
    async def test_initialize(self, client: httpx.AsyncClient) -> None:
        resp = await client.post("/", json=_rpc("initialize", {"protocolVersion": "2025-06-18"}))
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        result = resp.json()["result"]
        assert result["protocolVersion"] == "2025-06-18"
        assert result["serverInfo"]["name"] == "mcp-server-http-time"

    async def test_tools_list(self, client: httpx.AsyncClient) -> None:
        resp = await client.post("/", json=_rpc("tools/list", request_id=2))
        assert resp.status_code == 200
        assert len(resp.json()["result"]["tools"]) == 8

    async def test_fetch_missing_is_successful_rpc(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/", json=_rpc("tools/call", {"name": "fetch", "arguments": {"id": "nonexistent"}})
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["id"] == 1
        assert body["result"]["isError"] is True
        assert body["result"]["content"][0]["text"] == "Record not found: nonexistent"

    async def test_search(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/", json=_rpc("tools/call", {"name": "search", "arguments": {"query": "sundial"}})
        )
        results = json.loads(resp.json()["result"]["content"][0]["text"])["results"]
        assert [r["id"] for r in results] == ["sundial"]

    async def test_unknown_method(self, client: httpx.AsyncClient) -> None:
        resp = await client.post("/", json=_rpc("bogus", request_id=5))
        assert resp.status_code == 200
        assert resp.json() == {
            "jsonrpc": "2.0",
            "id": 5,
            "error": {"code": -32601, "message": "Method not found: bogus"},
        }

    async def test_initialized_notification(self, client: httpx.AsyncClient) -> None:
        resp = await client.post("/", json=_rpc("initialized", request_id=None))
        assert resp.status_code == 202
        assert resp.content == b""

    async def test_parse_error(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/", content=b"{not json", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 400
        body = resp.json()
        assert body["id"] is None
        assert body["error"]["code"] == -32700

    async def test_invalid_request(self, client: httpx.AsyncClient) -> None:
        resp = await client.post("/", json=[_rpc("tools/list")])
        assert resp.status_code == 200
        assert resp.json()["error"]["code"] == -32600

    async def test_transport_fault_is_500(
        self, client: httpx.AsyncClient, dispatcher: ProtocolDispatcher
    ) -> None:
        with patch.object(dispatcher, "dispatch_raw", AsyncMock(side_effect=RuntimeError("boom"))):
            resp = await client.post("/", json=_rpc("tools/list"))
        assert resp.status_code == 500
        assert resp.json() == {
            "jsonrpc": "2.0",
            "error": {"code": -32603, "message": "Internal server error"},
            "id": None,
        }


class TestBoundary:
    async def test_allowed_origin(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/", json=_rpc("tools/list"), headers={"Origin": "https://mcpcentral.io"}
        )
        assert resp.status_code == 200

    async def test_localhost_any_port(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/", json=_rpc("tools/list"), headers={"Origin": "http://localhost:3000"}
        )
        assert resp.status_code == 200

    async def test_invalid_origin(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/", json=_rpc("tools/list"), headers={"Origin": "https://evil.example"}
        )
        assert resp.status_code == 403
        assert resp.json() == {
            "jsonrpc": "2.0",
            "error": {"code": -32603, "message": "Invalid origin"},
            "id": None,
        }
        assert "access-control-allow-origin" not in resp.headers

    async def test_invalid_origin_on_get(self, client: httpx.AsyncClient) -> None:
        resp = await client.get("/", headers={"Origin": "https://evil.example"})
        assert resp.status_code == 403

    async def test_unsupported_protocol_header(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/", json=_rpc("tools/list"), headers={"MCP-Protocol-Version": "1999-01-01"}
        )
        assert resp.status_code == 400
        assert resp.json()["error"] == {
            "code": -32603,
            "message": "Unsupported protocol version: 1999-01-01",
        }

    async def test_supported_protocol_header(self, client: httpx.AsyncClient) -> None:
        resp = await client.post(
            "/", json=_rpc("tools/list"), headers={"MCP-Protocol-Version": "2025-03-26"}
        )
        assert resp.status_code == 200

    async def test_preflight(self, client: httpx.AsyncClient) -> None:
        resp = await client.options("/", headers={"Origin": "https://evil.example"})
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "POST" in resp.headers["access-control-allow-methods"]
        assert "MCP-Protocol-Version" in resp.headers["access-control-allow-headers"]


class TestOtherRoutes:
    async def test_description(self, client: httpx.AsyncClient) -> None:
        resp = await client.get("/")
        assert resp.status_code == 200
        assert resp.json() == SERVER_DESCRIPTION
        assert resp.json()["transport"] == ["http"]

    async def test_sse_not_implemented(self, client: httpx.AsyncClient) -> None:
        resp = await client.get("/sse")
        assert resp.status_code == 501
        assert resp.text == "SSE endpoint not yet implemented"

    async def test_method_not_allowed(self, client: httpx.AsyncClient) -> None:
        resp = await client.put("/", json={})
        assert resp.status_code == 405
        assert resp.text == "Method not allowed"

    @pytest.mark.parametrize(
        ("method", "path"),
        [("PUT", "/mcp"), ("DELETE", "/"), ("PATCH", "/sse"), ("HEAD", "/")],
    )
    async def test_method_not_allowed_on_any_path(
        self, client: httpx.AsyncClient, method: str, path: str
    ) -> None:
        resp = await client.request(method, path)
        assert resp.status_code == 405
        assert resp.headers["access-control-allow-origin"] == "*"
        if method != "HEAD":
            assert resp.text == "Method not allowed"

    async def test_bad_origin_wins_over_bad_method(self, client: httpx.AsyncClient) -> None:
        resp = await client.request("PUT", "/mcp", headers={"Origin": "https://evil.example"})
        assert resp.status_code == 403


class TestCreateApp:
    async def test_builds_from_settings(self) -> None:
        app = create_app(ServerSettings())
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
            resp = await c.post(
                "/", json=_rpc("tools/call", {"name": "fetch", "arguments": {"id": "atomic-clock"}})
            )
        record = json.loads(resp.json()["result"]["content"][0]["text"])
        assert record["title"] == "The First Atomic Clock"

    def test_state(self, app: FastAPI, dispatcher: ProtocolDispatcher) -> None:
        assert app.state.dispatcher is dispatcher
        assert isinstance(app.state.settings, ServerSettings)
