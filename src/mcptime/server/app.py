"""HTTP transport — FastAPI application exposing the MCP endpoint.

Routes:

  OPTIONS *     — CORS preflight
  GET     /     — static server description (not JSON-RPC)
  GET     /sse  — reserved for a streaming transport (501)
  POST    /     — one JSON-RPC envelope per request

Every request except a preflight passes the :class:`BoundaryGuard`
first; any verb other than GET or POST is then answered with 405 on
every path.  The knowledge store and tool registry are built once, when the
application is created, and shared read-only by all requests.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from mcptime import SERVER_NAME, __version__
from mcptime.knowledge.search import SearchEngine
from mcptime.knowledge.store import KnowledgeStore
from mcptime.protocol.dispatcher import ProtocolDispatcher
from mcptime.protocol.errors import INTERNAL_ERROR, PARSE_ERROR
from mcptime.server.errors import GuardRejection, InvalidOriginError
from mcptime.server.guard import BoundaryGuard
from mcptime.settings.models import ServerSettings
from mcptime.tools.catalog import build_default_registry
from mcptime.tools.executor import ToolExecutor
from mcptime.tools.timeutils import TimeService

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

PROTOCOL_VERSION_HEADER = "MCP-Protocol-Version"
ALLOWED_METHODS = frozenset({"GET", "POST"})
ALLOW_ORIGIN = {"Access-Control-Allow-Origin": "*"}
CORS_HEADERS = {
    **ALLOW_ORIGIN,
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, MCP-Protocol-Version, Mcp-Session-Id, Origin",
}

SERVER_DESCRIPTION: dict[str, Any] = {
    "name": SERVER_NAME,
    "version": __version__,
    "description": "Time utilities and comprehensive time knowledge MCP server",
    "transport": ["http"],
    "capabilities": {"tools": True, "search": True, "fetch": True},
    "instructions": (
        "This server provides access to comprehensive time-related knowledge. Use the search "
        "tool to find information about historical timekeeping, scientific time standards, "
        "calendar systems, time zones, cultural time practices, and modern time "
        "synchronization. For current time operations, use the utility tools."
    ),
}


def rpc_error_body(code: int, message: str) -> dict[str, Any]:
    """JSON-RPC error envelope for faults with no request id to echo."""
    return {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": None}


def build_dispatcher(settings: ServerSettings) -> ProtocolDispatcher:
    """Load the corpus and wire registry, search engine and executor."""
    if settings.knowledge_path is not None:
        store = KnowledgeStore.from_path(settings.knowledge_path)
    else:
        store = KnowledgeStore.load_default()
    executor = ToolExecutor(
        SearchEngine(store),
        TimeService(default_timezone=settings.default_timezone),
    )
    return ProtocolDispatcher(build_default_registry(), executor)


def create_app(
    settings: ServerSettings | None = None,
    *,
    dispatcher: ProtocolDispatcher | None = None,
) -> FastAPI:
    """Build the ASGI application.

    Pass *dispatcher* to serve a pre-wired dispatcher (tests do this);
    otherwise one is built from *settings*.
    """
    settings = settings or ServerSettings()
    dispatcher = dispatcher or build_dispatcher(settings)
    guard = BoundaryGuard(settings.guard)

    app = FastAPI(
        title=SERVER_NAME,
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.dispatcher = dispatcher

    @app.middleware("http")
    async def boundary(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=CORS_HEADERS)

        try:
            guard.check(
                request.headers.get("origin"),
                request.headers.get(PROTOCOL_VERSION_HEADER),
            )
        except GuardRejection as exc:
            # Rejected origins get no CORS grant.
            headers = {} if isinstance(exc, InvalidOriginError) else ALLOW_ORIGIN
            return JSONResponse(
                rpc_error_body(INTERNAL_ERROR, exc.message),
                status_code=exc.status_code,
                headers=headers,
            )

        if request.method not in ALLOWED_METHODS:
            return PlainTextResponse("Method not allowed", status_code=405, headers=ALLOW_ORIGIN)

        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == 405:
            return PlainTextResponse("Method not allowed", status_code=405, headers=ALLOW_ORIGIN)
        return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=ALLOW_ORIGIN)

    @app.get("/")
    async def describe() -> JSONResponse:
        return JSONResponse(SERVER_DESCRIPTION, headers=ALLOW_ORIGIN)

    @app.get("/sse")
    async def sse() -> PlainTextResponse:
        return PlainTextResponse(
            "SSE endpoint not yet implemented", status_code=501, headers=ALLOW_ORIGIN
        )

    @app.post("/")
    async def rpc(request: Request) -> Response:
        try:
            body = await request.body()
            logger.debug("POST / received %d byte(s)", len(body))
            outcome = await dispatcher.dispatch_raw(body)
        except Exception:
            logger.exception("Error handling MCP request")
            return JSONResponse(
                rpc_error_body(INTERNAL_ERROR, "Internal server error"),
                status_code=500,
                headers=ALLOW_ORIGIN,
            )

        if outcome.is_notification:
            return Response(status_code=202, headers=CORS_HEADERS)

        payload = outcome.to_payload()
        error = payload.get("error") if payload else None
        if error is not None and error["code"] == PARSE_ERROR:
            return JSONResponse(payload, status_code=400, headers=ALLOW_ORIGIN)
        return JSONResponse(payload, status_code=200, headers=CORS_HEADERS)

    return app
