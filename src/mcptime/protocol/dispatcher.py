"""ProtocolDispatcher — routes JSON-RPC envelopes to MCP method handlers.

Every envelope resolves to a :class:`DispatchResult`: a JSON-RPC result,
a JSON-RPC error, or the notification marker.  Nothing raises past
:meth:`ProtocolDispatcher.dispatch`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from mcptime import SERVER_NAME, __version__
from mcptime.protocol.errors import (
    InternalError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
)
from mcptime.protocol.models import (
    DispatchResult,
    InitializeResult,
    JsonRpcRequest,
    ServerInfo,
)
from mcptime.protocol.versions import FALLBACK_PROTOCOL_VERSION, negotiate_protocol_version
from mcptime.utils.telemetry import ATTR_RPC_METHOD, ATTR_RPC_OUTCOME, get_tracer

if TYPE_CHECKING:
    from mcptime.tools.executor import ToolExecutor
    from mcptime.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

INSTRUCTIONS = (
    "This MCP server provides time-related tools including current time, timezone "
    "conversion, relative time calculation, and more."
)


class Method(str, Enum):
    """Closed set of JSON-RPC methods this server answers."""

    INITIALIZE = "initialize"
    INITIALIZED = "initialized"
    NOTIFICATIONS_INITIALIZED = "notifications/initialized"
    TOOLS_LIST = "tools/list"
    TOOLS_CALL = "tools/call"


MethodHandler = Callable[[JsonRpcRequest], Awaitable[DispatchResult]]


class ProtocolDispatcher:
    """Stateless per-request MCP method router.

    Usage::

        dispatcher = ProtocolDispatcher(registry, executor)
        outcome = await dispatcher.dispatch_raw(body_bytes)
        payload = outcome.to_payload()   # None for notifications
    """

    def __init__(
        self,
        registry: ToolRegistry,
        executor: ToolExecutor,
        *,
        server_info: ServerInfo | None = None,
        instructions: str = INSTRUCTIONS,
    ) -> None:
        self._registry = registry
        self._executor = executor
        self._server_info = server_info or ServerInfo(name=SERVER_NAME, version=__version__)
        self._instructions = instructions
        self._handlers: dict[Method, MethodHandler] = {
            Method.INITIALIZE: self._initialize,
            Method.INITIALIZED: self._initialized,
            Method.NOTIFICATIONS_INITIALIZED: self._initialized,
            Method.TOOLS_LIST: self._tools_list,
            Method.TOOLS_CALL: self._tools_call,
        }

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    @property
    def executor(self) -> ToolExecutor:
        return self._executor

    @property
    def server_info(self) -> ServerInfo:
        return self._server_info

    async def dispatch_raw(self, body: bytes | str) -> DispatchResult:
        """Decode a request body, then :meth:`dispatch` it."""
        try:
            data: Any = json.loads(body)
        except ValueError as exc:
            logger.warning("Rejecting unparseable request body: %s", exc)
            return DispatchResult.error(None, ParseError(str(exc)))
        return await self.dispatch(data)

    async def dispatch(self, data: Any) -> DispatchResult:
        """Route one decoded envelope to its method handler."""
        try:
            request = self._parse_envelope(data)
        except InvalidRequestError as exc:
            return DispatchResult.error(_raw_id(data), exc)

        with _tracer.start_as_current_span("mcptime.rpc") as span:
            span.set_attribute(ATTR_RPC_METHOD, request.method)
            outcome = await self._route(request)
            span.set_attribute(ATTR_RPC_OUTCOME, outcome.outcome.value)
        return outcome

    async def _route(self, request: JsonRpcRequest) -> DispatchResult:
        try:
            method = Method(request.method)
        except ValueError:
            logger.debug("Unknown method %r", request.method)
            return DispatchResult.error(request.id, MethodNotFoundError(request.method))

        try:
            return await self._handlers[method](request)
        except ProtocolError as exc:
            return DispatchResult.error(request.id, exc)
        except Exception as exc:
            logger.exception("Unhandled fault while serving %s", method.value)
            return DispatchResult.error(request.id, InternalError(f"Internal error: {exc}"))

    @staticmethod
    def _parse_envelope(data: Any) -> JsonRpcRequest:
        if not isinstance(data, dict):
            raise InvalidRequestError("expected a single JSON-RPC request object")
        try:
            return JsonRpcRequest.model_validate(data)
        except ValidationError as exc:
            raise InvalidRequestError(_first_error(exc)) from exc

    # ------------------------------------------------------------------
    # Method handlers
    # ------------------------------------------------------------------

    async def _initialize(self, request: JsonRpcRequest) -> DispatchResult:
        params = request.params or {}
        requested = params.get("protocolVersion")
        if requested is None or isinstance(requested, str):
            version = negotiate_protocol_version(requested)
        else:
            version = FALLBACK_PROTOCOL_VERSION

        if requested and version != requested:
            logger.info("Client asked for protocol %r; answering with %s", requested, version)

        result = InitializeResult(
            protocol_version=version,
            capabilities={"tools": {}},
            server_info=self._server_info,
            instructions=self._instructions,
        )
        return DispatchResult.result(request.id, result.to_payload())

    async def _initialized(self, request: JsonRpcRequest) -> DispatchResult:
        logger.debug("Client signalled %s", request.method)
        return DispatchResult.notification()

    async def _tools_list(self, request: JsonRpcRequest) -> DispatchResult:
        tools = [descriptor.to_payload() for descriptor in self._registry.list()]
        return DispatchResult.result(request.id, {"tools": tools})

    async def _tools_call(self, request: JsonRpcRequest) -> DispatchResult:
        try:
            name, arguments = _call_params(request.params)
            result = await self._executor.execute(name, arguments)
        except Exception as exc:
            logger.warning("tools/call failed outside the tool: %s", exc)
            raise InternalError(f"Tool execution error: {exc}") from exc
        return DispatchResult.result(request.id, result.to_payload())


def _call_params(params: dict[str, Any] | None) -> tuple[str, dict[str, Any]]:
    if params is None:
        msg = "tools/call requires params"
        raise ValueError(msg)
    name = params.get("name")
    if not isinstance(name, str):
        msg = "tools/call requires a tool name"
        raise ValueError(msg)
    arguments = params.get("arguments")
    if arguments is None:
        return name, {}
    if not isinstance(arguments, dict):
        msg = "tool arguments must be an object"
        raise ValueError(msg)
    return name, arguments


def _raw_id(data: Any) -> int | float | str | None:
    if isinstance(data, dict):
        raw = data.get("id")
        if isinstance(raw, (int, float, str)) and not isinstance(raw, bool):
            return raw
    return None


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error["loc"]) or "request"
    return f"{location}: {error['msg']}"
