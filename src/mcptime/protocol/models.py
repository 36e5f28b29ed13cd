"""MCP models — JSON-RPC 2.0 messages, tool descriptors, and tool results.

Implements the message format used by the Model Context Protocol for
negotiation (``initialize``), tool discovery (``tools/list``) and
execution (``tools/call``).
"""

from __future__ import annotations

import json
from enum import Enum
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from mcptime.protocol.errors import ProtocolError

# int before float so integral ids are echoed unchanged.
RequestId = int | float | str | None

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request or notification message."""

    jsonrpc: str = "2.0"
    method: str
    id: RequestId = None
    params: dict[str, Any] | None = None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = "2.0"
    id: RequestId = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    def to_payload(self) -> dict[str, Any]:
        """Wire shape: exactly one of ``result`` / ``error``, ``id`` always present."""
        payload: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            payload["error"] = self.error.model_dump(exclude_none=True)
        else:
            payload["result"] = self.result if self.result is not None else {}
        return payload


# ---------------------------------------------------------------------------
# Dispatch outcome — result | protocol error | notification
# ---------------------------------------------------------------------------


class Outcome(str, Enum):
    """How a dispatched envelope resolved."""

    RESULT = "result"
    ERROR = "error"
    NOTIFICATION = "notification"


class DispatchResult(BaseModel):
    """What the dispatcher hands back to the transport.

    ``RESULT`` and ``ERROR`` carry a :class:`JsonRpcResponse`;
    ``NOTIFICATION`` carries nothing and is acknowledged without a body.
    """

    outcome: Outcome
    response: JsonRpcResponse | None = None

    @classmethod
    def result(cls, request_id: RequestId, result: dict[str, Any]) -> DispatchResult:
        return cls(outcome=Outcome.RESULT, response=JsonRpcResponse(id=request_id, result=result))

    @classmethod
    def error(cls, request_id: RequestId, exc: ProtocolError) -> DispatchResult:
        return cls(
            outcome=Outcome.ERROR,
            response=JsonRpcResponse(
                id=request_id,
                error=JsonRpcError(code=exc.code, message=exc.message),
            ),
        )

    @classmethod
    def notification(cls) -> DispatchResult:
        return cls(outcome=Outcome.NOTIFICATION)

    @property
    def is_notification(self) -> bool:
        return self.outcome is Outcome.NOTIFICATION

    def to_payload(self) -> dict[str, Any] | None:
        if self.response is None:
            return None
        return self.response.to_payload()


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class ToolDescriptor(BaseModel):
    """A tool definition as advertised by ``tools/list``."""

    model_config = {"populate_by_name": True, "frozen": True}

    name: str
    title: str = ""
    description: str = ""
    input_schema: dict[str, Any] = Field(default_factory=dict, alias="inputSchema")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class TextContent(BaseModel):
    """Plain text content part."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """The uniform envelope every tool invocation produces.

    A failed tool is still a successful RPC: ``is_error`` marks the
    domain failure and the first content part explains it.
    """

    model_config = {"populate_by_name": True}

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def success(cls, payload: Any) -> ToolResult:
        """Serialize *payload* as indented JSON into a single text part."""
        text = json.dumps(payload, indent=2, ensure_ascii=False)
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def failure(cls, message: str) -> ToolResult:
        return cls(content=[TextContent(text=message)], is_error=True)

    @property
    def text(self) -> str:
        """Concatenated text of all content parts."""
        return "".join(part.text for part in self.content)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class ServerInfo(BaseModel):
    """Static server identity reported during ``initialize``."""

    name: str
    version: str


class InitializeResult(BaseModel):
    """Result body of a successful ``initialize`` request."""

    model_config = {"populate_by_name": True}

    protocol_version: str = Field(alias="protocolVersion")
    capabilities: dict[str, Any] = Field(default_factory=lambda: {"tools": {}})
    server_info: ServerInfo = Field(alias="serverInfo")
    instructions: str = ""

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
