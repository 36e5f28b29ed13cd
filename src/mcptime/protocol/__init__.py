"""Protocol layer — JSON-RPC envelopes, version negotiation, and method dispatch."""

from mcptime.protocol.dispatcher import Method, ProtocolDispatcher
from mcptime.protocol.errors import (
    InternalError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
)
from mcptime.protocol.models import (
    DispatchResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
    Outcome,
)
from mcptime.protocol.versions import (
    CURRENT_PROTOCOL_VERSION,
    FALLBACK_PROTOCOL_VERSION,
    SUPPORTED_PROTOCOL_VERSIONS,
    is_supported_protocol_version,
    negotiate_protocol_version,
)

__all__ = [
    "CURRENT_PROTOCOL_VERSION",
    "DispatchResult",
    "FALLBACK_PROTOCOL_VERSION",
    "InternalError",
    "InvalidRequestError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "Method",
    "MethodNotFoundError",
    "Outcome",
    "ParseError",
    "ProtocolDispatcher",
    "ProtocolError",
    "SUPPORTED_PROTOCOL_VERSIONS",
    "is_supported_protocol_version",
    "negotiate_protocol_version",
]
