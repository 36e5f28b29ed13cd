"""Protocol-level faults, each mapped onto a JSON-RPC 2.0 error code."""

from __future__ import annotations

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class ProtocolError(Exception):
    """Base error for all protocol-layer failures."""

    code: int = INTERNAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ParseError(ProtocolError):
    """The request body is not valid JSON."""

    code = PARSE_ERROR

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Parse error")


class InvalidRequestError(ProtocolError):
    """The body is JSON but not a single JSON-RPC request object."""

    code = INVALID_REQUEST

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__("Invalid Request" + (f": {detail}" if detail else ""))


class MethodNotFoundError(ProtocolError):
    """The requested method is not served."""

    code = METHOD_NOT_FOUND

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"Method not found: {method}")


class InternalError(ProtocolError):
    """A fault escaped a handler while the request was being served."""

    code = INTERNAL_ERROR
