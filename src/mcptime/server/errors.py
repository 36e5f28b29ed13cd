"""Boundary rejections — refused before any JSON-RPC dispatch happens."""

from __future__ import annotations


class GuardRejection(Exception):
    """Base error for requests turned away at the HTTP boundary."""

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidOriginError(GuardRejection):
    """The ``Origin`` header names a host that is not allowed."""

    status_code = 403

    def __init__(self, origin: str) -> None:
        self.origin = origin
        super().__init__("Invalid origin")


class UnsupportedProtocolVersionError(GuardRejection):
    """The ``MCP-Protocol-Version`` header names an unknown revision."""

    status_code = 400

    def __init__(self, version: str) -> None:
        self.version = version
        super().__init__(f"Unsupported protocol version: {version}")
