"""HTTP boundary — request guard and the FastAPI application."""

from mcptime.server.app import build_dispatcher, create_app
from mcptime.server.errors import GuardRejection, InvalidOriginError, UnsupportedProtocolVersionError
from mcptime.server.guard import BoundaryGuard

__all__ = [
    "BoundaryGuard",
    "GuardRejection",
    "InvalidOriginError",
    "UnsupportedProtocolVersionError",
    "build_dispatcher",
    "create_app",
]
