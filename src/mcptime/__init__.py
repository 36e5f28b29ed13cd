"""MCP time server — time utilities and a searchable time-knowledge corpus over HTTP."""

from __future__ import annotations

__version__ = "1.0.0"

SERVER_NAME = "mcp-server-http-time"
