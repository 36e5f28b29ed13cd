"""Error types raised inside tool logic.

The executor converts all of these into ``isError`` tool results; they
never reach the protocol layer.
"""

from __future__ import annotations


class ToolError(Exception):
    """Base error for tool-level failures."""


class ToolArgumentError(ToolError):
    """A tool argument is missing or has the wrong type."""

    def __init__(self, argument: str, detail: str = "") -> None:
        self.argument = argument
        self.detail = detail
        super().__init__(detail or f"Missing required argument: {argument}")
