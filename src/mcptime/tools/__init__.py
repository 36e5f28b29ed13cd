"""Tool layer — the tool catalog, its registry, and the executor."""

from mcptime.tools.catalog import TOOL_DESCRIPTORS, ToolName, build_default_registry
from mcptime.tools.errors import ToolArgumentError, ToolError
from mcptime.tools.executor import ToolExecutor
from mcptime.tools.registry import ToolRegistry
from mcptime.tools.timeutils import DEFAULT_FORMAT, TimeService

__all__ = [
    "DEFAULT_FORMAT",
    "TOOL_DESCRIPTORS",
    "TimeService",
    "ToolArgumentError",
    "ToolError",
    "ToolExecutor",
    "ToolName",
    "ToolRegistry",
    "build_default_registry",
]
