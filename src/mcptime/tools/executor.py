"""ToolExecutor — runs a tool by name and always answers with a ToolResult.

Domain failures (unknown tool, record not found, bad arguments, a fault
inside tool logic) come back as ``isError`` results rather than
exceptions, so the protocol layer can deliver them as a normal RPC
result the client can display.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from mcptime.knowledge.errors import RecordNotFoundError
from mcptime.protocol.models import ToolResult
from mcptime.tools.catalog import ToolName
from mcptime.tools.errors import ToolArgumentError
from mcptime.tools.timeutils import DEFAULT_FORMAT, TimeService
from mcptime.utils.telemetry import ATTR_TOOL_IS_ERROR, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from mcptime.knowledge.search import SearchEngine

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

ToolHandler = Callable[[dict[str, Any]], ToolResult]


def _required_str(arguments: dict[str, Any], key: str) -> str:
    if key not in arguments or arguments[key] is None:
        raise ToolArgumentError(key)
    return _ensure_str(key, arguments[key])


def _optional_str(arguments: dict[str, Any], key: str) -> str | None:
    value = arguments.get(key)
    if value is None:
        return None
    return _ensure_str(key, value)


def _ensure_str(key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ToolArgumentError(key, f"Argument '{key}' must be a string")
    return value


class ToolExecutor:
    """Dispatch a tool call onto its handler.

    Usage::

        executor = ToolExecutor(SearchEngine(store), TimeService())
        result = await executor.execute("fetch", {"id": "atomic-clock"})
    """

    def __init__(self, search_engine: SearchEngine, time_service: TimeService | None = None) -> None:
        self._search = search_engine
        self._time = time_service or TimeService()
        self._handlers: dict[ToolName, ToolHandler] = {
            ToolName.CURRENT_TIME: self._current_time,
            ToolName.CONVERT_TIME: self._convert_time,
            ToolName.RELATIVE_TIME: self._relative_time,
            ToolName.DAYS_IN_MONTH: self._days_in_month,
            ToolName.GET_TIMESTAMP: self._get_timestamp,
            ToolName.GET_WEEK_YEAR: self._get_week_year,
            ToolName.SEARCH: self._search_records,
            ToolName.FETCH: self._fetch_record,
        }

    @property
    def time_service(self) -> TimeService:
        return self._time

    async def execute(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """Run tool *name* with *arguments*; never raises for tool-level faults."""
        with _tracer.start_as_current_span("mcptime.tool.call") as span:
            span.set_attribute(ATTR_TOOL_NAME, str(name))
            result = self._run(name, arguments or {})
            span.set_attribute(ATTR_TOOL_IS_ERROR, result.is_error)
        return result

    def _run(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        try:
            tool = ToolName(name)
        except ValueError:
            logger.info("Call for unknown tool %r", name)
            return ToolResult.failure(f"Unknown tool: {name}")

        try:
            return self._handlers[tool](arguments)
        except RecordNotFoundError as exc:
            return ToolResult.failure(str(exc))
        except Exception as exc:
            logger.warning("Tool %s failed: %s", tool.value, exc)
            return ToolResult.failure(f"Tool execution error: {exc}")

    # ------------------------------------------------------------------
    # Time tools
    # ------------------------------------------------------------------

    def _current_time(self, arguments: dict[str, Any]) -> ToolResult:
        fmt = _optional_str(arguments, "format") or DEFAULT_FORMAT
        timezone = _optional_str(arguments, "timezone")
        return ToolResult.success(self._time.current_time(fmt, timezone))

    def _convert_time(self, arguments: dict[str, Any]) -> ToolResult:
        return ToolResult.success(
            self._time.convert_time(
                _required_str(arguments, "time"),
                _required_str(arguments, "sourceTimezone"),
                _required_str(arguments, "targetTimezone"),
            )
        )

    def _relative_time(self, arguments: dict[str, Any]) -> ToolResult:
        return ToolResult.success(self._time.relative_time(_required_str(arguments, "time")))

    def _days_in_month(self, arguments: dict[str, Any]) -> ToolResult:
        return ToolResult.success(self._time.days_in_month(_optional_str(arguments, "date")))

    def _get_timestamp(self, arguments: dict[str, Any]) -> ToolResult:
        return ToolResult.success(self._time.timestamp(_optional_str(arguments, "time")))

    def _get_week_year(self, arguments: dict[str, Any]) -> ToolResult:
        return ToolResult.success(self._time.week_of_year(_optional_str(arguments, "date")))

    # ------------------------------------------------------------------
    # Retrieval tools
    # ------------------------------------------------------------------

    def _search_records(self, arguments: dict[str, Any]) -> ToolResult:
        hits = self._search.search(_required_str(arguments, "query"))
        return ToolResult.success({"results": [hit.model_dump() for hit in hits]})

    def _fetch_record(self, arguments: dict[str, Any]) -> ToolResult:
        record = self._search.store.require(_required_str(arguments, "id"))
        return ToolResult.success(record.to_payload())
