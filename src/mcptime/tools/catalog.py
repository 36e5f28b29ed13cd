"""Static tool catalog.

Contains the descriptor of every tool the server exposes, in the order
``tools/list`` advertises them, and a helper to build a
:class:`~mcptime.tools.registry.ToolRegistry` from it.
"""

from __future__ import annotations

from enum import Enum

from mcptime.protocol.models import ToolDescriptor
from mcptime.tools.registry import ToolRegistry


class ToolName(str, Enum):
    """Closed set of tool identifiers."""

    CURRENT_TIME = "current_time"
    CONVERT_TIME = "convert_time"
    RELATIVE_TIME = "relative_time"
    DAYS_IN_MONTH = "days_in_month"
    GET_TIMESTAMP = "get_timestamp"
    GET_WEEK_YEAR = "get_week_year"
    SEARCH = "search"
    FETCH = "fetch"


_SEARCH_DESCRIPTION = """\
Search comprehensive time-related knowledge including historical events, calendar systems, \
timekeeping technologies, and scientific developments.

Usage Guidelines:
• Use specific keywords related to time concepts (e.g., "atomic clock", "calendar reform", "time zone history")
• Search by historical periods (e.g., "ancient timekeeping", "medieval calendar")
• Look for scientific developments (e.g., "UTC development", "leap second")
• Find cultural time practices (e.g., "Mayan calendar", "lunar calendar")

Examples:
• "atomic clock invention" - Find the history of atomic timekeeping
• "gregorian calendar reform" - Learn about calendar system changes
• "sundial ancient civilizations" - Discover early timekeeping methods
• "time zone standardization" - Research time zone development
• "leap year calculation" - Understand leap year history and methods

The search covers topics from ancient civilizations to modern scientific timekeeping."""

# ---------------------------------------------------------------------------
# Chat tools — quick, conversational time utilities
# ---------------------------------------------------------------------------

TIME_TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=ToolName.CURRENT_TIME.value,
        title="Current Time",
        description=(
            'Get the current time now. Perfect for questions like "What time is it?" or '
            '"What time is it in Tokyo?" Supports any timezone and custom formatting.'
        ),
        input_schema={
            "type": "object",
            "properties": {
                "format": {
                    "type": "string",
                    "description": (
                        "How to format the time (default: YYYY-MM-DD HH:mm:ss). "
                        "Examples: 'h:mm A' for 12-hour, 'HH:mm' for 24-hour"
                    ),
                    "default": "YYYY-MM-DD HH:mm:ss",
                },
                "timezone": {
                    "type": "string",
                    "description": (
                        "IANA timezone name like 'America/New_York', 'Europe/London', "
                        "'Asia/Tokyo'. If not specified, uses the server timezone."
                    ),
                },
            },
        },
    ),
    ToolDescriptor(
        name=ToolName.CONVERT_TIME.value,
        title="Convert Time Between Timezones",
        description=(
            "Convert any time from one timezone to another. Great for scheduling across "
            "timezones or travel planning."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "sourceTimezone": {
                    "type": "string",
                    "description": "Source timezone (e.g., 'America/Los_Angeles', 'UTC', 'Europe/Paris')",
                },
                "targetTimezone": {
                    "type": "string",
                    "description": "Target timezone (e.g., 'Asia/Tokyo', 'America/New_York')",
                },
                "time": {
                    "type": "string",
                    "description": "Time to convert in format YYYY-MM-DD HH:mm:ss (e.g., '2025-06-22 15:30:00')",
                },
            },
            "required": ["sourceTimezone", "targetTimezone", "time"],
        },
    ),
    ToolDescriptor(
        name=ToolName.RELATIVE_TIME.value,
        title="Time Ago/Until",
        description=(
            "Calculate how long ago something happened or how long until a future event. "
            'Examples: "How long ago was 2020-01-01?" or "How long until Christmas?"'
        ),
        input_schema={
            "type": "object",
            "properties": {
                "time": {
                    "type": "string",
                    "description": "Date/time to compare (format: YYYY-MM-DD HH:mm:ss or YYYY-MM-DD)",
                },
            },
            "required": ["time"],
        },
    ),
    ToolDescriptor(
        name=ToolName.DAYS_IN_MONTH.value,
        title="Days in Month",
        description=(
            "Find out how many days are in any month and year. Accounts for leap years automatically."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "date": {
                    "type": "string",
                    "description": (
                        "Date in format YYYY-MM-DD (e.g., '2024-02-01'). "
                        "If not provided, uses current month."
                    ),
                },
            },
        },
    ),
    ToolDescriptor(
        name=ToolName.GET_TIMESTAMP.value,
        title="Unix Timestamp",
        description=(
            "Convert a date/time to Unix timestamp (milliseconds since 1970). "
            "Useful for programming and API work."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "time": {
                    "type": "string",
                    "description": (
                        "Date/time to convert (format: YYYY-MM-DD HH:mm:ss). "
                        "If not provided, uses current time."
                    ),
                },
            },
        },
    ),
    ToolDescriptor(
        name=ToolName.GET_WEEK_YEAR.value,
        title="Week Number",
        description=(
            "Get the week number of the year for any date. Returns both standard and ISO week numbers."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "date": {
                    "type": "string",
                    "description": "Date to check (format: YYYY-MM-DD). If not provided, uses today.",
                },
            },
        },
    ),
)

# ---------------------------------------------------------------------------
# Deep research tools — search and fetch over the knowledge corpus
# ---------------------------------------------------------------------------

RETRIEVAL_TOOLS: tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=ToolName.SEARCH.value,
        title="Search Time Knowledge",
        description=_SEARCH_DESCRIPTION,
        input_schema={
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "description": (
                        "Search query for time-related knowledge. Use specific keywords about "
                        "time concepts, historical periods, technologies, or cultural practices."
                    ),
                },
            },
            "required": ["query"],
        },
    ),
    ToolDescriptor(
        name=ToolName.FETCH.value,
        title="Get Detailed Time Knowledge",
        description=(
            "Retrieve complete details about a specific time-related topic by its ID. "
            "Use this after searching to get full information with sources and references."
        ),
        input_schema={
            "type": "object",
            "properties": {
                "id": {
                    "type": "string",
                    "description": "ID of the knowledge item (obtained from search results)",
                },
            },
            "required": ["id"],
        },
    ),
)

TOOL_DESCRIPTORS: tuple[ToolDescriptor, ...] = TIME_TOOLS + RETRIEVAL_TOOLS


def build_default_registry() -> ToolRegistry:
    """Return a :class:`ToolRegistry` holding the full catalog."""
    return ToolRegistry(TOOL_DESCRIPTORS)
