"""Shared CLI output formatters and option helpers."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from mcptime.knowledge.models import SearchHit
    from mcptime.protocol.models import ToolDescriptor, ToolResult
    from mcptime.settings.models import ServerSettings

console = Console()

config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to a settings YAML file.",
)


def load_settings_or_exit(config_path: str | None) -> ServerSettings:
    """Load settings, printing the error and exiting with status 1 on failure."""
    from mcptime.settings.loader import load_settings

    try:
        return load_settings(config_path)
    except Exception as exc:
        console.print(f"[red]Settings error:[/red] {exc}")
        sys.exit(1)


def print_tools_table(tools: list[ToolDescriptor]) -> None:
    """Pretty-print the tool catalog as a table."""
    table = Table(title="Tools")
    table.add_column("Name", style="cyan")
    table.add_column("Title")
    table.add_column("Required")
    table.add_column("Description")

    for tool in tools:
        required = tool.input_schema.get("required", [])
        table.add_row(
            tool.name,
            tool.title,
            ", ".join(required) or "-",
            _truncate(tool.description.splitlines()[0] if tool.description else ""),
        )

    console.print(table)


def print_search_hits(query: str, hits: list[SearchHit]) -> None:
    """Pretty-print search hits as a table."""
    table = Table(title=f"Results for {query!r}")
    table.add_column("ID", style="cyan")
    table.add_column("Title")
    table.add_column("Snippet")

    for hit in hits:
        table.add_row(hit.id, hit.title, _truncate(hit.text))

    console.print(table)


def print_tool_result(result: ToolResult) -> None:
    """Print a ToolResult as JSON."""
    console.print_json(json.dumps(result.to_payload()))


def print_payload(payload: dict[str, Any]) -> None:
    console.print_json(json.dumps(payload))


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
