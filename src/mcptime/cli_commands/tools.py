"""``mcptime tools`` — list and invoke tools locally."""

from __future__ import annotations

import asyncio
import json
import sys

import click

from mcptime.cli_commands._output import (
    config_option,
    console,
    load_settings_or_exit,
    print_tool_result,
    print_tools_table,
)


@click.group()
def tools() -> None:
    """Inspect and invoke tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output the tools/list payload as JSON.")
def list_tools(as_json: bool) -> None:
    """List the tool catalog in advertised order."""
    from mcptime.tools.catalog import build_default_registry

    registry = build_default_registry()
    if as_json:
        payload = {"tools": [tool.to_payload() for tool in registry.list()]}
        console.print_json(json.dumps(payload))
        return
    print_tools_table(registry.list())


@tools.command("call")
@click.argument("name")
@click.option(
    "--arguments",
    "-a",
    "raw_arguments",
    default="{}",
    help="Tool arguments as a JSON object.",
)
@config_option
def call(name: str, raw_arguments: str, config_path: str | None) -> None:
    """Invoke tool NAME in-process and print its result.

    Exits with status 1 when the tool reports an error.
    """
    from mcptime.server.app import build_dispatcher

    try:
        arguments = json.loads(raw_arguments)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid --arguments JSON:[/red] {exc}")
        sys.exit(2)
    if not isinstance(arguments, dict):
        console.print("[red]--arguments must be a JSON object[/red]")
        sys.exit(2)

    settings = load_settings_or_exit(config_path)
    dispatcher = build_dispatcher(settings)
    result = asyncio.run(dispatcher.executor.execute(name, arguments))
    print_tool_result(result)
    if result.is_error:
        sys.exit(1)
