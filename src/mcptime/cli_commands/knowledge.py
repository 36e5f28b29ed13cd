"""``mcptime knowledge`` — query the time-knowledge corpus."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click

from mcptime.cli_commands._output import (
    config_option,
    console,
    load_settings_or_exit,
    print_payload,
    print_search_hits,
)

if TYPE_CHECKING:
    from mcptime.knowledge.store import KnowledgeStore


def _load_store(config_path: str | None) -> KnowledgeStore:
    from mcptime.knowledge.store import KnowledgeStore

    settings = load_settings_or_exit(config_path)
    try:
        if settings.knowledge_path is not None:
            return KnowledgeStore.from_path(settings.knowledge_path)
        return KnowledgeStore.load_default()
    except Exception as exc:
        console.print(f"[red]Error loading corpus:[/red] {exc}")
        sys.exit(1)


@click.group()
def knowledge() -> None:
    """Search and fetch knowledge records."""


@knowledge.command("search")
@click.argument("query")
@config_option
def search(query: str, config_path: str | None) -> None:
    """Search the corpus for QUERY (any token, substring match)."""
    from mcptime.knowledge.search import SearchEngine

    hits = SearchEngine(_load_store(config_path)).search(query)
    if not hits:
        console.print("[yellow]No matching records.[/yellow]")
        return
    print_search_hits(query, hits)


@knowledge.command("fetch")
@click.argument("record_id")
@config_option
def fetch(record_id: str, config_path: str | None) -> None:
    """Print the full record RECORD_ID."""
    record = _load_store(config_path).get(record_id)
    if record is None:
        console.print(f"[red]Record not found:[/red] {record_id}")
        sys.exit(1)
    print_payload(record.to_payload())
