"""mcptime CLI entrypoint."""

from __future__ import annotations

import click

from mcptime import __version__


@click.group()
@click.version_option(version=__version__, prog_name="mcptime")
def main() -> None:
    """mcptime — MCP time utilities and time-knowledge server."""


# Register subcommands
from mcptime.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
