"""``mcptime serve`` — run the HTTP MCP server."""

from __future__ import annotations

import logging
import sys

import click

from mcptime.cli_commands._output import config_option, console, load_settings_or_exit


@click.command()
@config_option
@click.option("--host", default=None, help="Interface to bind (overrides settings).")
@click.option("--port", type=int, default=None, help="Port to bind (overrides settings).")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (overrides settings).",
)
@click.option("--telemetry", is_flag=True, help="Enable telemetry.")
def serve(
    config_path: str | None,
    host: str | None,
    port: int | None,
    log_level: str | None,
    telemetry: bool,
) -> None:
    """Serve the MCP endpoint over HTTP."""
    import uvicorn
    from rich.logging import RichHandler

    from mcptime.server.app import create_app

    settings = load_settings_or_exit(config_path)
    overrides: dict[str, object] = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    if log_level is not None:
        overrides["log_level"] = log_level.upper()
    if overrides:
        settings = settings.model_copy(update=overrides)
    if telemetry:
        settings.telemetry.enabled = True

    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )

    if settings.telemetry.enabled:
        from mcptime.utils.telemetry import configure_telemetry

        configure_telemetry(
            export_to_console=settings.telemetry.console,
            otlp_endpoint=settings.telemetry.otlp_endpoint,
        )

    try:
        app = create_app(settings)
    except Exception as exc:
        console.print(f"[red]Startup error:[/red] {exc}")
        sys.exit(1)

    console.print(f"Serving MCP on http://{settings.host}:{settings.port}/")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        log_config=None,
    )
