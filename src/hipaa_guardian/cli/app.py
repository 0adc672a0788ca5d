"""
Root Typer application for the ``hipaa-guardian`` CLI.

Commands:
    serve   start the MCP server (stdio or streamable HTTP)
    tools   list the operation catalog
    call    run one operation locally and print its text
"""

from __future__ import annotations

import json
from enum import Enum
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from hipaa_guardian import __version__
from hipaa_guardian.core.errors import GuardianError, LoadError
from hipaa_guardian.core.knowledge import load
from hipaa_guardian.core.logging import configure_logging, get_logger
from hipaa_guardian.core.settings import GuardianSettings
from hipaa_guardian.operations.catalog import build_registry
from hipaa_guardian.operations.registry import InvocationRequest, OperationRegistry

console = Console()
err_console = Console(stderr=True)

logger = get_logger(__name__)

app = typer.Typer(
    name="hipaa-guardian",
    help="HIPAA Compliance Guardian: MCP server for HIPAA compliance guidance.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


class Transport(str, Enum):
    stdio = "stdio"
    http = "streamable-http"


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"hipaa-guardian {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """HIPAA Compliance Guardian CLI."""


# ── Helpers ──────────────────────────────────────────────────────────────


def _load_registry(knowledge_base: Path | None) -> OperationRegistry:
    try:
        store = load(knowledge_base)
    except LoadError as e:
        err_console.print(f"[red]FATAL: {e.message}[/red]")
        raise typer.Exit(code=1) from e
    return build_registry(store)


def _parse_args(pairs: list[str]) -> dict[str, Any]:
    """Parse ``name=value`` pairs into an argument mapping."""
    arguments: dict[str, Any] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise typer.BadParameter(f"Expected name=value, got {pair!r}", param_hint="--arg")
        arguments[name] = value
    return arguments


# ── Commands ─────────────────────────────────────────────────────────────


@app.command("serve")
def serve(
    transport: Transport | None = typer.Option(None, "--transport", "-t", help="MCP transport"),
    host: str | None = typer.Option(None, "--host", help="Bind address (HTTP only)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Bind port (HTTP only)"),
    knowledge_base: Path | None = typer.Option(
        None, "--knowledge-base", "-k", help="Knowledge base JSON file"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR"),
    json_logs: bool | None = typer.Option(None, "--json-logs/--console-logs", help="Log format"),
) -> None:
    """Start the MCP server. Options override HIPAA_GUARDIAN_* settings."""
    from hipaa_guardian.mcp.server import run

    overrides = {
        "transport": transport.value if transport else None,
        "host": host,
        "port": port,
        "knowledge_base_path": knowledge_base,
        "log_level": log_level,
        "json_logs": json_logs,
    }
    try:
        settings = GuardianSettings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        for err in e.errors():
            field = ".".join(str(part) for part in err["loc"]) or "settings"
            err_console.print(f"[red]Invalid setting {field}: {err['msg']}[/red]")
        raise typer.Exit(code=2) from e
    configure_logging(level=settings.effective_log_level, json_format=settings.json_logs)

    try:
        run(settings)
    except LoadError as e:
        logger.critical("knowledge_base_load_failed", **e.to_dict())
        err_console.print(f"[red]FATAL: {e.message}[/red]")
        raise typer.Exit(code=1) from e


@app.command("tools")
def tools(
    knowledge_base: Path | None = typer.Option(None, "--knowledge-base", "-k"),
    json_out: bool = typer.Option(False, "--json", help="Print tool definitions as JSON"),
) -> None:
    """List the operations the server exposes."""
    configure_logging(level="WARNING")
    registry = _load_registry(knowledge_base)

    if json_out:
        definitions = [
            {
                "name": d.name,
                "description": d.description,
                "inputSchema": d.input_shape.json_schema(),
            }
            for d in registry
        ]
        typer.echo(json.dumps(definitions, indent=2))
        return

    table = Table(title="Operations")
    table.add_column("Name", style="bold cyan")
    table.add_column("Required args")
    table.add_column("Description")
    for d in registry:
        table.add_row(d.name, ", ".join(d.input_shape.required) or "-", d.description)
    console.print(table)


@app.command("call")
def call(
    operation: str = typer.Argument(..., help="Operation name, e.g. getComplianceRoadmap"),
    arg: list[str] | None = typer.Option(None, "--arg", "-a", help="Argument as name=value (repeatable)"),
    knowledge_base: Path | None = typer.Option(None, "--knowledge-base", "-k"),
) -> None:
    """Run one operation and print its text."""
    configure_logging(level="WARNING")
    registry = _load_registry(knowledge_base)

    try:
        result = registry.dispatch(InvocationRequest(operation, _parse_args(arg or [])))
    except GuardianError as e:
        err_console.print(f"[red]{e.__class__.__name__}: {e.message}[/red]")
        raise typer.Exit(code=2) from e

    for block in result.content:
        typer.echo(block.text)
