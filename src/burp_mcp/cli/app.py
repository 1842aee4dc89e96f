"""Main CLI application.

Click commands for burp-mcp: serve, tools, call.
"""

from __future__ import annotations

import asyncio
import json
import sys
from typing import TYPE_CHECKING, Any

import click

from burp_mcp import __version__
from burp_mcp.config.loader import load_config
from burp_mcp.core.errors import ConfigError
from burp_mcp.core.log import setup_logging

if TYPE_CHECKING:
    from burp_mcp.config.schema import BurpMcpConfig
    from burp_mcp.tools.base import ResultEnvelope


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(config_path: str | None) -> BurpMcpConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _parse_arguments(raw: str) -> dict[str, Any]:
    try:
        arguments = json.loads(raw)
    except json.JSONDecodeError as e:
        _error(f"--args is not valid JSON: {e}")
        raise  # unreachable
    if not isinstance(arguments, dict):
        _error("--args must be a JSON object")
    return arguments  # type: ignore[no-any-return]


async def _call_async(
    config: BurpMcpConfig, name: str, arguments: dict[str, Any]
) -> ResultEnvelope:
    from burp_mcp.tools.base import Invocation
    from burp_mcp.tools.dispatcher import Dispatcher

    async with Dispatcher(config.backend) as dispatcher:
        return await dispatcher.handle(Invocation(name=name, arguments=arguments))


# ── CLI group ────────────────────────────────────────────────────


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="burp-mcp")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """burp-mcp - MCP server for the Burp Suite REST API.

    Exposes Burp scanning, issue lookup and request tools to AI agents.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


# ── serve ────────────────────────────────────────────────────────


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Start the MCP server on stdio."""
    from burp_mcp.mcp.server import run_server

    config = _load_config(ctx.obj["config_path"])
    setup_logging(config.logging)
    asyncio.run(run_server(config))


# ── tools ────────────────────────────────────────────────────────


@cli.command()
def tools() -> None:
    """List the tools the server exposes."""
    from rich.console import Console
    from rich.table import Table

    from burp_mcp.tools.catalog import list_operations

    table = Table(title="Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Required")
    table.add_column("Description")
    for definition in list_operations():
        table.add_row(
            definition.name,
            ", ".join(definition.required) or "-",
            definition.description,
        )
    Console().print(table)


# ── call ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("name")
@click.option(
    "--args",
    "raw_args",
    default="{}",
    show_default=True,
    help="Tool arguments as a JSON object.",
)
@click.pass_context
def call(ctx: click.Context, name: str, raw_args: str) -> None:
    """Run one tool against the configured Burp instance."""
    arguments = _parse_arguments(raw_args)
    config = _load_config(ctx.obj["config_path"])
    setup_logging(config.logging)

    envelope = asyncio.run(_call_async(config, name, arguments))
    click.echo(envelope.text)
    if envelope.is_error:
        sys.exit(1)
