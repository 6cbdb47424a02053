"""CLI commands for caribic."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Callable

import click
from rich.console import Console
from rich.table import Table

from caribic import __version__
from caribic.cli.check import get_health_checks, run_health_checks
from caribic.config import ProjectConfig, create_default_config, default_config_path, load_config
from caribic.errors import ConfigError
from caribic.observability import configure_logging
from caribic.orchestration import BridgeLifecycle
from caribic.ports import BridgeServicesPort
from caribic.services import LocalBridgeServices
from caribic.services.rpc import latest_block_height, rpc_status

logger = logging.getLogger(__name__)
console = Console()

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2

ServicesFactory = Callable[[ProjectConfig], BridgeServicesPort]


def print_header() -> None:
    console.print(f"[bold cyan]caribic[/bold cyan] [dim]{__version__}[/dim]")
    console.print("[dim]Cardano <-> Cosmos IBC bridge testbed[/dim]\n")


def get_config(ctx: click.Context) -> ProjectConfig:
    """Load the configuration once per invocation.

    A missing file at the configured path is replaced by a default one
    rooted at the current directory.
    """
    if "config" in ctx.obj:
        return ctx.obj["config"]

    config_path: Path = ctx.obj["config_path"]
    try:
        if not config_path.exists():
            create_default_config(config_path)
        config = load_config(config_path)
    except (ConfigError, OSError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        if isinstance(e, ConfigError):
            for suggestion in e.suggestions:
                click.echo(f"  - {suggestion}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)

    ctx.obj["config"] = config
    return config


def get_services(ctx: click.Context, config: ProjectConfig) -> BridgeServicesPort:
    factory: ServicesFactory = ctx.obj.get("services_factory", LocalBridgeServices)
    return factory(config)


@click.group()
@click.version_option(__version__, prog_name="caribic")
@click.option(
    "--verbose",
    type=click.IntRange(0, 5),
    default=1,
    show_default=True,
    help="Verbosity level (0 = quiet, 1 = standard, 2 = warning, 3 = error, 4 = info, 5 = verbose)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=default_config_path,
    show_default="platform config dir",
    help="Configuration file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int, config_path: Path) -> None:
    """Local development environment for the Cardano <-> Cosmos IBC bridge."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path

    print_header()
    configure_logging(verbose)


@cli.command()
@click.pass_context
def check(ctx: click.Context) -> None:
    """Verify that all prerequisites are installed and the configuration is usable."""
    config = get_config(ctx)
    passed, failed_required, failed_optional = run_health_checks(get_health_checks(config))

    if failed_required:
        console.print(f"[red]{failed_required} required prerequisite(s) missing[/red]")
        sys.exit(EXIT_FAILURE)

    if failed_optional:
        console.print(f"[green]Ready[/green] ({failed_optional} optional tool(s) missing)")
    else:
        console.print("[green]All checks passed[/green]")


@cli.command()
@click.pass_context
def start(ctx: click.Context) -> None:
    """Create the local environment: Cardano, Mithril, gateway, Cosmos, relayer, Osmosis."""
    config = get_config(ctx)
    lifecycle = BridgeLifecycle(get_services(ctx, config))
    lifecycle.start(config)


@cli.command()
@click.pass_context
def stop(ctx: click.Context) -> None:
    """Stop the local environment."""
    config = get_config(ctx)
    lifecycle = BridgeLifecycle(get_services(ctx, config))
    lifecycle.stop(config.project_root)


@cli.command()
@click.pass_context
def demo(ctx: click.Context) -> None:
    """Show whether the running bridge is ready for a token swap."""
    config = get_config(ctx)
    endpoints = [
        ("Cosmos sidechain", config.cosmos.chain_id, config.cosmos.rpc_url),
        ("Osmosis appchain", config.osmosis.chain_id, config.osmosis.rpc_url),
    ]

    table = Table(title="Bridge endpoints")
    table.add_column("Service")
    table.add_column("Chain ID")
    table.add_column("RPC")
    table.add_column("Height", justify="right")

    reachable = True
    for name, chain_id, rpc_url in endpoints:
        status: dict[str, Any] | None = rpc_status(rpc_url)
        if status is None:
            reachable = False
            table.add_row(name, chain_id, rpc_url, "[red]down[/red]")
        else:
            table.add_row(name, chain_id, rpc_url, f"[green]{latest_block_height(status)}[/green]")

    console.print(table)

    if not reachable:
        click.echo("The bridge is not running. Start it with 'caribic start'.", err=True)
        sys.exit(EXIT_FAILURE)
