"""CLI for free-usdc-transfer - run the MCP server and manage its wallet."""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from free_usdc_transfer.config import ServerConfig, load_config
from free_usdc_transfer.errors import ConfigError, FreeUsdcError
from free_usdc_transfer.logging_config import setup_logging

app = typer.Typer(
    name="free-usdc-transfer",
    help="MCP server for gasless USDC transfers from a Coinbase MPC wallet.",
    no_args_is_help=True,
)
# stdout belongs to the MCP stream while serving.
console = Console(stderr=True)

_config_path: Path | None = None


def _version_callback(value: bool):
    if value:
        from free_usdc_transfer import __version__
        console.print(f"free-usdc-transfer {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML config file",
        envvar="FREE_USDC_CONFIG",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """MCP server for gasless USDC transfers from a Coinbase MPC wallet."""
    global _config_path
    _config_path = config


def _load() -> ServerConfig:
    """Load config and enforce the required credentials, exiting on failure."""
    try:
        config = load_config(_config_path)
        config.require_credentials()
    except ConfigError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1)
    setup_logging(config.log_level, config.log_file)
    return config


def _services(config: ServerConfig):
    from free_usdc_transfer.server import build_services

    return build_services(config)


@app.command("serve")
def serve():
    """Run the MCP server on stdio."""
    from free_usdc_transfer.server import serve as serve_stdio

    config = _load()
    try:
        asyncio.run(serve_stdio(config))
    except KeyboardInterrupt:
        pass


@app.command("tools")
def list_tools():
    """List the tools exposed to agents."""
    from free_usdc_transfer.tools import wallet_tools  # noqa: F401
    from free_usdc_transfer.tools.registry import ToolRegistry

    table = Table(title="Tools")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Parameters", style="dim")
    for t in ToolRegistry.get().get_tools():
        props = t.parameters.get("properties", {})
        required = set(t.parameters.get("required", []))
        params = ", ".join(
            f"{name}{'*' if name in required else ''}: {spec.get('type', 'any')}"
            for name, spec in props.items()
        )
        table.add_row(t.name, t.description, params or "-")
    console.print(table)


# ------------------------------------------------------------------
# wallet sub-commands
# ------------------------------------------------------------------

wallet_app = typer.Typer(
    name="wallet",
    help="Manage the MPC wallet.",
    no_args_is_help=True,
)
app.add_typer(wallet_app, name="wallet")


@wallet_app.command("create")
def wallet_create():
    """Create the MPC wallet, or show the existing one."""
    config = _load()
    services = _services(config)

    try:
        result = asyncio.run(services.manager.ensure_wallet())
    except FreeUsdcError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1)

    if result.created:
        console.print(Panel(
            f"[bold green]Wallet created![/bold green]\n\n"
            f"Address: [cyan]{result.address}[/cyan]\n\n"
            f"[dim]Seed saved to {config.wallet.state_file}. Back it up and keep it private.\n"
            f"Fund it with USDC on {services.network.network_id} to start transacting.[/dim]",
            title="MPC Wallet",
        ))
    else:
        console.print("[yellow]Wallet already exists.[/yellow]")
        console.print(f"Wallet address: [cyan]{result.address}[/cyan]")


@wallet_app.command("address")
def wallet_address():
    """Show the MPC wallet address."""
    config = _load()
    services = _services(config)

    try:
        record = asyncio.run(services.manager.query_wallet())
    except FreeUsdcError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1)

    if record is None:
        console.print("[yellow]No wallet found.[/yellow] Run 'free-usdc-transfer wallet create' first.")
        raise typer.Exit(1)

    console.print(Panel(
        f"[cyan]{record.address}[/cyan]\n\n"
        f"[dim]Wallet id: {record.wallet_id}\n"
        f"Explorer: {services.network.address_link(record.address)}[/dim]",
        title="Wallet Address",
    ))
