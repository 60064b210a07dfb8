"""
``pocketwriter-discover``: find, test and inspect the Pocket Writer backend.

Commands:
    discover         scan for the backend and save what was found (exit 1 on failure)
    test             probe the saved backend once (exit 1 if unreachable)
    diagnose         print a network diagnostics table
    show             print the saved backend and its base URL
    set HOST PORT    save a backend address by hand (exit 2 on invalid input)
"""

from __future__ import annotations

import asyncio
import logging
import sys

import typer
from rich.console import Console
from rich.table import Table

from pocketwriter.discovery.manager import BackendConnectionManager, build_connection_manager
from pocketwriter.discovery.models import Environment

app = typer.Typer(no_args_is_help=True, help="Locate and diagnose the Pocket Writer backend.")

_console = Console()


def _manager() -> BackendConnectionManager:
    return build_connection_manager()


def _ok(flag: bool) -> str:
    return "[green]OK[/green]" if flag else "[red]FAIL[/red]"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log probe-level detail to stderr."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@app.command()
def discover() -> None:
    """Scan candidate hosts and ports, then save the backend that answers."""

    manager = _manager()
    with _console.status("Discovering backend..."):
        result = asyncio.run(manager.discover())

    if not result.success:
        _console.print(f"[red]Discovery failed:[/red] {result.message} ({result.probes} probes)")
        raise typer.Exit(code=1)

    _console.print(f"[green]{result.message}[/green] ({result.probes} probes)")
    _console.print(f"Base URL: {result.endpoint.api_url}")


@app.command()
def test() -> None:
    """Probe the saved backend once."""

    manager = _manager()
    endpoint = asyncio.run(manager.current_endpoint())
    reachable = asyncio.run(manager.test_connection())

    if not reachable:
        _console.print(f"[red]Backend {endpoint} is not reachable[/red]")
        raise typer.Exit(code=1)
    _console.print(f"[green]Backend {endpoint} is reachable[/green]")


@app.command()
def diagnose() -> None:
    """Run network diagnostics against the saved backend."""

    manager = _manager()
    endpoint = asyncio.run(manager.current_endpoint())
    report = asyncio.run(manager.run_diagnostics())

    table = Table(title=f"Pocket Writer network diagnostics ({endpoint})")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Internet", _ok(report.internet_available), "")
    table.add_row("Device IP", "", report.device_ip)
    for target, reachable in report.host_checks.items():
        table.add_row(f"Host {target}", _ok(reachable), "")
    table.add_row("Server", _ok(report.server_accessible), report.server_message)
    table.add_row("API", report.api_status or "-", "")
    if report.preferred_address:
        table.add_row("Preferred address", "", report.preferred_address)
    if report.server_addresses:
        table.add_row("Server addresses", "", ", ".join(report.server_addresses))
    for url in report.access_urls:
        table.add_row("Access URL", "", url)

    _console.print(table)


@app.command()
def show() -> None:
    """Print the saved backend configuration."""

    manager = _manager()
    endpoint = asyncio.run(manager.current_endpoint())
    base_url = asyncio.run(manager.base_url(Environment.DEVELOPMENT))

    _console.print(f"Host:     {endpoint.host}")
    _console.print(f"Port:     {endpoint.port}")
    resolved = endpoint.resolved_at.isoformat() if endpoint.resolved_at else "never"
    _console.print(f"Resolved: {resolved}")
    _console.print(f"Base URL: {base_url}")


@app.command(name="set")
def set_backend(
    host: str = typer.Argument(..., help="Backend host name or IPv4 address"),
    port: int = typer.Argument(..., help="Backend TCP port"),
) -> None:
    """Save a backend address by hand."""

    manager = _manager()
    if not asyncio.run(manager.update_config(host, port)):
        _console.print(f"[red]Invalid backend address {host}:{port}[/red]")
        raise typer.Exit(code=2)
    _console.print(f"[green]Backend set to {host}:{port}[/green]")


if __name__ == "__main__":
    app()
