from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from httponoff.core import run_mock_device


def mock(
    name: str = typer.Option(
        "wifi101-F714A9", "--name", "-n", help="Host name to announce"
    ),
    port: int = typer.Option(8080, "--port", "-p", help="Port to listen on"),
    announce: bool = typer.Option(
        True, "--announce/--no-announce", help="Announce the light over mDNS"
    ),
) -> None:
    """Run a mock HTTP on/off light for development."""
    console = Console()
    console.print(f"Starting mock light '{name}' on port {port}...")
    console.print("Press Ctrl+C to stop.\n")

    try:
        asyncio.run(run_mock_device(name=name, port=port, announce=announce))
    except KeyboardInterrupt:
        console.print("\n[green]Mock light stopped.[/green]")


def register(app: typer.Typer) -> None:
    app.command()(mock)
