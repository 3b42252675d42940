from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from httponoff.cli.common import load_settings_or_exit
from httponoff.config import Settings
from httponoff.core import HttpOnOffAdapter, LoggingHost


async def run_adapter(settings: Settings) -> None:
    async with HttpOnOffAdapter(LoggingHost(), settings):
        await asyncio.Event().wait()


def run() -> None:
    """Run the adapter until interrupted."""
    settings = load_settings_or_exit()
    console = Console()
    console.print("Running adapter. Press Ctrl+C to stop.\n")

    try:
        asyncio.run(run_adapter(settings))
    except KeyboardInterrupt:
        console.print("\n[green]Adapter stopped.[/green]")


def register(app: typer.Typer) -> None:
    app.command()(run)
