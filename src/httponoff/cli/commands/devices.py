from __future__ import annotations

import typer
from rich.console import Console

from httponoff.cli.common import load_settings_or_exit, print_devices
from httponoff.core import DeviceRegistry, HttpFetcher


def list_devices() -> None:
    """List devices from the configured URLs."""
    settings = load_settings_or_exit()
    console = Console()

    urls = settings.adapter.urls
    if not urls:
        console.print("No device URLs configured.")
        console.print("Set adapter.url in the config file or use 'httponoff discover'.")
        return

    registry = DeviceRegistry(HttpFetcher(settings.http), discovery=settings.discovery)
    errors = registry.add_from_config(urls)

    if len(registry):
        print_devices(console, registry)

    for error in errors:
        console.print(f"[red]✗[/red] {error}")

    if errors:
        raise typer.Exit(1)


def register(app: typer.Typer) -> None:
    app.command("devices")(list_devices)
