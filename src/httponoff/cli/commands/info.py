from __future__ import annotations

import typer
from rich.console import Console

from httponoff.cli.common import load_settings_or_exit, resolve_config_path_or_exit


def info() -> None:
    """Show configuration source and effective settings."""
    settings = load_settings_or_exit()
    config_path, config_exists = resolve_config_path_or_exit(allow_missing=True)

    console = Console()

    console.print("[bold]httponoff Info[/bold]\n")
    console.print(f"Config file: {config_path if config_exists else 'defaults'}")

    console.print("\n[bold]Devices[/bold]")
    console.print(f"Configured URLs: {len(settings.adapter.urls)}")
    for url in settings.adapter.urls:
        console.print(f"  • {url}")

    discovery = settings.discovery
    console.print("\n[bold]Discovery[/bold]")
    console.print(f"Enabled: {discovery.enabled}")
    console.print(f"Service type: {discovery.service_type}")
    console.print(f"Service prefix: {discovery.service_prefix}")
    console.print(f"Host prefix: {discovery.host_prefix}")

    console.print("\n[bold]HTTP[/bold]")
    timeout = settings.http.timeout
    console.print(f"Timeout: {'none' if timeout is None else f'{timeout}s'}")
    console.print(f"Raise for status: {settings.http.raise_for_status}")


def register(app: typer.Typer) -> None:
    app.command()(info)
