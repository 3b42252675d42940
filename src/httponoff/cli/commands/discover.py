from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console

from httponoff.cli.common import load_settings_or_exit, print_devices
from httponoff.config import Settings
from httponoff.core import Device, HttpOnOffAdapter, LoggingHost

logger = logging.getLogger(__name__)


async def discover_devices(settings: Settings, timeout: float) -> list[Device]:
    async with HttpOnOffAdapter(LoggingHost(), settings) as adapter:
        await asyncio.sleep(timeout)
        return adapter.registry.devices()


def discover(
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Seconds to browse (config default if omitted)"
    ),
) -> None:
    """Browse the network for HTTP on/off lights."""
    console = Console()
    settings = load_settings_or_exit()

    if not settings.discovery.enabled:
        discovery = settings.discovery.model_copy(update={"enabled": True})
        settings = settings.model_copy(update={"discovery": discovery})
    if timeout is None:
        timeout = settings.discovery.browse_timeout

    console.print(f"Browsing for {settings.discovery.service_type} ({timeout:.1f}s)...")
    logger.info(
        "Discovery settings: service_prefix=%s, host_prefix=%s",
        settings.discovery.service_prefix,
        settings.discovery.host_prefix,
    )
    devices = asyncio.run(discover_devices(settings, timeout))

    if not devices:
        console.print("No devices found.")
        return

    print_devices(console, devices)
    console.print(f"\n[green]Found {len(devices)} device(s)[/green]")


def register(app: typer.Typer) -> None:
    app.command()(discover)
