from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from httponoff.cli.common import load_settings_or_exit, parse_state
from httponoff.config import Settings
from httponoff.core import HttpOnOffAdapter, LoggingHost
from httponoff.errors import CommandTransportError, DeviceNotFoundError

POLL_INTERVAL = 0.1


async def wait_for_device(
    adapter: HttpOnOffAdapter, device_id: str, timeout: float
) -> bool:
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while device_id not in adapter.registry:
        if loop.time() >= deadline:
            return False
        await asyncio.sleep(POLL_INTERVAL)
    return True


async def send_command(
    settings: Settings, device_id: str, value: bool, discover: bool
) -> bool:
    discovery = settings.discovery.model_copy(update={"enabled": discover})
    settings = settings.model_copy(update={"discovery": discovery})
    async with HttpOnOffAdapter(LoggingHost(), settings) as adapter:
        if discover:
            await wait_for_device(adapter, device_id, settings.discovery.browse_timeout)
        return await adapter.set_property(device_id, "on", value)


def set_state(
    device_id: str = typer.Argument(..., help="Device id, e.g. http-on-off-F714A9"),
    state: str = typer.Argument(..., help="on or off"),
    discover: bool = typer.Option(
        False, "--discover/--no-discover", help="Also look for the device via mDNS"
    ),
) -> None:
    """Switch a light on or off."""
    value = parse_state(state)
    settings = load_settings_or_exit()
    console = Console()

    try:
        result = asyncio.run(send_command(settings, device_id, value, discover))
    except DeviceNotFoundError as exc:
        console.print(f"[yellow]![/yellow] {exc}")
        raise typer.Exit(1) from exc
    except CommandTransportError as exc:
        console.print(f"[red]✗[/red] {exc}")
        raise typer.Exit(1) from exc

    console.print(f"[green]✓[/green] {device_id} is {'on' if result else 'off'}")


def register(app: typer.Typer) -> None:
    app.command("set")(set_state)
