from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from httponoff.config import Settings, get_settings, resolve_config_path
from httponoff.core import Device

_STATES = {
    "on": True,
    "true": True,
    "1": True,
    "off": False,
    "false": False,
    "0": False,
}


def load_settings_or_exit() -> Settings:
    try:
        return get_settings()
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def resolve_config_path_or_exit(allow_missing: bool = False) -> tuple[Path, bool]:
    try:
        return resolve_config_path(allow_missing=allow_missing)
    except FileNotFoundError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1) from exc


def parse_state(value: str) -> bool:
    try:
        return _STATES[value.strip().lower()]
    except KeyError:
        raise typer.BadParameter(f"expected on or off, got {value!r}") from None


def print_devices(console: Console, devices: Iterable[Device]) -> int:
    table = Table()
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("URL")
    table.add_column("On", style="yellow")

    count = 0
    for device in devices:
        prop = device.properties.get("on")
        table.add_row(
            device.id,
            device.name,
            device.url,
            "" if prop is None else ("on" if prop.value else "off"),
        )
        count += 1

    console.print(table)
    return count
