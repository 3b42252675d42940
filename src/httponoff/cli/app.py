from __future__ import annotations

from typing import Annotated

import typer

from httponoff.utils.logging import setup_logging

from .commands import config as config_cmd
from .commands.devices import register as register_devices
from .commands.discover import register as register_discover
from .commands.info import register as register_info
from .commands.mock import register as register_mock
from .commands.run import register as register_run
from .commands.set_state import register as register_set

app = typer.Typer(
    help="httponoff - discover and control HTTP on/off lights", no_args_is_help=True
)

app.add_typer(config_cmd.app, name="config", help="Show or create the config file")

register_devices(app)
register_discover(app)
register_set(app)
register_run(app)
register_mock(app)
register_info(app)


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit"),
    ] = False,
) -> None:
    """httponoff CLI."""
    setup_logging()

    if version:
        from importlib.metadata import version as get_version

        typer.echo(f"httponoff version {get_version('httponoff')}")
        raise typer.Exit()
