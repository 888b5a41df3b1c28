"""Root Typer app: global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer

from openshift_client import __version__
from openshift_client.commands import (
    application,
    cartridge,
    config_cmd,
    domain,
    gear,
    port,
)
from openshift_client.logging_setup import configure_logging

app = typer.Typer(
    name="openshift-client",
    help="Command line client for the OpenShift broker REST API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"openshift-client {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr."),
    debug: bool = typer.Option(False, "--debug", help="Log requests and retries to stderr."),
) -> None:
    """OpenShift client: manage domains, applications, cartridges, and ports."""
    configure_logging(verbose=verbose, debug=debug)


# Register command groups
app.add_typer(config_cmd.app, name="config")
app.add_typer(domain.app, name="domain")
app.add_typer(application.app, name="app")
app.add_typer(cartridge.app, name="cartridge")
app.add_typer(gear.app, name="gear")
app.add_typer(port.app, name="port")


def main() -> None:
    app()
