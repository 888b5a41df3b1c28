"""Cartridge commands: catalogue, embedded cartridges of an application."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from openshift_client.client.errors import CartridgeAdditionError, error_handler
from openshift_client.commands._common import (
    DomainOpt,
    FormatOpt,
    LoginOpt,
    PasswordOpt,
    ProfileOpt,
    ServerOpt,
    make_connection,
    require_application,
)
from openshift_client.output.formatter import output

app = typer.Typer(name="cartridge", help="Browse cartridges and manage embedded ones.")
console = Console()


@app.command()
@error_handler
def catalog(
    embedded: Annotated[
        bool, typer.Option("--embedded", help="Only embeddable cartridges"),
    ] = False,
    standalone: Annotated[
        bool, typer.Option("--standalone", help="Only framework cartridges"),
    ] = False,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List the cartridges the broker offers."""
    with make_connection(profile, server, rhlogin, password) as connection:
        if embedded:
            cartridges = connection.get_embeddable_cartridges()
        elif standalone:
            cartridges = connection.get_standalone_cartridges()
        else:
            cartridges = list(connection.get_cartridges())
        output(
            cartridges,
            fmt,
            columns=["Name", "Type", "Display Name"],
            rows=[
                [c.name, c.type.value if c.type else None, c.display_name]
                for c in cartridges
            ],
            title="Cartridges",
        )


@app.command("list")
@error_handler
def list_embedded(
    application: Annotated[str, typer.Argument(help="Application name")],
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List the cartridges embedded in an application."""
    with make_connection(profile, server, rhlogin, password) as connection:
        target = require_application(connection, domain, application)
        cartridges = target.get_embedded_cartridges()
        output(
            [{"name": c.name, "type": c.type} for c in cartridges],
            fmt,
            columns=["Name", "Type"],
            rows=[[c.name, c.type] for c in cartridges],
            title=f"Cartridges embedded in {application}",
        )


@app.command()
@error_handler
def add(
    application: Annotated[str, typer.Argument(help="Application name")],
    cartridges: Annotated[list[str], typer.Argument(help="Cartridges to embed")],
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Embed one or more cartridges, in order."""
    with make_connection(profile, server, rhlogin, password) as connection:
        target = require_application(connection, domain, application)
        try:
            added = target.add_embeddable_cartridges(cartridges)
        except CartridgeAdditionError as exc:
            for cartridge in exc.added:
                console.print(f"[green]Added {cartridge.name}.[/]")
            if exc.pending:
                console.print(f"[yellow]Not attempted: {', '.join(exc.pending)}[/]")
            raise
        for cartridge in added:
            console.print(f"[green]Added {cartridge.name}.[/]")


@app.command()
@error_handler
def remove(
    application: Annotated[str, typer.Argument(help="Application name")],
    cartridge: Annotated[str, typer.Argument(help="Embedded cartridge name")],
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Remove an embedded cartridge."""
    with make_connection(profile, server, rhlogin, password) as connection:
        target = require_application(connection, domain, application)
        embedded = target.get_embedded_cartridge(cartridge)
        if embedded is None:
            console.print(f"[red]Cartridge '{cartridge}' is not embedded in '{application}'.[/]")
            raise typer.Exit(1)
        embedded.destroy()
        console.print(f"[green]Removed {cartridge}.[/]")
