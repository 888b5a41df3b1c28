"""Domain commands: list, create, rename, delete."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from openshift_client.client.errors import error_handler
from openshift_client.commands._common import (
    FormatOpt,
    LoginOpt,
    PasswordOpt,
    ProfileOpt,
    ServerOpt,
    make_connection,
    require_domain,
)
from openshift_client.output.formatter import output

app = typer.Typer(name="domain", help="Manage domains (namespaces).")
console = Console()


@app.command("list")
@error_handler
def list_domains(
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List the domains of the user."""
    with make_connection(profile, server, rhlogin, password) as connection:
        domains = connection.get_domains()
        if not domains and fmt == "table":
            console.print("[yellow]No domains found. Create one with 'domain create'.[/]")
            return
        data = [{"id": d.id, "suffix": d.suffix} for d in domains]
        output(
            data,
            fmt,
            columns=["Id", "Suffix"],
            rows=[[d.id, d.suffix] for d in domains],
            title="Domains",
        )


@app.command()
@error_handler
def create(
    domain_id: Annotated[str, typer.Argument(help="Domain id (namespace)")],
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Create a domain."""
    with make_connection(profile, server, rhlogin, password) as connection:
        domain = connection.create_domain(domain_id)
        console.print(f"[green]Domain '{domain.id}' created.[/]")


@app.command()
@error_handler
def rename(
    domain_id: Annotated[str, typer.Argument(help="Current domain id")],
    new_id: Annotated[str, typer.Argument(help="New domain id")],
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Change the id (namespace) of a domain."""
    with make_connection(profile, server, rhlogin, password) as connection:
        domain = require_domain(connection, domain_id)
        domain.rename(new_id)
        console.print(f"[green]Domain '{domain_id}' renamed to '{domain.id}'.[/]")


@app.command()
@error_handler
def delete(
    domain_id: Annotated[str, typer.Argument(help="Domain id")],
    force: Annotated[
        bool, typer.Option("--force", help="Also delete the domain's applications"),
    ] = False,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Delete a domain."""
    if not yes:
        from rich.prompt import Confirm

        if not Confirm.ask(f"Delete domain '{domain_id}'?"):
            console.print("Cancelled.")
            return
    with make_connection(profile, server, rhlogin, password) as connection:
        domain = require_domain(connection, domain_id)
        domain.destroy(force=force)
        console.print(f"[green]Domain '{domain_id}' deleted.[/]")
