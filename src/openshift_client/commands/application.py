"""Application commands: list, show, create, lifecycle events, aliases, wait."""

from __future__ import annotations

from typing import Annotated, Callable

import typer
from rich.console import Console

from openshift_client.client.errors import error_handler
from openshift_client.commands._common import (
    DomainOpt,
    FormatOpt,
    LoginOpt,
    PasswordOpt,
    ProfileOpt,
    ServerOpt,
    application_summary,
    make_connection,
    require_application,
    require_domain,
)
from openshift_client.output.formatter import output
from openshift_client.resources.application import Application

app = typer.Typer(name="app", help="Manage applications.")
console = Console()

NameArg = Annotated[str, typer.Argument(help="Application name")]


def _run(
    name: str,
    domain: str | None,
    profile: str | None,
    server: str | None,
    rhlogin: str | None,
    password: str | None,
    action: Callable[[Application], None],
    done: str,
) -> None:
    with make_connection(profile, server, rhlogin, password) as connection:
        application = require_application(connection, domain, name)
        action(application)
        console.print(f"[green]Application '{name}' {done}.[/]")


@app.command("list")
@error_handler
def list_applications(
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List the applications of a domain."""
    with make_connection(profile, server, rhlogin, password) as connection:
        target = require_domain(connection, domain)
        applications = target.get_applications()
        if not applications and fmt == "table":
            console.print(f"[yellow]No applications in domain '{target.id}'.[/]")
            return
        output(
            [application_summary(a) for a in applications],
            fmt,
            columns=["Name", "Cartridge", "URL", "Scalable"],
            rows=[
                [a.name, a.cartridge, a.application_url, a.scalable]
                for a in applications
            ],
            title=f"Applications in {target.id}",
        )


@app.command()
@error_handler
def show(
    name: NameArg,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show application details."""
    with make_connection(profile, server, rhlogin, password) as connection:
        application = require_application(connection, domain, name)
        data = application_summary(application)
        data["actions"] = sorted(a.value for a in application.capabilities)
        output(data, fmt, title=f"Application: {name}")


@app.command()
@error_handler
def create(
    name: NameArg,
    cartridge: Annotated[str, typer.Argument(help="Framework cartridge, e.g. jbossas-7")],
    scale: Annotated[bool, typer.Option("--scale", help="Create a scalable application")] = False,
    gear_profile: Annotated[
        str | None, typer.Option("--gear-profile", help="Gear size"),
    ] = None,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Create an application."""
    with make_connection(profile, server, rhlogin, password) as connection:
        target = require_domain(connection, domain)
        application = target.create_application(
            name, cartridge, scale=scale, gear_profile=gear_profile,
        )
        console.print(f"[green]Application '{application.name}' created.[/]")
        if application.application_url:
            console.print(f"URL: {application.application_url}")
        if application.git_url:
            console.print(f"Git: {application.git_url}")


@app.command()
@error_handler
def start(
    name: NameArg,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Start an application."""
    _run(name, domain, profile, server, rhlogin, password, Application.start, "started")


@app.command()
@error_handler
def stop(
    name: NameArg,
    force: Annotated[bool, typer.Option("--force", help="Force stop")] = False,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Stop an application."""
    _run(
        name, domain, profile, server, rhlogin, password,
        lambda a: a.stop(force=force), "stopped",
    )


@app.command()
@error_handler
def restart(
    name: NameArg,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Restart an application."""
    _run(name, domain, profile, server, rhlogin, password, Application.restart, "restarted")


@app.command("scale-up")
@error_handler
def scale_up(
    name: NameArg,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Add a gear to a scalable application."""
    _run(name, domain, profile, server, rhlogin, password, Application.scale_up, "scaled up")


@app.command("scale-down")
@error_handler
def scale_down(
    name: NameArg,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Remove a gear from a scalable application."""
    _run(
        name, domain, profile, server, rhlogin, password, Application.scale_down, "scaled down",
    )


@app.command("add-alias")
@error_handler
def add_alias(
    name: NameArg,
    alias: Annotated[str, typer.Argument(help="Host name alias")],
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Add a host name alias."""
    _run(
        name, domain, profile, server, rhlogin, password,
        lambda a: a.add_alias(alias), f"now answers to {alias}",
    )


@app.command("remove-alias")
@error_handler
def remove_alias(
    name: NameArg,
    alias: Annotated[str, typer.Argument(help="Host name alias")],
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Remove a host name alias."""
    _run(
        name, domain, profile, server, rhlogin, password,
        lambda a: a.remove_alias(alias), f"no longer answers to {alias}",
    )


@app.command()
@error_handler
def delete(
    name: NameArg,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Delete an application."""
    if not yes:
        from rich.prompt import Confirm

        if not Confirm.ask(f"Delete application '{name}'?"):
            console.print("Cancelled.")
            return
    _run(name, domain, profile, server, rhlogin, password, Application.destroy, "deleted")


@app.command()
@error_handler
def wait(
    name: NameArg,
    timeout: Annotated[
        float, typer.Option("--timeout", "-t", help="Seconds to wait")
    ] = 180.0,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Wait until an application answers its health check."""
    with make_connection(profile, server, rhlogin, password) as connection:
        application = require_application(connection, domain, name)
        with console.status(f"Waiting for {application.health_check_url}..."):
            accessible = application.wait_for_accessible(timeout)
        if not accessible:
            console.print(f"[red]Application '{name}' not accessible after {timeout:g}s.[/]")
            raise typer.Exit(1)
        console.print(f"[green]Application '{name}' is accessible.[/]")
