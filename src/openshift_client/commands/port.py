"""Port commands: list and forward the ports of an application over SSH."""

from __future__ import annotations

import threading
from typing import Annotated

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
    make_connection,
    require_application,
)
from openshift_client.output.formatter import output
from openshift_client.ssh.session import open_ssh_session

app = typer.Typer(name="port", help="List and forward application ports over SSH.")
console = Console()

KeyOpt = Annotated[
    str | None,
    typer.Option("--identity", "-i", help="Private key file for SSH"),
]


@app.command("list")
@error_handler
def list_ports(
    application: Annotated[str, typer.Argument(help="Application name")],
    identity: KeyOpt = None,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List the ports an application can forward."""
    with make_connection(profile, server, rhlogin, password) as connection:
        target = require_application(connection, domain, application)
        session = open_ssh_session(target, key_filename=identity)
        target.set_ssh_session(session)
        try:
            ports = target.get_forwardable_ports()
        finally:
            session.disconnect()
        output(
            [
                {"name": p.name, "remote_address": p.remote_address, "remote_port": p.remote_port}
                for p in ports
            ],
            fmt,
            columns=["Service", "Remote Address", "Port"],
            rows=[[p.name, p.remote_address, p.remote_port] for p in ports],
            title=f"Forwardable ports of {application}",
        )


@app.command()
@error_handler
def forward(
    application: Annotated[str, typer.Argument(help="Application name")],
    identity: KeyOpt = None,
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
) -> None:
    """Forward all ports of an application until interrupted."""
    with make_connection(profile, server, rhlogin, password) as connection:
        target = require_application(connection, domain, application)
        target.set_ssh_session(open_ssh_session(target, key_filename=identity))
        try:
            ports = target.start_port_forwarding()
            for port in ports:
                console.print(
                    f"{port.name}: {port.local_address}:{port.local_port}"
                    f" -> {port.remote_endpoint}"
                )
            console.print("[dim]Press Ctrl+C to stop forwarding.[/]")
            threading.Event().wait()
        except KeyboardInterrupt:
            console.print("Stopping port forwarding.")
        finally:
            target.stop_port_forwarding()
