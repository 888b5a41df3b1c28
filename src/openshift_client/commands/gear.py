"""Gear commands."""

from __future__ import annotations

from typing import Annotated

import typer

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

app = typer.Typer(name="gear", help="Inspect the gears of an application.")


@app.command("list")
@error_handler
def list_gears(
    application: Annotated[str, typer.Argument(help="Application name")],
    domain: DomainOpt = None,
    profile: ProfileOpt = None,
    server: ServerOpt = None,
    rhlogin: LoginOpt = None,
    password: PasswordOpt = None,
    fmt: FormatOpt = "table",
) -> None:
    """List gears and their components."""
    with make_connection(profile, server, rhlogin, password) as connection:
        target = require_application(connection, domain, application)
        gears = target.get_gears()
        data = [
            {
                "uuid": g.uuid,
                "git_url": g.git_url,
                "components": [
                    {
                        "name": c.name,
                        "internal_port": c.internal_port,
                        "proxy_host": c.proxy_host,
                        "proxy_port": c.proxy_port,
                    }
                    for c in g.components
                ],
            }
            for g in gears
        ]
        rows = [
            [g.uuid, c.name, c.internal_port, f"{c.proxy_host or ''}:{c.proxy_port or ''}"]
            for g in gears
            for c in g.components
        ]
        output(
            data,
            fmt,
            columns=["Gear", "Component", "Internal Port", "Proxy"],
            rows=rows,
            title=f"Gears of {application}",
        )
