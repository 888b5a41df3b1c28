"""Shared helpers for CLI commands: connection factory, options, lookups."""

from __future__ import annotations

from typing import Annotated, Any

import typer

from openshift_client.client.errors import ResourceLookupError
from openshift_client.config.manager import ConfigManager
from openshift_client.resources.application import Application
from openshift_client.resources.connection import Connection
from openshift_client.resources.domain import Domain

# Shared Typer option type aliases
ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", "-p", help="Server profile"),
]
ServerOpt = Annotated[
    str | None,
    typer.Option("--server", help="Broker URL override"),
]
LoginOpt = Annotated[
    str | None,
    typer.Option("--rhlogin", "-l", help="Login override"),
]
PasswordOpt = Annotated[
    str | None,
    typer.Option("--password", help="Password override"),
]
FormatOpt = Annotated[
    str,
    typer.Option("--format", "-f", help="Output format (table, json, yaml, csv)"),
]
DomainOpt = Annotated[
    str | None,
    typer.Option("--domain", "-d", help="Domain id (defaults to the first domain)"),
]


def make_connection(
    profile: str | None,
    server: str | None,
    rhlogin: str | None,
    password: str | None,
) -> Connection:
    """Connect to the broker from CLI options, env vars, or config profile."""
    mgr = ConfigManager()
    resolved = mgr.resolve_server(
        profile_name=profile, url=server, username=rhlogin, password=password,
    )
    return Connection.from_profile(resolved)


def require_domain(connection: Connection, domain_id: str | None) -> Domain:
    domain = (
        connection.get_domain(domain_id) if domain_id else connection.get_default_domain()
    )
    if domain is None:
        raise ResourceLookupError(f"domain '{domain_id}'" if domain_id else "default domain")
    return domain


def require_application(
    connection: Connection, domain_id: str | None, name: str,
) -> Application:
    domain = require_domain(connection, domain_id)
    application = domain.get_application(name)
    if application is None:
        raise ResourceLookupError(f"application '{name}' in domain '{domain.id}'")
    return application


def application_summary(application: Application) -> dict[str, Any]:
    """Flatten an application's public fields for output."""
    return {
        "name": application.name,
        "uuid": application.uuid,
        "cartridge": str(application.cartridge) if application.cartridge else None,
        "url": application.application_url,
        "git_url": application.git_url,
        "gear_profile": application.gear_profile,
        "scalable": application.scalable,
        "aliases": list(application.aliases),
        "created": (
            application.creation_time.isoformat() if application.creation_time else None
        ),
    }
