"""Config commands: manage broker profiles."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm

from openshift_client.client.errors import error_handler
from openshift_client.config.manager import ConfigManager
from openshift_client.config.models import ProxySettings, ServerProfile
from openshift_client.output.formatter import output

app = typer.Typer(name="config", help="Manage broker profiles and client configuration.")
console = Console()


def _get_manager() -> ConfigManager:
    return ConfigManager()


@app.command()
@error_handler
def add(
    name: Annotated[str, typer.Argument(help="Profile name")],
    url: Annotated[str, typer.Option("--url", "-u", help="Broker URL")],
    rhlogin: Annotated[Optional[str], typer.Option("--rhlogin", "-l", help="Login")] = None,
    password: Annotated[Optional[str], typer.Option("--password", help="Password")] = None,
    token: Annotated[Optional[str], typer.Option("--token", "-t", help="Authorization token")] = None,
    proxy_host: Annotated[Optional[str], typer.Option("--proxy-host", help="HTTP proxy host")] = None,
    proxy_port: Annotated[Optional[int], typer.Option("--proxy-port", help="HTTP proxy port")] = None,
    no_verify_ssl: Annotated[bool, typer.Option("--no-verify-ssl", help="Disable SSL verification")] = False,
    set_default: Annotated[bool, typer.Option("--default", help="Set as default profile")] = False,
) -> None:
    """Add a broker profile."""
    mgr = _get_manager()
    profile = ServerProfile(
        name=name,
        url=url.rstrip("/"),
        username=rhlogin,
        password=password,
        token=token,
        verify_ssl=not no_verify_ssl,
        proxy=ProxySettings(host=proxy_host, port=proxy_port, enabled=proxy_host is not None),
    )
    mgr.add_profile(profile)
    if set_default:
        mgr.set_default(name)
    console.print(f"[green]Profile '{name}' added.[/]")


@app.command("list")
@error_handler
def list_profiles(
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """List all configured profiles."""
    mgr = _get_manager()
    profiles = mgr.config.profiles
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'openshift-client config add' to get started.[/]")
        return

    default = mgr.config.default_profile
    rows = []
    for name, p in profiles.items():
        auth = "token" if p.token else "basic" if p.username else "none"
        rows.append([name, p.url, auth, p.proxy.url or "", "*" if name == default else ""])

    output(
        {"profiles": [p.model_dump(exclude_none=True, exclude={"password", "token"}) for p in profiles.values()]},
        fmt,
        columns=["Name", "URL", "Auth", "Proxy", "Default"],
        rows=rows,
        title="Broker Profiles",
    )


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Profile name")],
    fmt: Annotated[str, typer.Option("--format", "-f", help="Output format")] = "table",
) -> None:
    """Show profile details with secrets masked."""
    mgr = _get_manager()
    profile = mgr.get_profile(name)
    if not profile:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    data = profile.model_dump(exclude_none=True, exclude={"proxy"})
    if "token" in data:
        data["token"] = data["token"][:8] + "..." if len(data["token"]) > 8 else "***"
    if "password" in data:
        data["password"] = "***"
    data["proxy"] = profile.proxy.url

    output(data, fmt, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(
    name: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default broker profile."""
    mgr = _get_manager()
    if mgr.set_default(name):
        console.print(f"[green]Default profile set to '{name}'.[/]")
    else:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Remove a broker profile."""
    mgr = _get_manager()
    if not mgr.get_profile(name):
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    if not force:
        if not Confirm.ask(f"Remove profile '{name}'?"):
            console.print("Cancelled.")
            return

    mgr.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
