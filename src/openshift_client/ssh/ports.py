"""Forwardable ports and the parser for the remote port listing."""

from __future__ import annotations

from typing import TYPE_CHECKING

from openshift_client.client.errors import PortParseError

if TYPE_CHECKING:
    from openshift_client.resources.application import Application
    from openshift_client.ssh.session import SSHSession

LIST_PORTS_COMMAND = "rhc-list-ports"


class ForwardablePort:
    """A remote endpoint of an application that can be tunneled over SSH.

    ``remote_port`` is held as an ``int`` although the port listing prints
    it as text; ``remote_endpoint`` gives the listed ``ip:port`` form. The
    local side defaults to the remote address and port; on Linux any
    127.x.y.z address is bound to the loopback interface.
    """

    def __init__(
        self,
        application: Application,
        name: str,
        remote_address: str,
        remote_port: int,
        local_address: str | None = None,
        local_port: int | None = None,
    ) -> None:
        self.application = application
        self.name = name
        self.remote_address = remote_address
        self.remote_port = remote_port
        self.local_address = local_address or remote_address
        self.local_port = local_port if local_port is not None else remote_port

    @property
    def remote_endpoint(self) -> str:
        return f"{self.remote_address}:{self.remote_port}"

    def start(self, session: SSHSession) -> None:
        session.start_forwarding(
            self.local_address, self.local_port, self.remote_address, self.remote_port,
        )

    def stop(self, session: SSHSession) -> None:
        session.stop_forwarding(self.local_address, self.local_port)

    def is_started(self, session: SSHSession) -> bool:
        return session.is_forwarding(self.local_address, self.local_port)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ForwardablePort):
            return NotImplemented
        return (self.name, self.remote_address, self.remote_port) == (
            other.name, other.remote_address, other.remote_port,
        )

    def __hash__(self) -> int:
        return hash((self.name, self.remote_address, self.remote_port))

    def __repr__(self) -> str:
        return f"ForwardablePort({self.name!r}, {self.remote_endpoint})"


def parse_port_line(application: Application, line: str) -> ForwardablePort:
    """Parse one line of ``rhc-list-ports`` output.

    Format: ``<name> -> <ip>:<port>``, e.g. ``java -> 127.10.187.1:4447``.
    """
    parts = line.split("->")
    if len(parts) != 2:
        raise PortParseError(line)
    name, address = parts[0].strip(), parts[1].strip()
    remote_address, colon, port = address.rpartition(":")
    if (
        not colon
        or not name
        or not remote_address
        or any(c.isspace() for c in remote_address)
        or not port.isdigit()
    ):
        raise PortParseError(line)
    return ForwardablePort(application, name, remote_address, int(port))
