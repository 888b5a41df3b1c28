"""SSH sessions to application gears, backed by paramiko."""

from __future__ import annotations

import logging
import select
import socketserver
import threading
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import TYPE_CHECKING, Any, Protocol
from urllib.parse import urlsplit

import paramiko

from openshift_client.client.errors import SSHOperationError

if TYPE_CHECKING:
    from openshift_client.resources.application import Application

logger = logging.getLogger(__name__)

_BUFFER_SIZE = 16384


class SSHChannelError(Exception):
    """Opening or using an SSH channel failed."""


class SSHSession(Protocol):
    """What an application needs from an SSH session."""

    @property
    def is_connected(self) -> bool: ...

    def exec_command(self, command: str) -> AbstractContextManager[Iterator[str]]: ...

    def start_forwarding(
        self, local_address: str, local_port: int, remote_address: str, remote_port: int,
    ) -> None: ...

    def stop_forwarding(self, local_address: str, local_port: int) -> None: ...

    def is_forwarding(self, local_address: str, local_port: int) -> bool: ...

    def disconnect(self) -> None: ...


class _ForwardHandler(socketserver.BaseRequestHandler):
    server: _ForwardServer

    def handle(self) -> None:
        try:
            channel = self.server.transport.open_channel(
                "direct-tcpip",
                (self.server.remote_address, self.server.remote_port),
                self.request.getpeername(),
            )
        except (paramiko.SSHException, OSError) as exc:
            logger.error(
                "Could not open tunnel to %s:%d: %s",
                self.server.remote_address, self.server.remote_port, exc,
            )
            return
        try:
            while True:
                readable, _, _ = select.select([self.request, channel], [], [])
                if self.request in readable:
                    data = self.request.recv(_BUFFER_SIZE)
                    if not data:
                        break
                    channel.sendall(data)
                if channel in readable:
                    data = channel.recv(_BUFFER_SIZE)
                    if not data:
                        break
                    self.request.sendall(data)
        except OSError as exc:
            logger.debug("Tunnel to %s:%d closed: %s",
                         self.server.remote_address, self.server.remote_port, exc)
        finally:
            channel.close()


class _ForwardServer(socketserver.ThreadingTCPServer):
    daemon_threads = True
    allow_reuse_address = True

    def __init__(
        self,
        local: tuple[str, int],
        transport: paramiko.Transport,
        remote_address: str,
        remote_port: int,
    ) -> None:
        self.transport = transport
        self.remote_address = remote_address
        self.remote_port = remote_port
        super().__init__(local, _ForwardHandler)


class ParamikoSession:
    """An SSH session on a connected paramiko client.

    Each forwarded port is served by a listener thread that opens a
    ``direct-tcpip`` channel per local connection.
    """

    def __init__(self, client: paramiko.SSHClient) -> None:
        self._client = client
        self._forwards: dict[tuple[str, int], _ForwardServer] = {}

    @property
    def client(self) -> paramiko.SSHClient:
        return self._client

    @property
    def is_connected(self) -> bool:
        transport = self._client.get_transport()
        return transport is not None and transport.is_active()

    def _transport(self) -> paramiko.Transport:
        transport = self._client.get_transport()
        if transport is None or not transport.is_active():
            raise SSHChannelError("SSH session is not connected")
        return transport

    @contextmanager
    def exec_command(self, command: str) -> Iterator[Iterator[str]]:
        """Run *command* and yield its stderr lines.

        The stream and the channel are closed when the block exits.
        """
        try:
            channel = self._transport().open_session()
        except (paramiko.SSHException, OSError) as exc:
            raise SSHChannelError(f"Could not open channel for {command!r}: {exc}") from exc
        try:
            try:
                channel.exec_command(command)
                stream = channel.makefile_stderr("r")
            except (paramiko.SSHException, OSError) as exc:
                raise SSHChannelError(f"Could not execute {command!r}: {exc}") from exc
            try:
                yield _read_lines(stream, command)
            finally:
                stream.close()
        finally:
            channel.close()

    def start_forwarding(
        self, local_address: str, local_port: int, remote_address: str, remote_port: int,
    ) -> None:
        key = (local_address, local_port)
        if key in self._forwards:
            return
        try:
            server = _ForwardServer(key, self._transport(), remote_address, remote_port)
        except OSError as exc:
            raise SSHChannelError(
                f"Could not listen on {local_address}:{local_port}: {exc}"
            ) from exc
        thread = threading.Thread(
            target=server.serve_forever,
            name=f"forward-{local_address}:{local_port}",
            daemon=True,
        )
        thread.start()
        self._forwards[key] = server
        logger.debug(
            "Forwarding %s:%d -> %s:%d", local_address, local_port, remote_address, remote_port,
        )

    def stop_forwarding(self, local_address: str, local_port: int) -> None:
        server = self._forwards.pop((local_address, local_port), None)
        if server is None:
            return
        server.shutdown()
        server.server_close()
        logger.debug("Stopped forwarding %s:%d", local_address, local_port)

    def is_forwarding(self, local_address: str, local_port: int) -> bool:
        return (local_address, local_port) in self._forwards

    def disconnect(self) -> None:
        for local_address, local_port in list(self._forwards):
            self.stop_forwarding(local_address, local_port)
        self._client.close()


def _read_lines(stream: Any, command: str) -> Iterator[str]:
    try:
        for line in stream:
            if isinstance(line, bytes):
                line = line.decode("utf-8", errors="replace")
            yield line.rstrip("\r\n")
    except (paramiko.SSHException, OSError) as exc:
        raise SSHChannelError(f"Could not read output of {command!r}: {exc}") from exc


def open_ssh_session(
    application: Application,
    *,
    key_filename: str | None = None,
    port: int = 22,
    timeout: float = 30.0,
    strict_host_key_checking: bool = False,
) -> ParamikoSession:
    """Connect to the gear behind *application*'s git URL.

    The git URL looks like ``ssh://<uuid>@<app>-<domain>.<suffix>/~/git/<app>.git/``.
    """
    parts = urlsplit(application.git_url or "")
    if not parts.hostname or not parts.username:
        raise SSHOperationError(
            application.name,
            f"Application '{application.name}' has no usable ssh url: {application.git_url!r}",
        )
    client = paramiko.SSHClient()
    client.load_system_host_keys()
    if strict_host_key_checking:
        client.set_missing_host_key_policy(paramiko.RejectPolicy())
    else:
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
    try:
        client.connect(
            parts.hostname,
            port=parts.port or port,
            username=parts.username,
            key_filename=key_filename,
            timeout=timeout,
        )
    except (paramiko.SSHException, OSError) as exc:
        client.close()
        raise SSHOperationError(
            application.name,
            f"Could not open SSH session for application '{application.name}': {exc}",
        ) from exc
    return ParamikoSession(client)
