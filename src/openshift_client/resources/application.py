"""Applications: lifecycle actions, child collections and port forwarding."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING

from openshift_client.client.errors import (
    CartridgeAdditionError,
    EndpointError,
    EndpointTimeoutError,
    OpenShiftError,
    SSHOperationError,
)
from openshift_client.models.dto import ApplicationDTO, CartridgeDTO, GearDTO
from openshift_client.resources.actions import ApplicationAction
from openshift_client.resources.base import BaseResource, expect_data
from openshift_client.resources.cache import ChildCache, ReadOnlyList
from openshift_client.resources.cartridge import (
    Cartridge,
    CartridgeRef,
    EmbeddedCartridge,
    cartridge_name,
)
from openshift_client.resources.gear import Gear
from openshift_client.ssh.ports import LIST_PORTS_COMMAND, ForwardablePort, parse_port_line
from openshift_client.ssh.session import SSHChannelError, SSHSession

if TYPE_CHECKING:
    from openshift_client.resources.domain import Domain

logger = logging.getLogger(__name__)

POLL_INTERVAL = 2.048


def _parse_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable creation time %r", value)
        return None


class Application(BaseResource[ApplicationAction]):
    """An application in a domain."""

    actions = ApplicationAction
    health_check_success_response = "1"
    poll_interval = POLL_INTERVAL

    def __init__(self, dto: ApplicationDTO, domain: Domain) -> None:
        super().__init__(domain.service, dto.links)
        self.name = dto.name
        self.uuid = dto.uuid
        self.creation_time = _parse_time(dto.creation_time)
        self.cartridge = Cartridge(name=dto.framework) if dto.framework else None
        self.application_url = dto.app_url or ""
        self.git_url = dto.git_url
        self.health_check_path = dto.health_check_path or ""
        self.gear_profile = dto.gear_profile
        self.scalable = dto.scalable
        self.domain = domain
        self._aliases = list(dto.aliases)
        self._embedded_cartridges: ChildCache[EmbeddedCartridge] = ChildCache(
            self._load_embedded_cartridges,
        )
        self._gears: ChildCache[Gear] = ChildCache(self._load_gears)
        self._ports: ChildCache[ForwardablePort] = ChildCache(self._list_ports)
        self._ssh_session: SSHSession | None = None

    @property
    def health_check_url(self) -> str:
        return self.application_url + self.health_check_path

    # lifecycle

    def destroy(self) -> None:
        self._execute(ApplicationAction.DELETE)
        self.domain._remove_application(self)

    def start(self) -> None:
        self._execute(ApplicationAction.START, event="start")

    def stop(self, force: bool = False) -> None:
        if force:
            self._execute(ApplicationAction.FORCE_STOP, event="force-stop")
        else:
            self._execute(ApplicationAction.STOP, event="stop")

    def restart(self) -> None:
        self._execute(ApplicationAction.RESTART, event="restart")

    def scale_up(self) -> None:
        self._execute(ApplicationAction.SCALE_UP, event="scale-up")

    def scale_down(self) -> None:
        self._execute(ApplicationAction.SCALE_DOWN, event="scale-down")

    def expose_port(self) -> None:
        self._execute(ApplicationAction.EXPOSE_PORT, event="expose-port")

    def conceal_port(self) -> None:
        self._execute(ApplicationAction.CONCEAL_PORT, event="conceal-port")

    def show_port(self) -> None:
        self._execute(ApplicationAction.SHOW_PORT, event="show-port")

    # aliases

    @property
    def aliases(self) -> tuple[str, ...]:
        return tuple(self._aliases)

    def has_alias(self, alias: str) -> bool:
        return alias in self._aliases

    def add_alias(self, alias: str) -> None:
        response = self._execute(ApplicationAction.ADD_ALIAS, event="add-alias", alias=alias)
        self._update_aliases(expect_data(response, ApplicationDTO))

    def remove_alias(self, alias: str) -> None:
        response = self._execute(
            ApplicationAction.REMOVE_ALIAS, event="remove-alias", alias=alias,
        )
        self._update_aliases(expect_data(response, ApplicationDTO))

    def _update_aliases(self, dto: ApplicationDTO) -> None:
        self._aliases = list(dto.aliases)

    # embedded cartridges

    def _load_embedded_cartridges(self) -> list[EmbeddedCartridge]:
        response = self._execute(ApplicationAction.LIST_CARTRIDGES)
        return [
            EmbeddedCartridge(dto, self)
            for dto in expect_data(response, list, item_type=CartridgeDTO)
        ]

    def get_embedded_cartridges(self) -> ReadOnlyList[EmbeddedCartridge]:
        return self._embedded_cartridges.get()

    def get_embedded_cartridge(self, cartridge: CartridgeRef) -> EmbeddedCartridge | None:
        name = cartridge_name(cartridge)
        for embedded in self.get_embedded_cartridges():
            if embedded.name == name:
                return embedded
        return None

    def has_embedded_cartridge(self, cartridge: CartridgeRef) -> bool:
        return self.get_embedded_cartridge(cartridge) is not None

    def add_embeddable_cartridge(self, cartridge: CartridgeRef) -> EmbeddedCartridge:
        """Add *cartridge* and return the embedded cartridge the broker created."""
        # load first so the new cartridge is appended exactly once
        self._embedded_cartridges.get()
        response = self._execute(ApplicationAction.ADD_CARTRIDGE, name=cartridge_name(cartridge))
        embedded = EmbeddedCartridge(expect_data(response, CartridgeDTO), self)
        self._embedded_cartridges.append(embedded)
        return embedded

    def add_embeddable_cartridges(
        self, cartridges: Iterable[CartridgeRef],
    ) -> list[EmbeddedCartridge]:
        """Add *cartridges* in order.

        Stops at the first failure and raises CartridgeAdditionError holding
        the cartridges added so far and the names not attempted.
        """
        names = [cartridge_name(c) for c in cartridges]
        added: list[EmbeddedCartridge] = []
        for index, name in enumerate(names):
            try:
                added.append(self.add_embeddable_cartridge(name))
            except OpenShiftError as exc:
                raise CartridgeAdditionError(added, name, names[index + 1:]) from exc
        return added

    def _remove_embedded_cartridge(self, cartridge: EmbeddedCartridge) -> None:
        self._embedded_cartridges.remove(cartridge)

    # gears

    def _load_gears(self) -> list[Gear]:
        response = self._execute(ApplicationAction.GET_GEARS)
        return [Gear(dto, self) for dto in expect_data(response, list, item_type=GearDTO)]

    def get_gears(self) -> ReadOnlyList[Gear]:
        return self._gears.get()

    def refresh(self) -> None:
        self._embedded_cartridges.reset()
        self._gears.reset()
        self._ports.reset()

    # health check

    def wait_for_accessible(
        self, timeout: float, interrupt: threading.Event | None = None,
    ) -> bool:
        """Poll the health check url until it answers the success marker.

        Returns False when *timeout* seconds elapse first or *interrupt* is
        set. Endpoint and lookup failures are retried; a connection timeout
        aborts the wait.
        """
        marker = self.health_check_success_response
        url = self.health_check_url
        deadline = time.monotonic() + timeout
        while True:
            try:
                body = self._service.request(url)
            except EndpointTimeoutError:
                raise
            except OpenShiftError as exc:
                if isinstance(exc, EndpointError) and exc.is_unknown_host:
                    logger.debug("Host of %s does not resolve yet, retrying", url)
                else:
                    logger.debug("%s not accessible yet: %s", url, exc)
            else:
                if body.startswith(marker):
                    return True
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                return False
            delay = min(self.poll_interval, remaining)
            if interrupt is not None:
                if interrupt.wait(delay):
                    return False
            else:
                time.sleep(delay)

    # ssh

    @property
    def ssh_session(self) -> SSHSession | None:
        return self._ssh_session

    def set_ssh_session(self, session: SSHSession | None) -> None:
        """Use *session* for SSH operations. A previous session stays open."""
        self._ssh_session = session

    def has_ssh_session(self) -> bool:
        return self._ssh_session is not None and self._ssh_session.is_connected

    def _require_session(self, operation: str) -> SSHSession:
        session = self._ssh_session
        if session is None or not session.is_connected:
            raise SSHOperationError(
                self.name,
                f"SSH session for application '{self.name}' is closed or not set. "
                f"Cannot {operation}",
            )
        return session

    def _list_ports(self) -> list[ForwardablePort]:
        session = self._require_session("list forwardable ports")
        ports: list[ForwardablePort] = []
        try:
            with session.exec_command(LIST_PORTS_COMMAND) as lines:
                for line in lines:
                    if line.strip():
                        ports.append(parse_port_line(self, line))
        except SSHChannelError as exc:
            raise SSHOperationError(
                self.name,
                f"Failed to list forwardable ports for application '{self.name}': {exc}",
            ) from exc
        return ports

    def get_forwardable_ports(self) -> ReadOnlyList[ForwardablePort]:
        return self._ports.get()

    def refresh_forwardable_ports(self) -> ReadOnlyList[ForwardablePort]:
        return self._ports.replace(self._list_ports())

    def start_port_forwarding(self) -> ReadOnlyList[ForwardablePort]:
        session = self._require_session("start port forwarding")
        ports = self.get_forwardable_ports()
        for port in ports:
            try:
                port.start(session)
            except SSHChannelError as exc:
                raise SSHOperationError(
                    self.name,
                    f"Failed to forward port {port.name} for application '{self.name}': {exc}",
                ) from exc
        return ports

    def stop_port_forwarding(self) -> ReadOnlyList[ForwardablePort]:
        """Stop every forwarded port and disconnect the session."""
        session = self._ssh_session
        if session is None:
            raise SSHOperationError(
                self.name,
                f"No SSH session for application '{self.name}'. Cannot stop port forwarding",
            )
        ports = self._ports.get() if self._ports.is_loaded else ReadOnlyList([])
        try:
            for port in ports:
                port.stop(session)
        except SSHChannelError as exc:
            raise SSHOperationError(
                self.name,
                f"Failed to stop port forwarding for application '{self.name}': {exc}",
            ) from exc
        finally:
            session.disconnect()
        return ports

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Application):
            return NotImplemented
        return self.name == other.name and self.domain is other.domain

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class JenkinsApplication(Application):
    """A Jenkins server application; healthy once its login page renders."""

    health_check_success_response = "<html>"

    @property
    def health_check_url(self) -> str:
        return self.application_url + "login?from=%2F"


def application_from_dto(dto: ApplicationDTO, domain: Domain) -> Application:
    if dto.framework and Cartridge(name=dto.framework).is_jenkins:
        return JenkinsApplication(dto, domain)
    return Application(dto, domain)
