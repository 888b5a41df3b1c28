"""Shared test fixtures."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import pytest

from openshift_client.client.service import RestService
from openshift_client.config.manager import ConfigManager
from openshift_client.config.models import ServerProfile
from openshift_client.logging_setup import LOGGER_NAME
from openshift_client.resources.application import Application
from openshift_client.resources.connection import Connection
from openshift_client.resources.domain import Domain
from openshift_client.ssh.session import SSHChannelError

BROKER_URL = "https://broker.test"
REST_URL = f"{BROKER_URL}/broker/rest"


class BrokerPayloads:
    """Builders for broker response bodies."""

    rest_url = REST_URL

    @staticmethod
    def link(
        rel: str,
        path: str,
        method: str = "GET",
        required: tuple[str, ...] = (),
        optional: tuple[str, ...] = (),
    ) -> dict:
        return {
            "rel": rel,
            "href": f"{REST_URL}/{path}",
            "method": method,
            "required_params": [
                {"name": n, "type": "string", "description": n, "valid_options": []}
                for n in required
            ],
            "optional_params": [{"name": n, "type": "string"} for n in optional],
        }

    @staticmethod
    def envelope(type_: str | None, data: Any, messages: list[dict] | None = None) -> str:
        return json.dumps(
            {"type": type_, "status": "ok", "data": data, "messages": messages or []}
        )

    def api_root(self) -> dict:
        return {
            "API": self.link("API entry point", "api"),
            "GET_USER": self.link("Get user", "user"),
            "LIST_DOMAINS": self.link("List domains", "domains"),
            "ADD_DOMAIN": self.link("Create domain", "domains", "POST", ("id",)),
            "LIST_CARTRIDGES": self.link("List cartridges", "cartridges"),
        }

    def domain(self, domain_id: str = "mydomain") -> dict:
        base = f"domains/{domain_id}"
        return {
            "id": domain_id,
            "suffix": "rhcloud.test",
            "links": {
                "GET": self.link("Get domain", base),
                "UPDATE": self.link("Update domain", base, "PUT", ("id",)),
                "DELETE": self.link("Delete domain", base, "DELETE", optional=("force",)),
                "LIST_APPLICATIONS": self.link("List applications", f"{base}/applications"),
                "ADD_APPLICATION": self.link(
                    "Create application",
                    f"{base}/applications",
                    "POST",
                    ("name", "cartridge"),
                    ("scale", "gear_profile"),
                ),
            },
        }

    def application(
        self,
        name: str = "myapp",
        domain_id: str = "mydomain",
        framework: str = "jbossas-7",
        aliases: list[str] | None = None,
    ) -> dict:
        base = f"domains/{domain_id}/applications/{name}"
        events = f"{base}/events"
        return {
            "name": name,
            "uuid": f"{name}-uuid",
            "creation_time": "2012-06-01T10:00:00Z",
            "app_url": f"http://{name}-{domain_id}.rhcloud.test/",
            "git_url": f"ssh://{name}-uuid@{name}-{domain_id}.rhcloud.test/~/git/{name}.git/",
            "health_check_path": "health",
            "framework": framework,
            "gear_profile": "small",
            "scalable": False,
            "aliases": aliases or [],
            "domain_id": domain_id,
            "links": {
                "GET": self.link("Get application", base),
                "DELETE": self.link("Delete application", base, "DELETE"),
                "START": self.link("Start application", events, "POST", ("event",)),
                "STOP": self.link("Stop application", events, "POST", ("event",)),
                "RESTART": self.link("Restart application", events, "POST", ("event",)),
                "ADD_ALIAS": self.link("Add alias", events, "POST", ("event", "alias")),
                "REMOVE_ALIAS": self.link("Remove alias", events, "POST", ("event", "alias")),
                "ADD_CARTRIDGE": self.link(
                    "Add cartridge", f"{base}/cartridges", "POST", ("name",),
                ),
                "LIST_CARTRIDGES": self.link("List cartridges", f"{base}/cartridges"),
                "GET_GEARS": self.link("Get gears", f"{base}/gears"),
            },
        }

    def cartridge(
        self, name: str, app: str = "myapp", domain_id: str = "mydomain", type_: str = "embedded",
    ) -> dict:
        base = f"domains/{domain_id}/applications/{app}/cartridges/{name}"
        return {
            "name": name,
            "type": type_,
            "links": {
                "GET": self.link("Get cartridge", base),
                "DELETE": self.link("Delete cartridge", base, "DELETE"),
            },
        }

    def gear(self, uuid: str = "gear-1") -> dict:
        return {
            "uuid": uuid,
            "git_url": None,
            "components": [
                {"name": "jbossas-7", "internal_port": 8080, "proxy_host": None, "proxy_port": None},
            ],
        }


class FakeTransport:
    """In-memory transport replaying queued bodies or exceptions per request.

    The last queued result for a request is repeated for further calls.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, str, dict | None]] = []
        self.user_agent: str | None = None
        self.closed = False
        self._results: dict[tuple[str, str], list[Any]] = {}

    def add(self, method: str, url: str, *results: Any) -> FakeTransport:
        self._results.setdefault((method, url), []).extend(results)
        return self

    def set(self, method: str, url: str, *results: Any) -> FakeTransport:
        self._results[(method, url)] = list(results)
        return self

    def set_user_agent(self, user_agent: str) -> None:
        self.user_agent = user_agent

    def close(self) -> None:
        self.closed = True

    def calls_to(self, method: str, url: str) -> list[dict | None]:
        return [p for m, u, p in self.calls if (m, u) == (method, url)]

    def _respond(self, method: str, url: str, parameters: Mapping[str, Any] | None) -> str:
        self.calls.append((method, url, None if parameters is None else dict(parameters)))
        queue = self._results.get((method, url))
        if not queue:
            raise AssertionError(f"Unexpected request {method} {url}")
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, BaseException):
            raise result
        return result

    def get(self, url: str) -> str:
        return self._respond("GET", url, None)

    def post(self, parameters: Mapping[str, Any] | None, url: str) -> str:
        return self._respond("POST", url, parameters)

    def put(self, parameters: Mapping[str, Any] | None, url: str) -> str:
        return self._respond("PUT", url, parameters)

    def delete(self, url: str) -> str:
        return self._respond("DELETE", url, None)


class FakeSession:
    """SSH session double: canned command output and recorded forwards."""

    def __init__(self, port_lines: list[str] | None = None) -> None:
        self.port_lines = port_lines if port_lines is not None else []
        self.connected = True
        self.commands: list[str] = []
        self.forwards: dict[tuple[str, int], tuple[str, int]] = {}
        self.disconnects = 0
        self.streams_closed = 0
        self.fail_on: str | None = None

    @property
    def is_connected(self) -> bool:
        return self.connected

    @contextmanager
    def exec_command(self, command: str) -> Iterator[Iterator[str]]:
        self.commands.append(command)
        try:
            yield iter(self.port_lines)
        finally:
            self.streams_closed += 1

    def start_forwarding(
        self, local_address: str, local_port: int, remote_address: str, remote_port: int,
    ) -> None:
        if self.fail_on == local_address:
            raise SSHChannelError(f"Address already in use: {local_address}:{local_port}")
        self.forwards[(local_address, local_port)] = (remote_address, remote_port)

    def stop_forwarding(self, local_address: str, local_port: int) -> None:
        self.forwards.pop((local_address, local_port), None)

    def is_forwarding(self, local_address: str, local_port: int) -> bool:
        return (local_address, local_port) in self.forwards

    def disconnect(self) -> None:
        self.disconnects += 1
        self.connected = False
        self.forwards.clear()


@pytest.fixture
def payloads() -> BrokerPayloads:
    return BrokerPayloads()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def service(transport: FakeTransport) -> RestService:
    return RestService(BROKER_URL, transport)


@pytest.fixture
def broker(transport: FakeTransport, payloads: BrokerPayloads) -> FakeTransport:
    """A transport serving one domain holding one application."""
    p = payloads
    transport.add("GET", f"{REST_URL}/api", p.envelope("links", p.api_root()))
    transport.add("GET", f"{REST_URL}/domains", p.envelope("domains", [p.domain()]))
    transport.add(
        "GET",
        f"{REST_URL}/domains/mydomain/applications",
        p.envelope("applications", [p.application()]),
    )
    transport.add(
        "GET",
        f"{REST_URL}/domains/mydomain/applications/myapp/cartridges",
        p.envelope("cartridges", [p.cartridge("mysql-5.1")]),
    )
    transport.add(
        "GET",
        f"{REST_URL}/domains/mydomain/applications/myapp/gears",
        p.envelope("gears", [p.gear()]),
    )
    return transport


@pytest.fixture
def connection(service: RestService, broker: FakeTransport) -> Connection:
    return Connection.connect(service)


@pytest.fixture
def domain(connection: Connection) -> Domain:
    found = connection.get_domain("mydomain")
    assert found is not None
    return found


@pytest.fixture
def application(domain: Domain) -> Application:
    found = domain.get_application("myapp")
    assert found is not None
    return found


@pytest.fixture
def session() -> FakeSession:
    return FakeSession(
        [
            "java -> 127.10.187.1:4447",
            "java -> 127.10.187.1:5445",
            "",
            "mysql -> 127.10.187.2:3306",
        ]
    )


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> ServerProfile:
    """Return a sample broker profile for testing."""
    return ServerProfile(
        name="test",
        url="https://broker.test",
        username="user@example.com",
        password="secret",
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the user's config file and environment."""
    monkeypatch.setattr(
        "openshift_client.config.manager.CONFIG_FILE", tmp_path / "user-config.toml",
    )
    for var in (
        "OPENSHIFT_SERVER_URL",
        "OPENSHIFT_USERNAME",
        "OPENSHIFT_PASSWORD",
        "OPENSHIFT_TOKEN",
        "OPENSHIFT_PROFILE",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Undo the CLI's logging setup so caplog sees library records."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
