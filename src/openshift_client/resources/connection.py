"""Entry point to the broker: the API root and the user's domains."""

from __future__ import annotations

from typing import Any

from openshift_client.client.service import RestService
from openshift_client.config.constants import DEFAULT_CLIENT_ID
from openshift_client.config.models import ServerProfile
from openshift_client.models.dto import CartridgeDTO, DomainDTO, UserDTO
from openshift_client.models.link import HttpMethod, Link
from openshift_client.resources.actions import ConnectionAction
from openshift_client.resources.base import BaseResource, expect_data
from openshift_client.resources.cache import ChildCache, ReadOnlyList
from openshift_client.resources.cartridge import Cartridge, CartridgeType
from openshift_client.resources.domain import Domain

API_LINK = Link(rel="API", href="api", method=HttpMethod.GET)


class Connection(BaseResource[ConnectionAction]):
    """A connection to a broker, built from the links of its API root."""

    actions = ConnectionAction

    def __init__(self, service: RestService, links: dict[str, Link]) -> None:
        super().__init__(service, links)
        self._domains: ChildCache[Domain] = ChildCache(self._load_domains)
        self._cartridges: ChildCache[Cartridge] = ChildCache(self._load_cartridges)
        self._user: UserDTO | None = None

    @classmethod
    def connect(cls, service: RestService) -> Connection:
        """Fetch the API root links and return a connection using them."""
        response = service.execute(API_LINK)
        return cls(service, expect_data(response, dict))

    @classmethod
    def from_profile(
        cls, profile: ServerProfile, client_id: str = DEFAULT_CLIENT_ID,
    ) -> Connection:
        return cls.connect(RestService.from_profile(profile, client_id))

    def close(self) -> None:
        close = getattr(self._service.client, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> Connection:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def get_user(self) -> UserDTO:
        if self._user is None:
            response = self._execute(ConnectionAction.GET_USER)
            self._user = expect_data(response, UserDTO)
        return self._user

    # domains

    def _load_domains(self) -> list[Domain]:
        response = self._execute(ConnectionAction.LIST_DOMAINS)
        return [Domain(dto, self) for dto in expect_data(response, list, item_type=DomainDTO)]

    def get_domains(self) -> ReadOnlyList[Domain]:
        return self._domains.get()

    def get_domain(self, domain_id: str) -> Domain | None:
        for domain in self.get_domains():
            if domain.id == domain_id:
                return domain
        return None

    def has_domain(self, domain_id: str) -> bool:
        return self.get_domain(domain_id) is not None

    def get_default_domain(self) -> Domain | None:
        domains = self.get_domains()
        return domains[0] if domains else None

    def create_domain(self, domain_id: str) -> Domain:
        self._domains.get()
        response = self._execute(ConnectionAction.ADD_DOMAIN, id=domain_id)
        domain = Domain(expect_data(response, DomainDTO), self)
        self._domains.append(domain)
        return domain

    def _remove_domain(self, domain: Domain) -> None:
        self._domains.remove(domain)

    # cartridge catalogue

    def _load_cartridges(self) -> list[Cartridge]:
        response = self._execute(ConnectionAction.LIST_CARTRIDGES)
        return [
            Cartridge.from_dto(dto)
            for dto in expect_data(response, list, item_type=CartridgeDTO)
        ]

    def get_cartridges(self) -> ReadOnlyList[Cartridge]:
        return self._cartridges.get()

    def get_standalone_cartridges(self) -> list[Cartridge]:
        return [c for c in self.get_cartridges() if c.type is CartridgeType.STANDALONE]

    def get_embeddable_cartridges(self) -> list[Cartridge]:
        return [c for c in self.get_cartridges() if c.type is CartridgeType.EMBEDDED]

    def refresh(self) -> None:
        self._domains.reset()
        self._cartridges.reset()
        self._user = None

    def __str__(self) -> str:
        return self._service.base_url
