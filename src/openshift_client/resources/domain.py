"""Domains: namespaces that own applications."""

from __future__ import annotations

from typing import TYPE_CHECKING

from openshift_client.models.dto import ApplicationDTO, DomainDTO
from openshift_client.resources.actions import DomainAction
from openshift_client.resources.application import Application, application_from_dto
from openshift_client.resources.base import BaseResource, expect_data
from openshift_client.resources.cache import ChildCache, ReadOnlyList
from openshift_client.resources.cartridge import CartridgeRef, cartridge_name

if TYPE_CHECKING:
    from openshift_client.resources.connection import Connection


class Domain(BaseResource[DomainAction]):
    """A domain (namespace) of the user."""

    actions = DomainAction

    def __init__(self, dto: DomainDTO, connection: Connection) -> None:
        super().__init__(connection.service, dto.links)
        self.id = dto.id
        self.suffix = dto.suffix
        self.connection = connection
        self._applications: ChildCache[Application] = ChildCache(self._load_applications)

    def _load_applications(self) -> list[Application]:
        response = self._execute(DomainAction.LIST_APPLICATIONS)
        return [
            application_from_dto(dto, self)
            for dto in expect_data(response, list, item_type=ApplicationDTO)
        ]

    def get_applications(self) -> ReadOnlyList[Application]:
        return self._applications.get()

    def get_application(self, name: str) -> Application | None:
        for application in self.get_applications():
            if application.name == name:
                return application
        return None

    def has_application(self, name: str) -> bool:
        return self.get_application(name) is not None

    def create_application(
        self,
        name: str,
        cartridge: CartridgeRef,
        scale: bool = False,
        gear_profile: str | None = None,
    ) -> Application:
        """Create an application running *cartridge* and add it to this domain."""
        self._applications.get()
        response = self._execute(
            DomainAction.ADD_APPLICATION,
            name=name,
            cartridge=cartridge_name(cartridge),
            scale=scale,
            gear_profile=gear_profile,
        )
        application = application_from_dto(expect_data(response, ApplicationDTO), self)
        self._applications.append(application)
        return application

    def rename(self, new_id: str) -> None:
        response = self._execute(DomainAction.UPDATE, id=new_id)
        dto = expect_data(response, DomainDTO)
        self.id = dto.id
        self.suffix = dto.suffix
        if dto.links:
            self._update_links(dto.links)

    def destroy(self, force: bool = False) -> None:
        """Delete the domain; *force* also deletes its applications."""
        self._execute(DomainAction.DELETE, force=force)
        self.connection._remove_domain(self)

    def _remove_application(self, application: Application) -> None:
        self._applications.remove(application)

    def refresh(self) -> None:
        self._applications.reset()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Domain):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __str__(self) -> str:
        return self.id

    def __repr__(self) -> str:
        return f"Domain({self.id!r})"
