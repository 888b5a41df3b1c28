"""Gears an application runs on and the components they host."""

from __future__ import annotations

from typing import TYPE_CHECKING

from openshift_client.models.dto import GearComponentDTO, GearDTO

if TYPE_CHECKING:
    from openshift_client.resources.application import Application


class GearComponent:
    """A cartridge component running on a gear."""

    def __init__(self, dto: GearComponentDTO) -> None:
        self.name = dto.name
        self.internal_port = dto.internal_port
        self.proxy_host = dto.proxy_host
        self.proxy_port = dto.proxy_port

    def __repr__(self) -> str:
        return f"GearComponent({self.name!r})"


class Gear:
    """A compute unit of an application."""

    def __init__(self, dto: GearDTO, application: Application) -> None:
        self.uuid = dto.uuid
        self.git_url = dto.git_url
        self.components = tuple(GearComponent(c) for c in dto.components)
        self.application = application

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Gear):
            return NotImplemented
        return self.uuid == other.uuid

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __repr__(self) -> str:
        return f"Gear({self.uuid!r})"
