"""Cartridges: catalogue entries and cartridges embedded in an application."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Union

from pydantic import BaseModel, ConfigDict

from openshift_client.models.dto import CartridgeDTO
from openshift_client.resources.actions import CartridgeAction
from openshift_client.resources.base import BaseResource

if TYPE_CHECKING:
    from openshift_client.resources.application import Application

JENKINS_PREFIX = "jenkins-"


class CartridgeType(str, Enum):
    STANDALONE = "standalone"
    EMBEDDED = "embedded"


class Cartridge(BaseModel):
    """A cartridge known to the broker, referenced by name."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: CartridgeType | None = None
    display_name: str | None = None

    @classmethod
    def from_dto(cls, dto: CartridgeDTO) -> Cartridge:
        try:
            ctype = CartridgeType(dto.type) if dto.type else None
        except ValueError:
            ctype = None
        return cls(name=dto.name, type=ctype, display_name=dto.display_name)

    @property
    def is_jenkins(self) -> bool:
        return self.name.startswith(JENKINS_PREFIX)

    def __str__(self) -> str:
        return self.name


CartridgeRef = Union[str, Cartridge]


def cartridge_name(cartridge: CartridgeRef) -> str:
    return cartridge if isinstance(cartridge, str) else cartridge.name


class EmbeddedCartridge(BaseResource[CartridgeAction]):
    """A cartridge added to an application."""

    actions = CartridgeAction

    def __init__(self, dto: CartridgeDTO, application: Application) -> None:
        super().__init__(application.service, dto.links)
        self.name = dto.name
        self.type = dto.type
        self.application = application

    def destroy(self) -> None:
        """Remove the cartridge from its application."""
        self._execute(CartridgeAction.DELETE)
        self.application._remove_embedded_cartridge(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EmbeddedCartridge):
            return NotImplemented
        return self.name == other.name and self.application is other.application

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"EmbeddedCartridge({self.name!r})"
