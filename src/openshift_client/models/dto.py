"""Pydantic DTOs for broker REST payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from openshift_client.models.link import Link


class ResourceDTO(BaseModel):
    """Common base: every resource payload carries its links keyed by action."""

    links: dict[str, Link] = Field(default_factory=dict)

    @field_validator("links", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class UserDTO(ResourceDTO):
    login: str
    max_gears: int | None = None
    consumed_gears: int | None = None


class DomainDTO(ResourceDTO):
    id: str
    suffix: str | None = None


class ApplicationDTO(ResourceDTO):
    name: str
    uuid: str | None = None
    creation_time: str | None = None
    app_url: str | None = None
    git_url: str | None = None
    health_check_path: str | None = None
    framework: str | None = None
    gear_profile: str | None = None
    scalable: bool = False
    aliases: list[str] = Field(default_factory=list)
    domain_id: str | None = None

    @field_validator("aliases", mode="before")
    @classmethod
    def none_to_list(cls, v: Any) -> Any:
        return [] if v is None else v


class CartridgeDTO(ResourceDTO):
    name: str
    type: str | None = None
    display_name: str | None = None
    description: str | None = None


class GearComponentDTO(BaseModel):
    name: str
    internal_port: str | None = None
    proxy_host: str | None = None
    proxy_port: str | None = None

    @field_validator("internal_port", "proxy_port", mode="before")
    @classmethod
    def port_to_str(cls, v: Any) -> Any:
        if isinstance(v, int):
            return str(v)
        return v


class GearDTO(BaseModel):
    uuid: str
    git_url: str | None = None
    components: list[GearComponentDTO] = Field(default_factory=list)
