"""Link and link parameter models: the actions a resource advertises."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class LinkParameterType(str, Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    ARRAY = "array"


class LinkParameter(BaseModel):
    """A parameter declared by a link (required or optional)."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: LinkParameterType = LinkParameterType.STRING
    description: str | None = None
    valid_options: tuple[Any, ...] = ()
    default_value: Any = None

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v

    @field_validator("valid_options", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return () if v is None else v


class Link(BaseModel):
    """A server-advertised action: method, target and parameter contract."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rel: str | None = None
    href: str
    method: HttpMethod = Field(default=HttpMethod.GET)
    required_params: tuple[LinkParameter, ...] = ()
    optional_params: tuple[LinkParameter, ...] = ()

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("required_params", "optional_params", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return () if v is None else v
