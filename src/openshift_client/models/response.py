"""Broker response envelope and the unmarshaller that builds DTOs from it."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from openshift_client.client.errors import ResponseParseError
from openshift_client.models.dto import (
    ApplicationDTO,
    CartridgeDTO,
    DomainDTO,
    GearDTO,
    UserDTO,
)
from openshift_client.models.link import Link


class Message(BaseModel):
    """A message attached to a broker response."""

    text: str | None = None
    severity: str | None = None
    field: str | None = None
    exit_code: int | None = None


class RestResponse(BaseModel):
    """Broker response envelope.

    Format: ``{"type": ..., "status": ..., "data": ..., "messages": [...]}``.
    ``data`` holds the DTO (or list of DTOs) matching ``type``.
    """

    type: str | None = None
    status: str | None = None
    data: Any = None
    messages: list[Message] = Field(default_factory=list)
    version: str | None = None


_DATA_ADAPTERS: dict[str, TypeAdapter[Any]] = {
    "links": TypeAdapter(dict[str, Link]),
    "user": TypeAdapter(UserDTO),
    "domains": TypeAdapter(list[DomainDTO]),
    "domain": TypeAdapter(DomainDTO),
    "applications": TypeAdapter(list[ApplicationDTO]),
    "application": TypeAdapter(ApplicationDTO),
    "cartridges": TypeAdapter(list[CartridgeDTO]),
    "cartridge": TypeAdapter(CartridgeDTO),
    "gears": TypeAdapter(list[GearDTO]),
}


def parse_response(text: str) -> RestResponse:
    """Unmarshal a raw broker response body.

    An empty body yields an empty envelope. Unknown types keep their raw
    ``data``.
    """
    if not text or not text.strip():
        return RestResponse()
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ResponseParseError(f"Response is not valid JSON: {exc}", text) from exc
    if not isinstance(raw, dict):
        raise ResponseParseError("Response is not a JSON object", text)
    try:
        response = RestResponse.model_validate(
            {k: v for k, v in raw.items() if k != "data"}
        )
        adapter = _DATA_ADAPTERS.get(response.type or "")
        data = raw.get("data")
        if adapter is not None and data is not None:
            data = adapter.validate_python(data)
    except ValidationError as exc:
        raise ResponseParseError(f"Unexpected response payload: {exc}", text) from exc
    return response.model_copy(update={"data": data})
