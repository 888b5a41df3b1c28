"""Pydantic data models for the OpenShift broker REST API."""

from openshift_client.models.dto import (
    ApplicationDTO,
    CartridgeDTO,
    DomainDTO,
    GearComponentDTO,
    GearDTO,
    UserDTO,
)
from openshift_client.models.link import HttpMethod, Link, LinkParameter, LinkParameterType
from openshift_client.models.response import Message, RestResponse, parse_response

__all__ = [
    "ApplicationDTO",
    "CartridgeDTO",
    "DomainDTO",
    "GearComponentDTO",
    "GearDTO",
    "HttpMethod",
    "Link",
    "LinkParameter",
    "LinkParameterType",
    "Message",
    "RestResponse",
    "UserDTO",
    "parse_response",
]
