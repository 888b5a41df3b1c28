"""Local proxies for broker resources."""

from openshift_client.resources.application import Application, JenkinsApplication
from openshift_client.resources.cartridge import Cartridge, CartridgeType, EmbeddedCartridge
from openshift_client.resources.connection import Connection
from openshift_client.resources.domain import Domain
from openshift_client.resources.gear import Gear, GearComponent

__all__ = [
    "Application",
    "Cartridge",
    "CartridgeType",
    "Connection",
    "Domain",
    "EmbeddedCartridge",
    "Gear",
    "GearComponent",
    "JenkinsApplication",
]
