"""Action vocabularies: the link relations each resource type understands."""

from __future__ import annotations

from enum import Enum


class Action(str, Enum):
    """Base for per-resource action enums; values are broker link names."""


class ConnectionAction(Action):
    GET_USER = "GET_USER"
    LIST_DOMAINS = "LIST_DOMAINS"
    ADD_DOMAIN = "ADD_DOMAIN"
    LIST_CARTRIDGES = "LIST_CARTRIDGES"


class DomainAction(Action):
    GET = "GET"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LIST_APPLICATIONS = "LIST_APPLICATIONS"
    ADD_APPLICATION = "ADD_APPLICATION"


class ApplicationAction(Action):
    GET = "GET"
    DELETE = "DELETE"
    START = "START"
    STOP = "STOP"
    FORCE_STOP = "FORCE_STOP"
    RESTART = "RESTART"
    SCALE_UP = "SCALE_UP"
    SCALE_DOWN = "SCALE_DOWN"
    SHOW_PORT = "SHOW_PORT"
    EXPOSE_PORT = "EXPOSE_PORT"
    CONCEAL_PORT = "CONCEAL_PORT"
    ADD_ALIAS = "ADD_ALIAS"
    REMOVE_ALIAS = "REMOVE_ALIAS"
    ADD_CARTRIDGE = "ADD_CARTRIDGE"
    LIST_CARTRIDGES = "LIST_CARTRIDGES"
    GET_GEARS = "GET_GEARS"


class CartridgeAction(Action):
    GET = "GET"
    DELETE = "DELETE"
