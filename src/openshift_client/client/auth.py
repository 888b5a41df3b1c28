"""Authentication strategies for the broker."""

from __future__ import annotations

from collections.abc import Generator

import httpx

from openshift_client.config.models import ServerProfile


class BearerTokenAuth(httpx.Auth):
    """Authenticate using an authorization token (Authorization: Bearer)."""

    def __init__(self, token: str) -> None:
        self.token = token

    def auth_flow(
        self, request: httpx.Request,
    ) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = f"Bearer {self.token}"
        yield request


class BasicAuth(httpx.BasicAuth):
    """HTTP Basic auth wrapper (login and password)."""


def resolve_auth(profile: ServerProfile) -> httpx.Auth | None:
    """Resolve authentication from a server profile."""
    if profile.token:
        return BearerTokenAuth(profile.token)
    if profile.username and profile.password:
        return BasicAuth(profile.username, profile.password)
    return None
