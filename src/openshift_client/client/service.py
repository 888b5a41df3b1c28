"""Broker REST service: validates, dispatches and maps link requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol
from urllib.parse import urlsplit

from openshift_client import __version__
from openshift_client.client.errors import (
    EndpointError,
    EndpointTimeoutError,
    InvalidCredentialsError,
    ResourceNotFoundError,
    ResponseParseError,
    ServiceError,
)
from openshift_client.client.transport import (
    HttpClient,
    HttpTransportError,
    InvalidRequestError,
    NotFoundError,
    TransportTimeoutError,
    UnauthorizedError,
)
from openshift_client.client.validation import validate_parameters
from openshift_client.config.constants import DEFAULT_CLIENT_ID, SERVICE_PATH
from openshift_client.config.models import ServerProfile
from openshift_client.models.link import HttpMethod, Link
from openshift_client.models.response import RestResponse, parse_response

logger = logging.getLogger(__name__)


class HttpTransport(Protocol):
    """The four-verb contract the service needs from an HTTP client."""

    def get(self, url: str) -> str: ...

    def post(self, parameters: Mapping[str, Any] | None, url: str) -> str: ...

    def put(self, parameters: Mapping[str, Any] | None, url: str) -> str: ...

    def delete(self, url: str) -> str: ...

    def set_user_agent(self, user_agent: str) -> None: ...


def user_agent(client_id: str) -> str:
    return f"openshift-client/{__version__} ({client_id})"


class RestService:
    """Executes links against the broker REST API."""

    def __init__(
        self,
        base_url: str,
        client: HttpTransport,
        client_id: str = DEFAULT_CLIENT_ID,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.client = client
        client.set_user_agent(user_agent(client_id))

    @classmethod
    def from_profile(
        cls, profile: ServerProfile, client_id: str = DEFAULT_CLIENT_ID,
    ) -> RestService:
        return cls(profile.url, HttpClient.from_profile(profile), client_id)

    @property
    def service_url(self) -> str:
        return self.base_url + SERVICE_PATH

    @property
    def platform_url(self) -> str:
        return self.base_url

    def resolve_url(self, href: str | None) -> str:
        """Turn a link href into an absolute URL."""
        if not href:
            raise ServiceError("Invalid empty url", href)
        if urlsplit(href).scheme in ("http", "https"):
            return href
        if href.startswith(SERVICE_PATH):
            return self.base_url + href
        if href.startswith("/"):
            href = href[1:]
        return self.service_url + href

    def execute(
        self, link: Link, parameters: Mapping[str, Any] | None = None,
    ) -> RestResponse:
        """Validate *parameters*, request *link* and unmarshal the response."""
        validate_parameters(link, parameters)
        url = self.resolve_url(link.href)
        logger.debug("Executing %s %s (rel %s)", link.method.value, url, link.rel)
        body = self._dispatch(link.method, url, parameters, link.href)
        return parse_response(body)

    def request(
        self,
        url: str,
        method: HttpMethod = HttpMethod.GET,
        parameters: Mapping[str, Any] | None = None,
    ) -> str:
        """Request an absolute *url* and return the raw body."""
        return self._dispatch(method, url, parameters, url)

    def _dispatch(
        self,
        method: HttpMethod,
        url: str,
        parameters: Mapping[str, Any] | None,
        href: str,
    ) -> str:
        try:
            if method is HttpMethod.GET:
                return self.client.get(url)
            if method is HttpMethod.POST:
                return self.client.post(parameters or {}, url)
            if method is HttpMethod.PUT:
                return self.client.put(parameters or {}, url)
            if method is HttpMethod.DELETE:
                return self.client.delete(url)
        except InvalidRequestError as exc:
            raise ServiceError(f"Could not encode request to {href}: {exc}", exc.value) from exc
        except UnauthorizedError as exc:
            raise InvalidCredentialsError(href) from exc
        except NotFoundError as exc:
            raise ResourceNotFoundError(href) from exc
        except TransportTimeoutError as exc:
            raise EndpointTimeoutError(href) from exc
        except HttpTransportError as exc:
            try:
                response = self._parse_error_body(exc)
            except ResponseParseError as parse_exc:
                detail = str(parse_exc)
            else:
                raise EndpointError(href, str(exc), response=response) from exc
            # raised outside the inner handler so the transport failure stays the context
            raise ResponseParseError(
                f"Could not parse error response from {href} ({exc}): {detail}",
                exc.body,
                href=href,
                transport_error=exc,
            ) from exc
        raise ServiceError(f"Unexpected HTTP method {method}", method)

    @staticmethod
    def _parse_error_body(exc: HttpTransportError) -> RestResponse | None:
        if not exc.body or not exc.body.strip():
            return None
        return parse_response(exc.body)
