"""HTTP transport: the four-verb client the broker service talks through."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from openshift_client.client.auth import resolve_auth
from openshift_client.config.models import ServerProfile

logger = logging.getLogger(__name__)


class HttpTransportError(Exception):
    """A request failed at the transport or protocol level."""

    def __init__(self, message: str, status_code: int | None = None, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class UnauthorizedError(HttpTransportError):
    """HTTP 401."""


class NotFoundError(HttpTransportError):
    """HTTP 404."""


class TransportTimeoutError(HttpTransportError):
    """The connection or read timed out."""


class InvalidRequestError(HttpTransportError):
    """The URL or the parameters could not be turned into a request."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(message)


def encode_parameters(parameters: Mapping[str, Any] | None) -> dict[str, list[str]]:
    """Encode request parameters as form fields.

    Booleans become ``true``/``false``, sequences repeat the key and ``None``
    values are left out.
    """
    fields: dict[str, list[str]] = {}
    for name, value in (parameters or {}).items():
        if value is None:
            continue
        values = value if isinstance(value, (list, tuple)) else [value]
        encoded = fields.setdefault(name, [])
        for item in values:
            if isinstance(item, bool):
                encoded.append("true" if item else "false")
            elif isinstance(item, (str, int, float)):
                encoded.append(str(item))
            else:
                raise InvalidRequestError(
                    f"Could not encode parameter {name!r} of type {type(item).__name__}",
                    item,
                )
    return fields


class HttpClient:
    """Synchronous HTTP client returning raw response text."""

    def __init__(
        self,
        *,
        auth: httpx.Auth | None = None,
        verify: bool = True,
        timeout: float = 60.0,
        proxy: str | None = None,
        user_agent: str | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if user_agent:
            headers["User-Agent"] = user_agent
        self._client = httpx.Client(
            auth=auth,
            verify=verify,
            timeout=timeout,
            proxy=proxy,
            headers=headers,
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_profile(cls, profile: ServerProfile) -> HttpClient:
        return cls(
            auth=resolve_auth(profile),
            verify=profile.verify_ssl,
            timeout=profile.timeout,
            proxy=profile.proxy.url,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    @property
    def user_agent(self) -> str | None:
        return self._client.headers.get("User-Agent")

    def set_user_agent(self, user_agent: str) -> None:
        self._client.headers["User-Agent"] = user_agent

    def get(self, url: str) -> str:
        return self.request("GET", url)

    def post(self, parameters: Mapping[str, Any] | None, url: str) -> str:
        return self.request("POST", url, parameters)

    def put(self, parameters: Mapping[str, Any] | None, url: str) -> str:
        return self.request("PUT", url, parameters)

    def delete(self, url: str) -> str:
        return self.request("DELETE", url)

    def request(
        self,
        method: str,
        url: str,
        parameters: Mapping[str, Any] | None = None,
    ) -> str:
        data = encode_parameters(parameters) if parameters is not None else None
        logger.debug("%s %s", method, url)
        try:
            response = self._client.request(method, url, data=data)
        except httpx.TimeoutException as exc:
            raise TransportTimeoutError(f"Request to {url} timed out: {exc}") from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise InvalidRequestError(f"Invalid URL {url}: {exc}", url) from exc
        except httpx.HTTPError as exc:
            raise HttpTransportError(f"Could not request {url}: {exc}") from exc
        return self._handle_response(response)

    def _handle_response(self, response: httpx.Response) -> str:
        if response.is_success:
            return response.text
        status = response.status_code
        message = f"{status} {response.reason_phrase}"
        if status == 401:
            raise UnauthorizedError(message, status, response.text)
        if status == 404:
            raise NotFoundError(message, status, response.text)
        raise HttpTransportError(message, status, response.text)
