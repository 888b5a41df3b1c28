"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
import socket
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from rich.console import Console

if TYPE_CHECKING:
    from openshift_client.models.response import RestResponse

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class OpenShiftError(Exception):
    """Base exception for openshift-client."""

    exit_code: int = 1


class ServiceError(OpenShiftError):
    """Malformed local input (bad URL, unencodable parameters)."""

    def __init__(self, message: str, value: Any = None) -> None:
        self.value = value
        super().__init__(message)


class ConfigurationError(OpenShiftError):
    """Missing or invalid client configuration."""

    exit_code = 6


class RequestParameterError(OpenShiftError):
    """A required link parameter is missing or empty. Raised before any I/O."""

    exit_code = 7

    def __init__(self, href: str, parameter: str, reason: str) -> None:
        self.href = href
        self.parameter = parameter
        self.reason = reason
        super().__init__(
            f'Requesting {href}: required request parameter "{parameter}" is {reason}'
        )


class UnsupportedActionError(OpenShiftError):
    """The resource does not currently advertise the requested action."""

    def __init__(self, resource: str, action: str) -> None:
        self.resource = resource
        self.action = action
        super().__init__(
            f"Action {action} is not currently permitted on {resource}"
        )


class InvalidCredentialsError(OpenShiftError):
    """The broker rejected the credentials (401)."""

    exit_code = 3

    def __init__(self, href: str) -> None:
        self.href = href
        super().__init__(
            f"Authentication failed when requesting {href}. Check your credentials."
        )


class ResourceNotFoundError(OpenShiftError):
    """The requested resource does not exist (404)."""

    exit_code = 4

    def __init__(self, href: str) -> None:
        self.href = href
        super().__init__(f"Not found: {href}")


class ResourceLookupError(ResourceNotFoundError):
    """No listed resource matches the requested name. ``href`` is ``None``."""

    def __init__(self, description: str) -> None:
        self.href = None
        self.description = description
        OpenShiftError.__init__(self, f"No such {description}")


class EndpointError(OpenShiftError):
    """The broker or the application endpoint failed.

    ``response`` holds the error body parsed into a RestResponse, or ``None``
    when the failure carried no body.
    """

    exit_code = 2

    def __init__(
        self,
        href: str,
        message: str,
        *,
        response: RestResponse | None = None,
    ) -> None:
        self.href = href
        self.message = message
        self.response = response
        detail = message
        if response is not None and response.messages:
            detail = "; ".join(m.text for m in response.messages if m.text) or message
        super().__init__(f"Could not request {href}: {detail}")

    @property
    def is_unknown_host(self) -> bool:
        """True if a DNS resolution failure is nested in the cause chain."""
        seen: set[int] = set()
        exc: BaseException | None = self.__cause__
        while exc is not None and id(exc) not in seen:
            if isinstance(exc, socket.gaierror):
                return True
            seen.add(id(exc))
            exc = exc.__cause__ or exc.__context__
        return False


class EndpointTimeoutError(EndpointError):
    """The connection to the endpoint timed out."""

    def __init__(self, href: str) -> None:
        super().__init__(href, "connection timed out")


class ResponseParseError(OpenShiftError):
    """A response body could not be unmarshalled.

    When the body belonged to a failed request, ``href`` and
    ``transport_error`` identify that failure.
    """

    def __init__(
        self,
        message: str,
        body: str = "",
        *,
        href: str | None = None,
        transport_error: BaseException | None = None,
    ) -> None:
        self.body = body
        self.href = href
        self.transport_error = transport_error
        super().__init__(message)


class SSHOperationError(OpenShiftError):
    """An SSH operation for an application failed."""

    exit_code = 8

    def __init__(self, application: str, message: str) -> None:
        self.application = application
        super().__init__(message)


class PortParseError(OpenShiftError, ValueError):
    """A line of remote port listing output is malformed."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(f"Could not parse forwardable port from {line!r}")


class CartridgeAdditionError(OpenShiftError):
    """Adding several cartridges stopped at the first failure."""

    def __init__(
        self,
        added: Sequence[Any],
        failed: str,
        pending: Sequence[str],
    ) -> None:
        self.added = list(added)
        self.failed = failed
        self.pending = list(pending)
        super().__init__(
            f"Could not add cartridge {failed} "
            f"({len(self.added)} added, {len(self.pending)} not attempted)"
        )


def error_handler(func: F) -> F:
    """Decorator that catches OpenShiftError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except OpenShiftError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {exc}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
