"""Common behaviour of broker resources: capability set and link execution."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from openshift_client.client.errors import ResponseParseError, UnsupportedActionError
from openshift_client.models.link import Link
from openshift_client.models.response import RestResponse
from openshift_client.resources.actions import Action

if TYPE_CHECKING:
    from openshift_client.client.service import RestService

logger = logging.getLogger(__name__)

A = TypeVar("A", bound=Action)


def expect_data(
    response: RestResponse, expected: type, *, item_type: type | None = None,
) -> Any:
    """Return ``response.data`` if it has the expected shape."""
    data = response.data
    valid = isinstance(data, expected)
    if valid and item_type is not None:
        valid = all(isinstance(item, item_type) for item in data)
    if not valid:
        wanted = expected.__name__
        if item_type is not None:
            wanted += f" of {item_type.__name__}"
        raise ResponseParseError(
            f"Expected {wanted} in response of type {response.type!r}",
        )
    return data


class BaseResource(Generic[A]):
    """A local proxy for a broker resource.

    The resource only knows the actions the broker advertised in its last
    snapshot. Requesting any other action raises UnsupportedActionError
    without touching the network.
    """

    actions: ClassVar[type[Action]]

    def __init__(self, service: RestService, links: Mapping[str, Link]) -> None:
        self._service = service
        self._links: dict[A, Link] = {}
        self._update_links(links)

    @property
    def service(self) -> RestService:
        return self._service

    @property
    def capabilities(self) -> frozenset[A]:
        return frozenset(self._links)

    def can(self, action: A) -> bool:
        return action in self._links

    def get_link(self, action: A) -> Link:
        link = self._links.get(action)
        if link is None:
            raise UnsupportedActionError(str(self), action.value)
        return link

    def _update_links(self, links: Mapping[str, Link]) -> None:
        capabilities: dict[A, Link] = {}
        for rel, link in links.items():
            try:
                action = self.actions(rel)
            except ValueError:
                logger.debug("Ignoring unknown link %s on %s", rel, type(self).__name__)
                continue
            capabilities[action] = link  # type: ignore[index]
        self._links = capabilities

    def _execute(self, action: A, **parameters: Any) -> RestResponse:
        link = self.get_link(action)
        return self._service.execute(link, parameters or None)

    def refresh(self) -> None:
        """Forget cached children; the next read reloads them."""
