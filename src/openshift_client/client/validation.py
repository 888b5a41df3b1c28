"""Pre-flight validation of request parameters against a link's contract."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from openshift_client.client.errors import RequestParameterError
from openshift_client.models.link import Link, LinkParameter, LinkParameterType

logger = logging.getLogger(__name__)


def _is_empty(parameter: LinkParameter, value: Any) -> bool:
    if value is None:
        return True
    return (
        parameter.type is LinkParameterType.STRING
        and isinstance(value, str)
        and not value.strip()
    )


def validate_parameters(link: Link, parameters: Mapping[str, Any] | None) -> None:
    """Check *parameters* against the required parameters of *link*.

    Required parameters are checked in declared order and the first
    violation is raised. Optional parameters are not enforced.
    """
    parameters = parameters or {}
    for required in link.required_params:
        if required.name not in parameters:
            raise RequestParameterError(link.href, required.name, "missing")
        if _is_empty(required, parameters[required.name]):
            raise RequestParameterError(link.href, required.name, "empty")
    # TODO: check values against valid_options once the broker reports them consistently
    for optional in link.optional_params:
        if optional.name in parameters:
            logger.debug("Optional parameter %s passed to %s unchecked", optional.name, link.href)
