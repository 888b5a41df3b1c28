"""Tests for request parameter validation."""

from __future__ import annotations

import pytest

from openshift_client.client.errors import RequestParameterError
from openshift_client.client.validation import validate_parameters
from openshift_client.models.link import Link, LinkParameter


def _link(*required: str, optional: tuple[str, ...] = (), types: dict | None = None) -> Link:
    types = types or {}
    return Link(
        href="domains",
        method="POST",
        required_params=tuple(
            LinkParameter(name=n, type=types.get(n, "string")) for n in required
        ),
        optional_params=tuple(LinkParameter(name=n) for n in optional),
    )


class TestValidateParameters:
    def test_all_present(self):
        validate_parameters(_link("name", "cartridge"), {"name": "app", "cartridge": "php-5.3"})

    def test_no_required_params(self):
        validate_parameters(_link(), None)

    def test_missing(self):
        with pytest.raises(RequestParameterError) as exc_info:
            validate_parameters(_link("id"), {})
        assert exc_info.value.parameter == "id"
        assert exc_info.value.reason == "missing"
        assert str(exc_info.value) == (
            'Requesting domains: required request parameter "id" is missing'
        )

    def test_missing_with_none_mapping(self):
        with pytest.raises(RequestParameterError, match="missing"):
            validate_parameters(_link("id"), None)

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_empty(self, value):
        with pytest.raises(RequestParameterError) as exc_info:
            validate_parameters(_link("id"), {"id": value})
        assert exc_info.value.reason == "empty"

    def test_false_boolean_is_not_empty(self):
        validate_parameters(_link("scale", types={"scale": "boolean"}), {"scale": False})

    def test_first_violation_in_declared_order(self):
        with pytest.raises(RequestParameterError) as exc_info:
            validate_parameters(_link("name", "cartridge"), {"cartridge": ""})
        assert exc_info.value.parameter == "name"
        assert exc_info.value.reason == "missing"

    def test_optional_not_enforced(self):
        validate_parameters(_link("name", optional=("scale",)), {"name": "app"})
