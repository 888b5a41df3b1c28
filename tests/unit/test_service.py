"""Tests for the broker REST service."""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from openshift_client import __version__
from openshift_client.client.errors import (
    EndpointError,
    EndpointTimeoutError,
    InvalidCredentialsError,
    RequestParameterError,
    ResourceNotFoundError,
    ResponseParseError,
    ServiceError,
)
from openshift_client.client.service import RestService, user_agent
from openshift_client.client.transport import (
    HttpClient,
    HttpTransportError,
    InvalidRequestError,
    NotFoundError,
    TransportTimeoutError,
    UnauthorizedError,
)
from openshift_client.config.models import ServerProfile
from openshift_client.models.link import Link, LinkParameter

ADD_DOMAIN = Link(
    rel="Create domain",
    href="https://broker.test/broker/rest/domains",
    method="POST",
    required_params=(LinkParameter(name="id"),),
)
LIST_DOMAINS = Link(rel="List domains", href="/broker/rest/domains", method="GET")


class TestResolveUrl:
    @pytest.fixture
    def svc(self, transport):
        return RestService("https://broker.test/", transport)

    def test_absolute_http(self, svc):
        assert svc.resolve_url("http://other.test/x") == "http://other.test/x"

    def test_absolute_https(self, svc):
        assert svc.resolve_url("https://other.test/x") == "https://other.test/x"

    def test_service_path(self, svc):
        assert svc.resolve_url("/broker/rest/domains") == "https://broker.test/broker/rest/domains"

    def test_relative(self, svc):
        assert svc.resolve_url("domains") == "https://broker.test/broker/rest/domains"

    def test_relative_with_leading_slash(self, svc):
        assert svc.resolve_url("/domains") == "https://broker.test/broker/rest/domains"

    def test_empty(self, svc):
        with pytest.raises(ServiceError):
            svc.resolve_url("")

    def test_urls(self, svc):
        assert svc.platform_url == "https://broker.test"
        assert svc.service_url == "https://broker.test/broker/rest/"


class TestExecute:
    def test_user_agent_is_set(self, transport):
        RestService("https://broker.test", transport, client_id="rhc")
        assert transport.user_agent == f"openshift-client/{__version__} (rhc)"
        assert user_agent("rhc") == transport.user_agent

    def test_validation_error_sends_nothing(self, service, transport):
        with pytest.raises(RequestParameterError):
            service.execute(ADD_DOMAIN, {})
        assert transport.calls == []

    def test_post_sends_parameters(self, service, transport, payloads):
        transport.add(
            "POST", ADD_DOMAIN.href, payloads.envelope("domain", payloads.domain("newdom")),
        )
        response = service.execute(ADD_DOMAIN, {"id": "newdom"})
        assert response.data.id == "newdom"
        assert transport.calls == [("POST", ADD_DOMAIN.href, {"id": "newdom"})]

    def test_get_resolves_service_path(self, service, transport, payloads):
        url = "https://broker.test/broker/rest/domains"
        transport.add("GET", url, payloads.envelope("domains", []))
        assert service.execute(LIST_DOMAINS).data == []
        assert transport.calls == [("GET", url, None)]

    def test_post_without_parameters_sends_empty_form(self, service, transport):
        link = Link(href="https://broker.test/broker/rest/x", method="POST")
        transport.add("POST", link.href, "")
        service.execute(link)
        assert transport.calls == [("POST", link.href, {})]

    def test_request_returns_raw_body(self, service, transport):
        transport.add("GET", "http://app.test/health", "1")
        assert service.request("http://app.test/health") == "1"


class TestErrorMapping:
    URL = "https://broker.test/broker/rest/domains"

    def _execute(self, service, transport, error):
        transport.add("GET", self.URL, error)
        return service.execute(LIST_DOMAINS)

    def test_unauthorized(self, service, transport):
        with pytest.raises(InvalidCredentialsError) as exc_info:
            self._execute(service, transport, UnauthorizedError("401", 401))
        assert isinstance(exc_info.value.__cause__, UnauthorizedError)

    def test_not_found(self, service, transport):
        with pytest.raises(ResourceNotFoundError):
            self._execute(service, transport, NotFoundError("404", 404))

    def test_timeout(self, service, transport):
        with pytest.raises(EndpointTimeoutError):
            self._execute(service, transport, TransportTimeoutError("timed out"))

    def test_invalid_request(self, service, transport):
        with pytest.raises(ServiceError) as exc_info:
            self._execute(service, transport, InvalidRequestError("bad url", "ht!tp://"))
        assert exc_info.value.value == "ht!tp://"

    def test_error_body_is_parsed(self, service, transport, payloads):
        body = json.dumps(
            {"type": None, "status": "conflict", "data": None,
             "messages": [{"text": "Namespace is already in use", "severity": "error"}]}
        )
        with pytest.raises(EndpointError) as exc_info:
            self._execute(service, transport, HttpTransportError("409 Conflict", 409, body))
        assert exc_info.value.response is not None
        assert exc_info.value.response.status == "conflict"
        assert "Namespace is already in use" in str(exc_info.value)

    def test_empty_error_body(self, service, transport):
        with pytest.raises(EndpointError) as exc_info:
            self._execute(service, transport, HttpTransportError("502 Bad Gateway", 502, ""))
        assert exc_info.value.response is None

    def test_unparseable_error_body(self, service, transport):
        failure = HttpTransportError("502 Bad Gateway", 502, "<html>")
        with pytest.raises(ResponseParseError) as exc_info:
            self._execute(service, transport, failure)
        exc = exc_info.value
        assert exc.__context__ is failure
        assert exc.__cause__ is failure
        assert exc.transport_error is failure
        assert exc.href == LIST_DOMAINS.href
        assert exc.body == "<html>"
        assert "502 Bad Gateway" in str(exc)

    def test_unparseable_error_body_over_http(self, payloads):
        profile = ServerProfile(
            name="t", url="https://broker.test", username="u", password="p",
        )
        with respx.mock:
            respx.get(self.URL).mock(return_value=httpx.Response(503, text="<html>down</html>"))
            service = RestService.from_profile(profile)
            try:
                with pytest.raises(ResponseParseError) as exc_info:
                    service.execute(LIST_DOMAINS)
            finally:
                service.client.close()
        transport_error = exc_info.value.transport_error
        assert isinstance(transport_error, HttpTransportError)
        assert transport_error.status_code == 503


class TestWithHttpClient:
    @respx.mock
    def test_execute_over_http(self, payloads):
        profile = ServerProfile(
            name="t", url="https://broker.test", username="u", password="p",
        )
        route = respx.get("https://broker.test/broker/rest/api").mock(
            return_value=httpx.Response(200, text=payloads.envelope("links", payloads.api_root()))
        )
        service = RestService.from_profile(profile)
        try:
            response = service.execute(Link(href="api"))
        finally:
            service.client.close()
        assert "LIST_DOMAINS" in response.data
        request = route.calls.last.request
        assert request.headers["Accept"] == "application/json"
        assert request.headers["User-Agent"].startswith("openshift-client/")
        assert request.headers["Authorization"].startswith("Basic ")

    @respx.mock
    def test_status_mapping_over_http(self):
        respx.get("https://broker.test/broker/rest/domains").mock(
            return_value=httpx.Response(401)
        )
        service = RestService("https://broker.test", HttpClient())
        with pytest.raises(InvalidCredentialsError):
            service.execute(LIST_DOMAINS)
