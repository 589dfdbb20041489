"""Tests for the authenticated dispatcher."""

from __future__ import annotations

import logging
from urllib.parse import parse_qsl

import httpx
import pytest

from conftest import LIVE_KEY, TEST_KEY, RecordingTransport, client_for, make_settings, reply_with
from adapters.stripe_client import StripeClient
from core.config import DEFAULT_API_VERSION
from core.domain.customers import Customer
from core.domain.environment import Environment
from core.domain.models import DeletedObject, StripeList
from core.domain.request import HttpMethod, RequestSpec
from core.errors import ConfigurationError, RemoteError, TransportFailureError


class TestCredentialSelection:
    @pytest.mark.asyncio
    async def test_testing_environment_uses_test_key(self, test_settings, customer_payload):
        transport = reply_with(customer_payload)
        client = client_for(test_settings, transport)

        await client.send(HttpMethod.GET, "/customers/cus_123", expect=Customer)

        assert transport.last.headers["Authorization"] == f"Bearer {TEST_KEY}"

    @pytest.mark.asyncio
    async def test_production_uses_live_key_even_with_test_key(self, settings, customer_payload):
        transport = reply_with(customer_payload)
        client = client_for(settings, transport)

        await client.send(HttpMethod.GET, "/customers/cus_123", expect=Customer)

        assert transport.last.headers["Authorization"] == f"Bearer {LIVE_KEY}"

    @pytest.mark.asyncio
    async def test_non_production_without_test_key_falls_back_to_live(self, customer_payload):
        transport = reply_with(customer_payload)
        client = client_for(make_settings(environment=Environment.DEVELOPMENT, test_api_key=None), transport)

        await client.send(HttpMethod.GET, "/customers/cus_123", expect=Customer)

        assert transport.last.headers["Authorization"] == f"Bearer {LIVE_KEY}"

    @pytest.mark.asyncio
    async def test_per_call_environment_override(self, settings, customer_payload):
        transport = reply_with(customer_payload)
        client = client_for(settings, transport)

        await client.send(HttpMethod.GET, "/customers/cus_123", expect=Customer, environment=Environment.TESTING)
        await client.send(HttpMethod.GET, "/customers/cus_123", expect=Customer)

        assert [r.headers["Authorization"] for r in transport.requests] == [
            f"Bearer {TEST_KEY}",
            f"Bearer {LIVE_KEY}",
        ]

    @pytest.mark.asyncio
    async def test_missing_live_key_fails_before_network(self, customer_payload):
        transport = reply_with(customer_payload)
        client = client_for(make_settings(api_key=None), transport)

        with pytest.raises(ConfigurationError):
            await client.send(HttpMethod.GET, "/customers/cus_123", expect=Customer)

        assert transport.requests == []


class TestRequestComposition:
    @pytest.mark.asyncio
    async def test_default_headers(self, settings, customer_payload):
        transport = reply_with(customer_payload)

        await client_for(settings, transport).send(HttpMethod.GET, "/customers/cus_123", expect=Customer)

        request = transport.last
        assert request.headers["Stripe-Version"] == DEFAULT_API_VERSION
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.headers["User-Agent"] == settings.user_agent
        assert str(request.url) == "https://api.stripe.test/v1/customers/cus_123"

    @pytest.mark.asyncio
    async def test_caller_headers_override_defaults(self, settings, customer_payload):
        transport = reply_with(customer_payload)

        await client_for(settings, transport).send(
            HttpMethod.GET,
            "/customers/cus_123",
            expect=Customer,
            headers={"stripe-version": "2020-08-27", "Idempotency-Key": "abc"},
        )

        assert transport.last.headers["Stripe-Version"] == "2020-08-27"
        assert transport.last.headers["Idempotency-Key"] == "abc"

    @pytest.mark.asyncio
    async def test_body_is_flattened_form(self, settings, customer_payload):
        transport = reply_with(customer_payload)

        await client_for(settings, transport).send(
            "post",
            "/customers",
            body={"email": "ada@example.com", "metadata": {"order_id": 42}, "expand": ["sources"], "phone": None},
            expect=Customer,
        )

        request = transport.last
        assert request.method == "POST"
        assert parse_qsl(request.content.decode()) == [
            ("email", "ada@example.com"),
            ("metadata[order_id]", "42"),
            ("expand[0]", "sources"),
        ]

    @pytest.mark.asyncio
    async def test_query_tree_and_prebuilt_string(self, settings):
        transport = reply_with({"object": "list", "data": [], "has_more": False})
        client = client_for(settings, transport)

        await client.send(HttpMethod.GET, "/customers", query={"limit": 2}, expect=StripeList[Customer])
        await client.send(HttpMethod.GET, "/customers", query="?email=a%40b.c", expect=StripeList[Customer])

        assert transport.requests[0].url.params["limit"] == "2"
        assert transport.requests[1].url.params["email"] == "a@b.c"
        assert transport.requests[0].content == b""

    @pytest.mark.asyncio
    async def test_dispatch_request_spec(self, settings):
        transport = reply_with({"object": "discount", "deleted": True})
        request = RequestSpec(method=HttpMethod.DELETE, path="/customers/cus_123/discount")

        deleted = await client_for(settings, transport).dispatch(request, DeletedObject)

        assert deleted.deleted is True
        assert deleted.id is None
        assert transport.last.method == "DELETE"
        assert transport.last.content == b""

    @pytest.mark.asyncio
    async def test_exactly_one_call(self, settings):
        transport = reply_with({"error": {"type": "api_error", "message": "boom"}}, status_code=500)

        with pytest.raises(RemoteError):
            await client_for(settings, transport).send(HttpMethod.GET, "/customers/cus_1", expect=Customer)

        assert len(transport.requests) == 1


class TestFailures:
    @pytest.mark.asyncio
    async def test_transport_error_is_wrapped(self, settings):
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = StripeClient(settings, transport=RecordingTransport(_fail))

        with pytest.raises(TransportFailureError) as excinfo:
            await client.send(HttpMethod.GET, "/customers/cus_1", expect=Customer)

        assert excinfo.value.details["cause"] == "ConnectError"
        assert isinstance(excinfo.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_remote_error_keeps_request_id(self, settings):
        transport = reply_with(
            {"error": {"type": "authentication_error", "message": "Invalid API Key provided"}},
            status_code=401,
            headers={"Request-Id": "req_42"},
        )

        with pytest.raises(RemoteError) as excinfo:
            await client_for(settings, transport).send(HttpMethod.GET, "/customers/cus_1", expect=Customer)

        assert excinfo.value.status_code == 401
        assert excinfo.value.request_id == "req_42"

    @pytest.mark.asyncio
    async def test_key_never_logged(self, settings, customer_payload, caplog):
        transport = reply_with(customer_payload)

        with caplog.at_level(logging.DEBUG, logger="adapters.stripe_client"):
            await client_for(settings, transport).send(HttpMethod.GET, "/customers/cus_123", expect=Customer)

        assert caplog.records
        assert all(LIVE_KEY not in record.getMessage() for record in caplog.records)
        assert caplog.records[-1].status_code == 200
        assert caplog.records[-1].credential == "live"
