"""Tests for the resource routes (customers, payment methods, setup intents, events)."""

from __future__ import annotations

from datetime import datetime, timezone
from urllib.parse import parse_qsl

import pytest

from conftest import client_for, reply_with
from adapters.routes import (
    CustomerCreateParams,
    CustomerUpdateParams,
    PaymentMethodCreateParams,
    SetupIntentConfirmParams,
    SetupIntentCreateParams,
    ShippingParams,
)
from adapters.routes.customers import AddressParams
from core.domain.customers import Customer
from core.domain.events import Event, EventType
from core.domain.models import StripeList
from core.domain.payment_methods import BillingDetails, PaymentMethod, PaymentMethodType
from core.domain.setup_intents import SetupIntentCancellationReason, SetupIntentStatus
from core.domain.sources import BankAccount, Card, PaymentSource, Source
from core.interfaces.requester import StripeRequester


def _form(request) -> list[tuple[str, str]]:
    return parse_qsl(request.content.decode())


class TestCustomerRoutes:
    def test_client_satisfies_requester_protocol(self, settings, customer_payload):
        assert isinstance(client_for(settings, reply_with(customer_payload)), StripeRequester)

    @pytest.mark.asyncio
    async def test_create_round_trip(self, settings, customer_payload):
        """Options model -> form body, canned JSON -> equal Customer."""
        transport = reply_with(customer_payload)
        client = client_for(settings, transport)

        customer = await client.customers.create(
            CustomerCreateParams(
                email="ada@example.com",
                invoice_prefix="ABC123",
                metadata={"order_id": "42"},
                source="tok_visa",
            )
        )

        request = transport.last
        assert request.method == "POST"
        assert request.url.path == "/v1/customers"
        assert _form(request) == [
            ("email", "ada@example.com"),
            ("invoice_prefix", "ABC123"),
            ("metadata[order_id]", "42"),
            ("source", "tok_visa"),
        ]

        expected = Customer(
            id="cus_123",
            account_balance=0,
            created=datetime(2019, 9, 9, 3, 33, 20, tzinfo=timezone.utc),
            email="ada@example.com",
            invoice_prefix="ABC123",
            livemode=False,
            metadata={"order_id": "42"},
            sources=StripeList[PaymentSource](
                data=[Card(id="card_1", brand="Visa", last4="4242", exp_month=8, exp_year=2030)],
                has_more=False,
                url="/v1/customers/cus_123/sources",
            ),
        )
        assert customer.model_dump() == expected.model_dump()

    @pytest.mark.asyncio
    async def test_update_sends_nested_shipping(self, settings, customer_payload):
        transport = reply_with(customer_payload)
        params = CustomerUpdateParams(
            shipping=ShippingParams(name="Ada", address=AddressParams(line1="1 Main St", country="US")),
        )

        await client_for(settings, transport).customers.update("cus_123", params)

        assert transport.last.url.path == "/v1/customers/cus_123"
        assert _form(transport.last) == [
            ("shipping[address][country]", "US"),
            ("shipping[address][line1]", "1 Main St"),
            ("shipping[name]", "Ada"),
        ]

    @pytest.mark.asyncio
    async def test_delete(self, settings):
        transport = reply_with({"id": "cus_123", "object": "customer", "deleted": True})

        deleted = await client_for(settings, transport).customers.delete("cus_123")

        assert transport.last.method == "DELETE"
        assert deleted.deleted is True

    @pytest.mark.asyncio
    async def test_list_all_with_filters(self, settings, customer_payload):
        transport = reply_with({"object": "list", "data": [customer_payload], "has_more": True})

        page = await client_for(settings, transport).customers.list_all({"limit": 1, "created": {"gt": 1}})

        assert transport.last.url.params["limit"] == "1"
        assert transport.last.url.params["created[gt]"] == "1"
        assert page.data[0].id == "cus_123"
        assert page.has_more is True

    @pytest.mark.asyncio
    async def test_add_new_source_resolves_variant(self, settings):
        transport = reply_with({"id": "src_1", "object": "source", "type": "card", "status": "chargeable"})

        source = await client_for(settings, transport).customers.add_new_source(
            "cus_123", "src_1", to_connected_account="acct_9"
        )

        assert isinstance(source, Source)
        assert transport.last.url.path == "/v1/customers/cus_123/sources"
        assert transport.last.headers["Stripe-Account"] == "acct_9"

    @pytest.mark.asyncio
    async def test_add_bank_account_and_card_sources(self, settings):
        bank_transport = reply_with({"id": "ba_1", "object": "bank_account", "last4": "6789"})
        card_transport = reply_with({"id": "card_1", "object": "card", "last4": "4242"})

        bank = await client_for(settings, bank_transport).customers.add_new_bank_account_source(
            "cus_123", "btok_1", metadata={"k": "v"}
        )
        card = await client_for(settings, card_transport).customers.add_new_card_source(
            "cus_123", {"object": "card", "number": "4242424242424242", "exp_month": 8, "exp_year": 2030}
        )

        assert isinstance(bank, BankAccount)
        assert isinstance(card, Card)
        assert "Stripe-Account" not in bank_transport.last.headers
        assert ("source[number]", "4242424242424242") in _form(card_transport.last)
        assert ("metadata[k]", "v") in _form(bank_transport.last)

    @pytest.mark.asyncio
    async def test_delete_source(self, settings):
        transport = reply_with({"id": "card_1", "object": "card", "deleted": True})

        deleted = await client_for(settings, transport).customers.delete_source("cus_123", "card_1")

        assert transport.last.url.path == "/v1/customers/cus_123/sources/card_1"
        assert deleted.id == "card_1"

    @pytest.mark.asyncio
    async def test_delete_discount_without_id(self, settings):
        """A deleted discount carries no `id` in this API version."""
        transport = reply_with({"object": "discount", "deleted": True})

        deleted = await client_for(settings, transport).customers.delete_discount("cus_123")

        assert transport.last.method == "DELETE"
        assert transport.last.url.path == "/v1/customers/cus_123/discount"
        assert deleted.id is None
        assert deleted.object == "discount"
        assert deleted.deleted is True

    def test_params_reject_unknown_fields(self):
        with pytest.raises(ValueError):
            CustomerCreateParams(emial="typo@example.com")


class TestPaymentMethodRoutes:
    payment_method = {
        "id": "pm_1",
        "object": "payment_method",
        "billing_details": {"email": "ada@example.com", "name": "Ada"},
        "card": {"brand": "visa", "last4": "4242", "exp_month": 8, "exp_year": 2030},
        "customer": "cus_123",
        "type": "card",
    }

    @pytest.mark.asyncio
    async def test_create(self, settings):
        transport = reply_with(self.payment_method)

        pm = await client_for(settings, transport).payment_methods.create(
            PaymentMethodCreateParams(type=PaymentMethodType.CARD, card={"token": "tok_visa"})
        )

        assert _form(transport.last) == [("type", "card"), ("card[token]", "tok_visa")]
        assert pm.type is PaymentMethodType.CARD
        assert pm.billing_details == BillingDetails(email="ada@example.com", name="Ada")

    @pytest.mark.asyncio
    async def test_list_all_sends_customer_and_type(self, settings):
        transport = reply_with({"object": "list", "data": [self.payment_method], "has_more": False})

        page = await client_for(settings, transport).payment_methods.list_all("cus_123", filters={"limit": 5})

        params = transport.last.url.params
        assert (params["customer"], params["type"], params["limit"]) == ("cus_123", "card", "5")
        assert isinstance(page.data[0], PaymentMethod)

    @pytest.mark.asyncio
    async def test_retrieve_card_present(self, settings):
        payload = {**self.payment_method, "card": None, "type": "card_present", "card_present": {"brand": "visa"}}
        transport = reply_with(payload)

        pm = await client_for(settings, transport).payment_methods.retrieve("pm_1")

        assert transport.last.url.path == "/v1/payment_methods/pm_1"
        assert pm.type is PaymentMethodType.CARD_PRESENT
        assert pm.card_present == {"brand": "visa"}
        assert pm.card is None

    @pytest.mark.asyncio
    async def test_attach_and_detach(self, settings):
        transport = reply_with(self.payment_method)
        client = client_for(settings, transport)

        await client.payment_methods.attach("pm_1", "cus_123")
        await client.payment_methods.detach("pm_1")

        attach, detach = transport.requests
        assert attach.url.path == "/v1/payment_methods/pm_1/attach"
        assert _form(attach) == [("customer", "cus_123")]
        assert detach.url.path == "/v1/payment_methods/pm_1/detach"
        assert detach.content == b""


class TestSetupIntentRoutes:
    setup_intent = {
        "id": "seti_1",
        "object": "setup_intent",
        "client_secret": "seti_1_secret_x",
        "payment_method_types": ["card"],
        "status": "requires_payment_method",
        "usage": "off_session",
    }

    @pytest.mark.asyncio
    async def test_create_with_defaults(self, settings):
        transport = reply_with(self.setup_intent)

        intent = await client_for(settings, transport).setup_intents.create()

        assert transport.last.content == b""
        assert intent.status is SetupIntentStatus.REQUIRES_PAYMENT_METHOD

    @pytest.mark.asyncio
    async def test_create_with_options(self, settings):
        transport = reply_with(self.setup_intent)

        await client_for(settings, transport).setup_intents.create(
            SetupIntentCreateParams(confirm=True, customer="cus_123", payment_method_types=["card"])
        )

        assert _form(transport.last) == [
            ("confirm", "true"),
            ("customer", "cus_123"),
            ("payment_method_types[0]", "card"),
        ]

    @pytest.mark.asyncio
    async def test_retrieve_with_client_secret(self, settings):
        transport = reply_with(self.setup_intent)
        client = client_for(settings, transport)

        await client.setup_intents.retrieve("seti_1", client_secret="seti_1_secret_x")
        await client.setup_intents.retrieve("seti_1")

        assert transport.requests[0].url.params["client_secret"] == "seti_1_secret_x"
        assert transport.requests[1].url.query == b""

    @pytest.mark.asyncio
    async def test_confirm_and_cancel(self, settings):
        transport = reply_with({**self.setup_intent, "status": "canceled", "cancellation_reason": "duplicate"})
        client = client_for(settings, transport)

        await client.setup_intents.confirm("seti_1", SetupIntentConfirmParams(payment_method="pm_1"))
        canceled = await client.setup_intents.cancel("seti_1", SetupIntentCancellationReason.DUPLICATE)

        confirm, cancel = transport.requests
        assert confirm.url.path == "/v1/setup_intents/seti_1/confirm"
        assert _form(confirm) == [("payment_method", "pm_1")]
        assert cancel.url.path == "/v1/setup_intents/seti_1/cancel"
        assert _form(cancel) == [("cancellation_reason", "duplicate")]
        assert canceled.cancellation_reason is SetupIntentCancellationReason.DUPLICATE


class TestEventRoutes:
    @pytest.mark.asyncio
    async def test_list_events(self, settings):
        event = {
            "id": "evt_1",
            "object": "event",
            "type": "customer.created",
            "data": {"object": {"id": "cus_1", "object": "customer"}},
        }
        transport = reply_with({"object": "list", "data": [event], "has_more": False})

        page = await client_for(settings, transport).events.list_all({"type": "customer.created"})

        assert isinstance(page.data[0], Event)
        assert page.data[0].type is EventType.CUSTOMER_CREATED
        assert isinstance(page.data[0].data.object, Customer)
        assert transport.last.url.params["type"] == "customer.created"

    @pytest.mark.asyncio
    async def test_retrieve_quotes_identifier(self, settings):
        transport = reply_with({"id": "evt/1", "object": "event", "type": "ping"})

        await client_for(settings, transport).events.retrieve("evt/1")

        assert transport.last.url.raw_path == b"/v1/events/evt%2F1"
