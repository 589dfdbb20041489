"""Shared test fixtures for stripe-bridge tests."""

from __future__ import annotations

import json
from typing import Any, Callable

import httpx
import pytest

from adapters.stripe_client import StripeClient
from core.config import AppSettings
from core.domain.environment import Environment

LIVE_KEY = "sk_live_999"
TEST_KEY = "sk_test_123"


def make_settings(**overrides: Any) -> AppSettings:
    """Settings isolated from the developer's .env files and env vars."""

    values: dict[str, Any] = {
        "api_key": LIVE_KEY,
        "test_api_key": TEST_KEY,
        "environment": Environment.PRODUCTION,
        "api_base": "https://api.stripe.test/v1",
    }
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it answered."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def json_response(payload: Any, status_code: int = 200, headers: dict[str, str] | None = None) -> httpx.Response:
    return httpx.Response(
        status_code,
        content=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json", **(headers or {})},
    )


def reply_with(payload: Any, status_code: int = 200, headers: dict[str, str] | None = None) -> RecordingTransport:
    return RecordingTransport(lambda request: json_response(payload, status_code, headers))


@pytest.fixture
def settings() -> AppSettings:
    return make_settings()


@pytest.fixture
def test_settings() -> AppSettings:
    return make_settings(environment=Environment.TESTING)


@pytest.fixture
def customer_payload() -> dict[str, Any]:
    """Minimal customer as returned by GET /v1/customers/{id}."""
    return {
        "id": "cus_123",
        "object": "customer",
        "account_balance": 0,
        "created": 1568000000,
        "email": "ada@example.com",
        "invoice_prefix": "ABC123",
        "livemode": False,
        "metadata": {"order_id": "42"},
        "sources": {
            "object": "list",
            "data": [
                {"id": "card_1", "object": "card", "brand": "Visa", "last4": "4242", "exp_month": 8, "exp_year": 2030}
            ],
            "has_more": False,
            "url": "/v1/customers/cus_123/sources",
        },
    }


def client_for(settings: AppSettings, transport: httpx.MockTransport) -> StripeClient:
    return StripeClient(settings, transport=transport)
