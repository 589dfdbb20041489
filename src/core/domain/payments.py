"""Charge y PaymentIntent (subconjunto usado por invoices y eventos)."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, StrictBool, StrictInt

from core.domain.models import StripeModel, Timestamp


class PaymentIntent(StripeModel):
    id: str
    object: Literal["payment_intent"] = "payment_intent"
    amount: StrictInt | None = None
    amount_capturable: StrictInt | None = None
    amount_received: StrictInt | None = None
    canceled_at: Timestamp | None = None
    cancellation_reason: str | None = None
    capture_method: str | None = None
    client_secret: str | None = None
    confirmation_method: str | None = None
    created: Timestamp | None = None
    currency: str | None = None
    customer: str | None = None
    description: str | None = None
    invoice: str | None = None
    last_payment_error: dict[str, Any] | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    next_action: dict[str, Any] | None = None
    payment_method: str | None = None
    payment_method_types: list[str] = Field(default_factory=list)
    status: str | None = None


class Charge(StripeModel):
    id: str
    object: Literal["charge"] = "charge"
    amount: StrictInt | None = None
    amount_refunded: StrictInt | None = None
    captured: StrictBool | None = None
    created: Timestamp | None = None
    currency: str | None = None
    customer: str | None = None
    description: str | None = None
    failure_code: str | None = None
    failure_message: str | None = None
    invoice: str | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    paid: StrictBool | None = None
    payment_intent: str | None = None
    payment_method: str | None = None
    receipt_email: str | None = None
    refunded: StrictBool | None = None
    status: str | None = None
