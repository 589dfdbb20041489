"""Facturación: Invoice, Subscription y objetos relacionados.

Campos expandibles:
- `Invoice.payment_intent` llega como id (`"pi_..."`) o como objeto
  expandido; el id queda siempre en `payment_intent_id`.
- `Subscription.latest_invoice` sigue la misma regla con `latest_invoice_id`.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import Field, StrictBool, StrictInt, model_validator

from core.domain.models import StripeList, StripeModel, Timestamp, split_expandable
from core.domain.payments import PaymentIntent


class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    OPEN = "open"
    PAID = "paid"
    UNCOLLECTIBLE = "uncollectible"
    VOID = "void"


class SubscriptionStatus(str, Enum):
    INCOMPLETE = "incomplete"
    INCOMPLETE_EXPIRED = "incomplete_expired"
    TRIALING = "trialing"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    UNPAID = "unpaid"


class Coupon(StripeModel):
    id: str
    object: Literal["coupon"] = "coupon"
    amount_off: StrictInt | None = None
    currency: str | None = None
    duration: str | None = None
    duration_in_months: StrictInt | None = None
    name: str | None = None
    percent_off: Decimal | None = None
    valid: StrictBool | None = None


class Discount(StripeModel):
    object: Literal["discount"] = "discount"
    coupon: Coupon | None = None
    customer: str | None = None
    end: Timestamp | None = None
    start: Timestamp | None = None
    subscription: str | None = None


class Plan(StripeModel):
    id: str
    object: Literal["plan"] = "plan"
    active: StrictBool | None = None
    amount: StrictInt | None = None
    created: Timestamp | None = None
    currency: str | None = None
    interval: str | None = None
    interval_count: StrictInt | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    nickname: str | None = None
    product: str | None = None
    trial_period_days: StrictInt | None = None


class Period(StripeModel):
    start: Timestamp | None = None
    end: Timestamp | None = None


class InvoiceLineItem(StripeModel):
    id: str
    object: Literal["line_item"] = "line_item"
    amount: StrictInt | None = None
    currency: str | None = None
    description: str | None = None
    discountable: StrictBool | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    period: Period | None = None
    plan: Plan | None = None
    proration: StrictBool | None = None
    quantity: StrictInt | None = None
    subscription: str | None = None
    subscription_item: str | None = None
    type: str | None = None


class InvoiceStatusTransitions(StripeModel):
    finalized_at: Timestamp | None = None
    marked_uncollectible_at: Timestamp | None = None
    paid_at: Timestamp | None = None
    voided_at: Timestamp | None = None


class Invoice(StripeModel):
    """The Invoice object. `id` falta en las invoices `upcoming`."""

    id: str | None = None
    object: Literal["invoice"] = "invoice"
    amount_due: StrictInt | None = None
    amount_paid: StrictInt | None = None
    amount_remaining: StrictInt | None = None
    application_fee: StrictInt | None = Field(default=None, alias="application_fee_amount")
    attempt_count: StrictInt | None = None
    attempted: StrictBool | None = None
    auto_advance: StrictBool | None = None
    billing: str | None = None
    billing_reason: str | None = None
    charge: str | None = None
    closed: StrictBool | None = None
    created: Timestamp | None = None
    currency: str | None = None
    customer: str | None = None
    default_source: str | None = None
    description: str | None = None
    discount: Discount | None = None
    due_date: Timestamp | None = None
    ending_balance: StrictInt | None = None
    forgiven: StrictBool | None = None
    hosted_invoice_url: str | None = None
    invoice_pdf: str | None = None
    lines: StripeList[InvoiceLineItem] | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    next_payment_attempt: Timestamp | None = None
    number: str | None = None
    paid: StrictBool | None = None
    payment_intent: PaymentIntent | None = None
    payment_intent_id: str | None = None
    period_end: Timestamp | None = None
    period_start: Timestamp | None = None
    receipt_number: str | None = None
    starting_balance: StrictInt | None = None
    statement_descriptor: str | None = None
    status: InvoiceStatus | None = None
    status_transitions: InvoiceStatusTransitions | None = None
    subscription: str | None = None
    subscription_proration_date: StrictInt | None = None
    subtotal: StrictInt | None = None
    tax: StrictInt | None = None
    tax_percent: Decimal | None = None
    total: StrictInt | None = None
    webhooks_delivered_at: Timestamp | None = None

    @model_validator(mode="before")
    @classmethod
    def _expand_payment_intent(cls, data: object) -> object:
        return split_expandable(data, "payment_intent", "payment_intent_id")


class SubscriptionItem(StripeModel):
    id: str
    object: Literal["subscription_item"] = "subscription_item"
    created: Timestamp | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    plan: Plan | None = None
    quantity: StrictInt | None = None
    subscription: str | None = None


class Subscription(StripeModel):
    id: str
    object: Literal["subscription"] = "subscription"
    application_fee_percent: Decimal | None = None
    billing: str | None = None
    billing_cycle_anchor: Timestamp | None = None
    cancel_at_period_end: StrictBool | None = None
    canceled_at: Timestamp | None = None
    created: Timestamp | None = None
    current_period_end: Timestamp | None = None
    current_period_start: Timestamp | None = None
    customer: str | None = None
    days_until_due: StrictInt | None = None
    discount: Discount | None = None
    ended_at: Timestamp | None = None
    items: StripeList[SubscriptionItem] | None = None
    latest_invoice: Invoice | None = None
    latest_invoice_id: str | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    plan: Plan | None = None
    quantity: StrictInt | None = None
    start: Timestamp | None = None
    status: SubscriptionStatus | None = None
    tax_percent: Decimal | None = None
    trial_end: Timestamp | None = None
    trial_start: Timestamp | None = None

    @model_validator(mode="before")
    @classmethod
    def _expand_latest_invoice(cls, data: object) -> object:
        return split_expandable(data, "latest_invoice", "latest_invoice_id")
