"""Customer y fuentes de pago asociadas."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, StrictBool, StrictInt

from core.domain.models import Shipping, StripeList, StripeModel, Timestamp
from core.domain.sources import PaymentSource


class InvoiceSettings(StripeModel):
    custom_fields: list[dict[str, str]] | None = None
    default_payment_method: str | None = None
    footer: str | None = None


class Customer(StripeModel):
    """The Customer object."""

    id: str
    object: Literal["customer"] = "customer"
    account_balance: StrictInt | None = None
    balance: StrictInt | None = None
    created: Timestamp | None = None
    currency: str | None = None
    default_source: str | None = None
    delinquent: StrictBool | None = None
    description: str | None = None
    email: str | None = None
    invoice_prefix: str | None = None
    invoice_settings: InvoiceSettings | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    name: str | None = None
    phone: str | None = None
    shipping: Shipping | None = None
    sources: StripeList[PaymentSource] | None = None
