"""Fuentes de pago: unión etiquetada por el campo `object`.

`PaymentSource` se resuelve por el valor literal de `object`:
- `"bank_account"` -> `BankAccount`
- `"card"`         -> `Card`
- `"source"`       -> `Source`

Un valor desconocido es un error de decodificación (no se fuerza a una
variante por defecto).
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, StrictBool, StrictInt

from core.domain.models import StripeModel, Timestamp


class BankAccount(StripeModel):
    id: str
    object: Literal["bank_account"] = "bank_account"
    account: str | None = None
    account_holder_name: str | None = None
    account_holder_type: str | None = None
    bank_name: str | None = None
    country: str | None = None
    currency: str | None = None
    customer: str | None = None
    default_for_currency: StrictBool | None = None
    fingerprint: str | None = None
    last4: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    routing_number: str | None = None
    status: str | None = None


class Card(StripeModel):
    id: str
    object: Literal["card"] = "card"
    address_city: str | None = None
    address_country: str | None = None
    address_line1: str | None = None
    address_line1_check: str | None = None
    address_line2: str | None = None
    address_state: str | None = None
    address_zip: str | None = None
    address_zip_check: str | None = None
    brand: str | None = None
    country: str | None = None
    customer: str | None = None
    cvc_check: str | None = None
    dynamic_last4: str | None = None
    exp_month: StrictInt | None = None
    exp_year: StrictInt | None = None
    fingerprint: str | None = None
    funding: str | None = None
    last4: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    name: str | None = None
    tokenization_method: str | None = None


class SourceOwner(StripeModel):
    email: str | None = None
    name: str | None = None
    phone: str | None = None


class Source(StripeModel):
    id: str
    object: Literal["source"] = "source"
    amount: StrictInt | None = None
    client_secret: str | None = None
    created: Timestamp | None = None
    currency: str | None = None
    customer: str | None = None
    flow: str | None = None
    livemode: StrictBool | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    owner: SourceOwner | None = None
    statement_descriptor: str | None = None
    status: str | None = None
    type: str | None = None
    usage: str | None = None
    card: dict[str, Any] | None = None


PaymentSource = Annotated[
    Union[BankAccount, Card, Source],
    Field(discriminator="object"),
]
