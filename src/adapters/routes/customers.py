"""Rutas de Customers (y sus fuentes de pago)."""

from __future__ import annotations

from typing import Any

from adapters.routes.base import BaseRoutes, RouteParams, connected_account_headers
from core.domain.customers import Customer
from core.domain.models import DeletedObject, StripeList
from core.domain.request import HttpMethod
from core.domain.sources import BankAccount, Card, PaymentSource
from core.params import ParamTree


class AddressParams(RouteParams):
    city: str | None = None
    country: str | None = None
    line1: str | None = None
    line2: str | None = None
    postal_code: str | None = None
    state: str | None = None


class ShippingParams(RouteParams):
    address: AddressParams
    name: str
    carrier: str | None = None
    phone: str | None = None
    tracking_number: str | None = None


class CustomerCreateParams(RouteParams):
    """Opciones de `POST /customers`.

    `source` acepta un token (`"tok_visa"`) o un diccionario con los datos
    de la tarjeta/cuenta (`source[number]=...`).
    """

    account_balance: int | None = None
    coupon: str | None = None
    description: str | None = None
    email: str | None = None
    invoice_prefix: str | None = None
    invoice_settings: dict[str, Any] | None = None
    metadata: dict[str, str] | None = None
    payment_method: str | None = None
    shipping: ShippingParams | dict[str, Any] | None = None
    source: str | dict[str, Any] | None = None
    tax_info: dict[str, str] | None = None


class CustomerUpdateParams(RouteParams):
    account_balance: int | None = None
    business_vat_id: str | None = None
    coupon: str | None = None
    default_source: str | None = None
    description: str | None = None
    email: str | None = None
    invoice_settings: dict[str, Any] | None = None
    metadata: dict[str, str] | None = None
    shipping: ShippingParams | dict[str, Any] | None = None
    source: str | dict[str, Any] | None = None


class CustomerRoutes(BaseRoutes):
    _base_path = "/customers"

    async def create(self, params: CustomerCreateParams | None = None) -> Customer:
        body = (params or CustomerCreateParams()).to_params()
        return await self._requester.send(HttpMethod.POST, self._path(), body=body, expect=Customer)

    async def retrieve(self, customer: str) -> Customer:
        return await self._requester.send(HttpMethod.GET, self._path(customer), expect=Customer)

    async def update(self, customer: str, params: CustomerUpdateParams) -> Customer:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(customer),
            body=params.to_params(),
            expect=Customer,
        )

    async def delete(self, customer: str) -> DeletedObject:
        return await self._requester.send(HttpMethod.DELETE, self._path(customer), expect=DeletedObject)

    async def list_all(self, filters: ParamTree = None) -> StripeList[Customer]:
        return await self._requester.send(
            HttpMethod.GET,
            self._path(),
            query=filters,
            expect=StripeList[Customer],
        )

    async def add_new_source(
        self,
        customer: str,
        source: str,
        *,
        to_connected_account: str | None = None,
    ) -> PaymentSource:
        """Adjunta un token; la API devuelve tarjeta, cuenta bancaria o source."""

        return await self._requester.send(
            HttpMethod.POST,
            self._path(customer, "sources"),
            body={"source": source},
            headers=connected_account_headers(to_connected_account),
            expect=PaymentSource,
        )

    async def add_new_bank_account_source(
        self,
        customer: str,
        source: str | dict[str, Any],
        *,
        to_connected_account: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> BankAccount:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(customer, "sources"),
            body={"source": source, "metadata": metadata},
            headers=connected_account_headers(to_connected_account),
            expect=BankAccount,
        )

    async def add_new_card_source(
        self,
        customer: str,
        source: str | dict[str, Any],
        *,
        to_connected_account: str | None = None,
        metadata: dict[str, str] | None = None,
    ) -> Card:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(customer, "sources"),
            body={"source": source, "metadata": metadata},
            headers=connected_account_headers(to_connected_account),
            expect=Card,
        )

    async def delete_source(self, customer: str, source: str) -> DeletedObject:
        return await self._requester.send(
            HttpMethod.DELETE,
            self._path(customer, "sources", source),
            expect=DeletedObject,
        )

    async def delete_discount(self, customer: str) -> DeletedObject:
        return await self._requester.send(
            HttpMethod.DELETE,
            self._path(customer, "discount"),
            expect=DeletedObject,
        )
