"""Rutas de PaymentMethods."""

from __future__ import annotations

from typing import Any

from adapters.routes.base import BaseRoutes, RouteParams
from core.domain.models import StripeList
from core.domain.payment_methods import PaymentMethod, PaymentMethodType
from core.domain.request import HttpMethod
from core.params import ParamTree


class PaymentMethodCreateParams(RouteParams):
    """Opciones de `POST /payment_methods`.

    `card` acepta los datos de la tarjeta o, por compatibilidad, un token:
    `{"token": "tok_visa"}`.
    """

    type: PaymentMethodType
    billing_details: dict[str, Any] | None = None
    card: dict[str, Any] | None = None
    metadata: dict[str, str] | None = None


class PaymentMethodUpdateParams(RouteParams):
    billing_details: dict[str, Any] | None = None
    card: dict[str, Any] | None = None
    metadata: dict[str, str] | None = None


class PaymentMethodRoutes(BaseRoutes):
    _base_path = "/payment_methods"

    async def create(self, params: PaymentMethodCreateParams) -> PaymentMethod:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(),
            body=params.to_params(),
            expect=PaymentMethod,
        )

    async def retrieve(self, payment_method: str) -> PaymentMethod:
        return await self._requester.send(HttpMethod.GET, self._path(payment_method), expect=PaymentMethod)

    async def update(self, payment_method: str, params: PaymentMethodUpdateParams) -> PaymentMethod:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(payment_method),
            body=params.to_params(),
            expect=PaymentMethod,
        )

    async def list_all(
        self,
        customer: str,
        type: PaymentMethodType = PaymentMethodType.CARD,
        filters: dict[str, ParamTree] | None = None,
    ) -> StripeList[PaymentMethod]:
        query: dict[str, ParamTree] = {"customer": customer, "type": type}
        query.update(filters or {})
        return await self._requester.send(
            HttpMethod.GET,
            self._path(),
            query=query,
            expect=StripeList[PaymentMethod],
        )

    async def attach(self, payment_method: str, customer: str) -> PaymentMethod:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(payment_method, "attach"),
            body={"customer": customer},
            expect=PaymentMethod,
        )

    async def detach(self, payment_method: str) -> PaymentMethod:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(payment_method, "detach"),
            expect=PaymentMethod,
        )
