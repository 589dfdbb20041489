"""Rutas de SetupIntents."""

from __future__ import annotations

from typing import Any

from adapters.routes.base import BaseRoutes, RouteParams
from core.domain.models import StripeList
from core.domain.request import HttpMethod
from core.domain.setup_intents import SetupIntent, SetupIntentCancellationReason
from core.params import ParamTree


class SetupIntentCreateParams(RouteParams):
    """Opciones de `POST /setup_intents`.

    - `mandate_data` y `return_url` solo tienen efecto con `confirm=True`.
    - `payment_method_types` por defecto es `["card"]` en la API.
    - `usage` por defecto es `off_session` en la API.
    """

    confirm: bool | None = None
    customer: str | None = None
    description: str | None = None
    mandate_data: dict[str, Any] | None = None
    metadata: dict[str, str] | None = None
    on_behalf_of: str | None = None
    payment_method: str | None = None
    payment_method_options: dict[str, Any] | None = None
    payment_method_types: list[str] | None = None
    return_url: str | None = None
    single_use: dict[str, Any] | None = None
    usage: str | None = None


class SetupIntentUpdateParams(RouteParams):
    customer: str | None = None
    description: str | None = None
    metadata: dict[str, str] | None = None
    payment_method: str | None = None
    payment_method_types: list[str] | None = None


class SetupIntentConfirmParams(RouteParams):
    mandate_data: dict[str, Any] | None = None
    payment_method: str | None = None
    payment_method_options: dict[str, Any] | None = None
    return_url: str | None = None


class SetupIntentRoutes(BaseRoutes):
    _base_path = "/setup_intents"

    async def create(self, params: SetupIntentCreateParams | None = None) -> SetupIntent:
        body = (params or SetupIntentCreateParams()).to_params()
        return await self._requester.send(HttpMethod.POST, self._path(), body=body, expect=SetupIntent)

    async def retrieve(self, intent: str, client_secret: str | None = None) -> SetupIntent:
        """`client_secret` es obligatorio si la petición usa una publishable key."""

        return await self._requester.send(
            HttpMethod.GET,
            self._path(intent),
            query={"client_secret": client_secret},
            expect=SetupIntent,
        )

    async def update(self, intent: str, params: SetupIntentUpdateParams) -> SetupIntent:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(intent),
            body=params.to_params(),
            expect=SetupIntent,
        )

    async def confirm(self, intent: str, params: SetupIntentConfirmParams | None = None) -> SetupIntent:
        body = (params or SetupIntentConfirmParams()).to_params()
        return await self._requester.send(
            HttpMethod.POST,
            self._path(intent, "confirm"),
            body=body,
            expect=SetupIntent,
        )

    async def cancel(
        self,
        intent: str,
        cancellation_reason: SetupIntentCancellationReason | None = None,
    ) -> SetupIntent:
        return await self._requester.send(
            HttpMethod.POST,
            self._path(intent, "cancel"),
            body={"cancellation_reason": cancellation_reason},
            expect=SetupIntent,
        )

    async def list_all(self, filters: ParamTree = None) -> StripeList[SetupIntent]:
        return await self._requester.send(
            HttpMethod.GET,
            self._path(),
            query=filters,
            expect=StripeList[SetupIntent],
        )
