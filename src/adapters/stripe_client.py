"""Dispatcher autenticado: la única primitiva de envío de todas las rutas.

Responsabilidad:
- Componer método, path, query, cuerpo aplanado y cabeceras.
- Elegir la credencial según el entorno (en cada llamada, sin caché).
- Hacer exactamente una llamada HTTP (sin reintentos).
- Pasar la respuesta por el decodificador y devolver su valor.

Nunca se loguea la API key; solo el tipo de credencial (`live`/`test`).
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from typing import Any, TypeVar

import httpx

from adapters.http_client import build_async_client
from adapters.routes import (
    CustomerRoutes,
    EventRoutes,
    PaymentMethodRoutes,
    SetupIntentRoutes,
)
from core.config import AppSettings
from core.credentials import Credential, select_credential
from core.decoding import decode_response
from core.domain.environment import Environment
from core.domain.request import HttpMethod, RequestSpec
from core.errors import TransportFailureError
from core.params import ParamTree, encode_form, encode_query

logger = logging.getLogger(__name__)

T = TypeVar("T")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def default_headers(api_version: str) -> dict[str, str]:
    return {
        "Stripe-Version": api_version,
        "Content-Type": FORM_CONTENT_TYPE,
    }


class StripeClient:
    """Cliente asíncrono de la API.

    Ejemplo:
        client = StripeClient(AppSettings(api_key="sk_live_..."))
        customer = await client.customers.retrieve("cus_123")
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

        self.customers = CustomerRoutes(self)
        self.payment_methods = PaymentMethodRoutes(self)
        self.setup_intents = SetupIntentRoutes(self)
        self.events = EventRoutes(self)

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def build_url(self, request: RequestSpec) -> str:
        url = f"{self._settings.api_base.rstrip('/')}/{request.path.lstrip('/')}"
        query = encode_query(request.query)
        return f"{url}?{query}" if query else url

    def build_headers(self, credential: Credential, extra_headers: Mapping[str, str] | None = None) -> httpx.Headers:
        headers = httpx.Headers(default_headers(self._settings.api_version))
        headers["Authorization"] = credential.authorization_header()
        # Las cabeceras del llamador ganan en caso de conflicto.
        for name, value in (extra_headers or {}).items():
            headers[name] = value
        return headers

    async def send(
        self,
        method: HttpMethod | str,
        path: str,
        *,
        expect: type[T] | Any,
        query: str | ParamTree = None,
        body: ParamTree = None,
        headers: Mapping[str, str] | None = None,
        environment: Environment | None = None,
    ) -> T:
        request = RequestSpec(
            method=HttpMethod(str(getattr(method, "value", method)).upper()),
            path=path,
            query=query,
            body=body,
            headers=dict(headers or {}),
        )
        return await self.dispatch(request, expect, environment=environment)

    async def dispatch(
        self,
        request: RequestSpec,
        expect: type[T] | Any,
        *,
        environment: Environment | None = None,
    ) -> T:
        credential = select_credential(self._settings, environment)
        url = self.build_url(request)
        headers = self.build_headers(credential, request.headers)
        content = encode_form(request.body) if request.body is not None else None

        log_context = {
            "method": request.method.value,
            "path": request.path,
            "credential": credential.kind.value,
        }
        logger.debug("Stripe request %s %s", request.method.value, request.path, extra=log_context)

        started = time.perf_counter()
        try:
            async with build_async_client(self._settings, transport=self._transport) as client:
                response = await client.request(
                    request.method.value,
                    url,
                    headers=headers,
                    content=content,
                )
        except httpx.HTTPError as exc:
            logger.warning(
                "Stripe request %s %s failed: %s",
                request.method.value,
                request.path,
                exc.__class__.__name__,
                extra=log_context,
            )
            raise TransportFailureError(
                f"{request.method.value} {request.path} failed: {exc}",
                {**log_context, "cause": exc.__class__.__name__},
            ) from exc

        elapsed_ms = round((time.perf_counter() - started) * 1000, 1)
        logger.info(
            "Stripe request %s %s -> %s (%.1f ms)",
            request.method.value,
            request.path,
            response.status_code,
            elapsed_ms,
            extra={**log_context, "status_code": response.status_code, "elapsed_ms": elapsed_ms},
        )
        return decode_response(response.status_code, response.content, expect, headers=response.headers)
