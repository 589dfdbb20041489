"""Contrato del dispatcher autenticado.

Por qué Protocol:
- Las rutas de recursos dependen de este contrato estructural y no de
  `StripeClient`; en tests se puede sustituir por cualquier objeto con
  `send`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, TypeVar, runtime_checkable

from core.domain.environment import Environment
from core.domain.request import HttpMethod
from core.params import ParamTree

T = TypeVar("T")


@runtime_checkable
class StripeRequester(Protocol):
    """Contrato mínimo para enviar una petición firmada.

    Reglas de diseño:
    - `send` es asíncrono porque hace exactamente una llamada HTTP.
    - Devuelve el valor decodificado como `expect` o lanza un error tipado.
    """

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
        """Envía la petición y decodifica la respuesta."""

        ...
