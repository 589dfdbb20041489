"""Descripción inmutable de una petición a la API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from core.params import ParamTree


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


@dataclass(frozen=True)
class RequestSpec:
    """Una llamada: se construye una vez y la posee quien la emite.

    - `query`: string ya construido (`"customer=cus_1&type=card"`) o árbol.
    - `body`: árbol de parámetros; se aplana a form-encoding al enviar.
    """

    method: HttpMethod
    path: str
    query: str | ParamTree = None
    body: ParamTree = None
    headers: Mapping[str, str] = field(default_factory=dict)
