"""Piezas comunes de las rutas."""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from pydantic import BaseModel
from pydantic.config import ConfigDict

from core.interfaces.requester import StripeRequester

STRIPE_ACCOUNT_HEADER = "Stripe-Account"


class RouteParams(BaseModel):
    """Struct de opciones de una ruta: campos opcionales con nombre.

    Los campos en `None` no se envían (nunca `clave=`).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_params(self) -> dict[str, Any]:
        return self.model_dump(mode="python", exclude_none=True)


def connected_account_headers(account: str | None) -> dict[str, str]:
    return {STRIPE_ACCOUNT_HEADER: account} if account else {}


class BaseRoutes:
    _base_path = "/"

    def __init__(self, requester: StripeRequester) -> None:
        self._requester = requester

    def _path(self, *segments: str) -> str:
        return "/".join([self._base_path.rstrip("/"), *(quote(segment, safe="") for segment in segments)])
