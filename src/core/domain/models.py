"""Modelos base del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- La validación estricta es justamente la decodificación: un campo requerido
  ausente o de tipo incorrecto se convierte en `ValidationError`.
- Los nombres de cable (snake_case) coinciden con los atributos Python; los
  pocos que difieren se declaran con `alias`.

Nota:
- Los campos desconocidos del cable se ignoran (`extra="ignore"`).
- Enteros, booleanos y timestamps son estrictos (`StrictInt`, `StrictBool`,
  `Strict()`): `"100"` o `"false"` no se aceptan como número o booleano.
  Enums y `Decimal` aceptan su valor de cable (`"paid"`, `12.5`).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import BaseModel, BeforeValidator, Field, PlainSerializer, Strict, StrictBool
from pydantic.config import ConfigDict


def _from_epoch(value: object) -> object:
    # Enteros = segundos desde epoch (nunca milisegundos). En JSON, `Strict()`
    # sigue aceptando strings de fecha, así que se rechazan aquí.
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError) as exc:
            raise ValueError(f"timestamp out of range: {value}") from exc
    raise ValueError(f"timestamp must be epoch seconds, got {type(value).__name__}")


Timestamp = Annotated[
    datetime,
    Strict(),
    BeforeValidator(_from_epoch),
    PlainSerializer(lambda value: int(value.timestamp()), return_type=int, when_used="json"),
]
"""Instante absoluto (UTC) codificado en el cable como segundos desde epoch."""


class StripeModel(BaseModel):
    """Base de todos los objetos devueltos por la API."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


def split_expandable(data: Any, field: str, id_field: str) -> Any:
    """Normaliza un campo expandible (`"pi_123"` o `{"id": "pi_123", ...}`).

    Tras la normalización `id_field` siempre lleva el id y `field` solo lleva
    el objeto cuando la API lo expandió.
    """

    if not isinstance(data, dict):
        return data
    value = data.get(field)
    if isinstance(value, str):
        return {**data, field: None, id_field: value}
    if isinstance(value, dict):
        return {**data, id_field: value.get("id")}
    return data


T = TypeVar("T")


class StripeList(StripeModel, Generic[T]):
    """Página de una colección (`object: "list"`)."""

    object: Literal["list"] = "list"
    data: list[T] = Field(default_factory=list)
    has_more: StrictBool = False
    url: str | None = None


class DeletedObject(StripeModel):
    """Respuesta de un DELETE. Los descuentos borrados no traen `id`."""

    id: str | None = None
    object: str
    deleted: StrictBool


class Address(StripeModel):
    city: str | None = None
    country: str | None = None
    line1: str | None = None
    line2: str | None = None
    postal_code: str | None = None
    state: str | None = None


class Shipping(StripeModel):
    address: Address | None = None
    carrier: str | None = None
    name: str | None = None
    phone: str | None = None
    tracking_number: str | None = None
