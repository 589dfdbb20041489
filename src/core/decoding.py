"""Decodificación de respuestas y resolución de variantes.

Responsabilidad:
- El status HTTP manda: cualquier status no 2xx se decodifica contra el sobre
  de error y se lanza `RemoteError`, aunque el cuerpo se parezca a un éxito.
- En 2xx se decodifica contra el tipo esperado (modelo pydantic o cualquier
  tipo aceptado por `TypeAdapter`, p.ej. una unión discriminada).
- Para uniones sin etiqueta fiable, `decode_first_match` recorre una tabla
  explícita de candidatos en orden de prioridad.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Sequence, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic.config import ConfigDict

from core.errors import ErrorKind, MalformedResponseError, RemoteError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    message: str | None = None
    param: str | None = None
    code: str | None = None
    decline_code: str | None = None
    doc_url: str | None = None


class ErrorEnvelope(BaseModel):
    """`{"error": {...}}` tal como lo documenta la API."""

    model_config = ConfigDict(extra="ignore")

    error: ErrorBody


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _type_name(expected: Any) -> str:
    return getattr(expected, "__name__", None) or repr(expected)


def _validation_details(exc: ValidationError) -> list[dict[str, Any]]:
    return [
        {"loc": list(err.get("loc", ())), "type": err.get("type"), "msg": err.get("msg")}
        for err in exc.errors(include_url=False)
    ]


def _lower_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    return {name.lower(): value for name, value in (headers or {}).items()}


def decode_error(
    status_code: int,
    content: bytes | str,
    headers: Mapping[str, str] | None = None,
) -> RemoteError:
    """Construye el `RemoteError` de una respuesta no exitosa."""

    try:
        envelope = ErrorEnvelope.model_validate_json(content)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"HTTP {status_code} response does not carry a valid error envelope.",
            status_code=status_code,
            details={"errors": _validation_details(exc)},
        ) from exc

    body = envelope.error
    return RemoteError(
        body.message or f"HTTP {status_code}",
        kind=ErrorKind(body.type),
        status_code=status_code,
        param=body.param,
        code=body.code,
        decline_code=body.decline_code,
        doc_url=body.doc_url,
        request_id=_lower_headers(headers).get("request-id"),
    )


def decode_body(content: bytes | str, expected: type[T] | Any, *, status_code: int | None = None) -> T:
    """Decodifica un cuerpo JSON exitoso contra `expected`."""

    try:
        if isinstance(expected, type) and issubclass(expected, BaseModel):
            return expected.model_validate_json(content)  # type: ignore[return-value]
        return TypeAdapter(expected).validate_json(content)
    except ValidationError as exc:
        raise MalformedResponseError(
            f"Response does not match {_type_name(expected)}.",
            status_code=status_code,
            details={"expected": _type_name(expected), "errors": _validation_details(exc)},
        ) from exc


def decode_response(
    status_code: int,
    content: bytes | str,
    expected: type[T] | Any,
    *,
    headers: Mapping[str, str] | None = None,
) -> T:
    """Devuelve el valor decodificado o lanza `RemoteError`/`MalformedResponseError`."""

    if not is_success(status_code):
        raise decode_error(status_code, content, headers)
    return decode_body(content, expected, status_code=status_code)


@dataclass(frozen=True)
class ShapeCandidate:
    """Entrada de la tabla de resolución por forma.

    - `tag`: valor de `object` que identifica la variante cuando está presente.
    - `signature`: claves que deben existir cuando el payload no trae etiqueta.
    """

    kind: str
    tag: str
    signature: tuple[str, ...]
    model: type[BaseModel]

    def matches(self, payload: Mapping[str, Any]) -> bool:
        tag = payload.get("object")
        if isinstance(tag, str):
            return tag == self.tag
        return all(key in payload for key in self.signature)


def decode_first_match(
    payload: Mapping[str, Any],
    candidates: Sequence[ShapeCandidate],
) -> BaseModel | None:
    """Primer candidato (en orden) cuyo predicado acepta y cuyo modelo valida."""

    for candidate in candidates:
        if not candidate.matches(payload):
            continue
        try:
            return candidate.model.model_validate(payload)
        except ValidationError as exc:
            logger.debug(
                "Shape candidate %s rejected payload (%d errors)",
                candidate.kind,
                exc.error_count(),
            )
    return None
