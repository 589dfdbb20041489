"""Aplanado de parámetros al formato de cable (form-encoded con corchetes).

La API espera pares planos `clave=valor` donde la clave codifica el
anidamiento: `metadata[order_id]=42`, `items[0][price]=price_123`.

Reglas:
- Mapas: la clave hija se compone como `padre[hija]`; en la raíz queda sin
  corchetes.
- Listas: índice explícito (`expand[0]`, `items[1][quantity]`). Es la única
  codificación de arrays del proyecto.
- `None` significa "ausente": nunca se emite `clave=`.
- Mapas/listas vacíos no aportan pares.
- El orden de salida es el orden de iteración de la entrada.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Sequence, Union
from urllib.parse import urlencode

Scalar = Union[str, int, float, bool, Decimal, Enum, datetime]
ParamTree = Union[Scalar, Sequence["ParamTree"], Mapping[str, "ParamTree"], None]
WireParam = tuple[str, str]


def encode_scalar(value: Scalar) -> str:
    """Convierte un escalar a su representación de cable."""

    # bool antes que int: True es un int en Python.
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return encode_scalar(value.value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return str(int(value.timestamp()))
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    raise TypeError(f"Unsupported parameter type: {type(value).__name__}")


def _child_key(prefix: str, key: str) -> str:
    return f"{prefix}[{key}]" if prefix else key


def _flatten_into(out: list[WireParam], prefix: str, value: ParamTree) -> None:
    if value is None:
        return
    if isinstance(value, Mapping):
        for key, child in value.items():
            _flatten_into(out, _child_key(prefix, str(key)), child)
        return
    if isinstance(value, (list, tuple)):
        for index, child in enumerate(value):
            _flatten_into(out, _child_key(prefix, str(index)), child)
        return
    out.append((prefix, encode_scalar(value)))


def flatten(tree: ParamTree) -> list[WireParam]:
    """Aplana un árbol de parámetros en pares `(clave, valor)` ordenados.

    Ejemplo:
        >>> flatten({"a": {"b": "c"}})
        [('a[b]', 'c')]
    """

    pairs: list[WireParam] = []
    _flatten_into(pairs, "", tree)
    return pairs


def encode_form(tree: ParamTree) -> str:
    """Cuerpo `application/x-www-form-urlencoded` para un árbol."""

    return urlencode(flatten(tree))


def encode_query(query: str | ParamTree) -> str:
    """Query string a partir de un string ya construido o de un árbol."""

    if query is None:
        return ""
    if isinstance(query, str):
        return query.lstrip("?")
    return urlencode(flatten(query))
