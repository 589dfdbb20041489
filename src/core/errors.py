"""Jerarquía de errores del cliente.

Todo fallo de `StripeClient.send` termina en una de estas tres clases:
- `MalformedResponseError`: la respuesta no encaja con la forma esperada.
- `RemoteError`: la API devolvió su sobre de error documentado.
- `TransportFailureError`: la llamada de red en sí falló.

`ConfigurationError` se lanza antes de tocar la red (p.ej. sin API key).
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Categoría (`error.type`) del sobre de error remoto."""

    API_CONNECTION_ERROR = "api_connection_error"
    API_ERROR = "api_error"
    AUTHENTICATION_ERROR = "authentication_error"
    CARD_ERROR = "card_error"
    IDEMPOTENCY_ERROR = "idempotency_error"
    INVALID_REQUEST_ERROR = "invalid_request_error"
    RATE_LIMIT_ERROR = "rate_limit_error"
    UNKNOWN = "unknown"

    @classmethod
    def _missing_(cls, value: object) -> "ErrorKind":
        return cls.UNKNOWN


class StripeBridgeError(Exception):
    """Base de todos los errores del paquete."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Representación serializable (logs, respuestas JSON)."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, details={self.details})"


class ConfigurationError(StripeBridgeError):
    """Configuración insuficiente para firmar la petición."""


class MalformedResponseError(StripeBridgeError):
    """El cuerpo no se pudo decodificar contra la forma esperada."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code


class TransportFailureError(StripeBridgeError):
    """La llamada HTTP no llegó a producir una respuesta."""


class RemoteError(StripeBridgeError):
    """Error documentado devuelto por la API (status no 2xx).

    Se expone tal cual para que el llamador pueda ramificar por `kind`,
    `code` o `param`.
    """

    def __init__(
        self,
        message: str,
        *,
        kind: ErrorKind,
        status_code: int,
        param: str | None = None,
        code: str | None = None,
        decline_code: str | None = None,
        doc_url: str | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(
            message,
            {
                "kind": kind.value,
                "status_code": status_code,
                "param": param,
                "code": code,
                "decline_code": decline_code,
                "request_id": request_id,
            },
        )
        self.kind = kind
        self.status_code = status_code
        self.param = param
        self.code = code
        self.decline_code = decline_code
        self.doc_url = doc_url
        self.request_id = request_id
