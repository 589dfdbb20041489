"""Selección de credenciales por entorno.

Regla:
- Fuera de producción, si hay test key configurada, se usa la test key.
- En cualquier otro caso, la key principal (live).

La selección es una función pura de (settings, entorno); se evalúa en cada
llamada y nunca se cachea.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from pydantic import SecretStr

from core.config import AppSettings
from core.domain.environment import Environment
from core.errors import ConfigurationError


class CredentialKind(str, Enum):
    LIVE = "live"
    TEST = "test"


@dataclass(frozen=True)
class Credential:
    """API key ya elegida. `repr()` nunca incluye el secreto."""

    kind: CredentialKind
    value: str = field(repr=False)

    def authorization_header(self) -> str:
        return f"Bearer {self.value}"

    def hint(self) -> str:
        """Versión enmascarada para diagnósticos (`sk_test_…1234`)."""

        head = "_".join(self.value.split("_")[:2])
        tail = self.value[-4:] if len(self.value) >= 12 else ""
        if head == self.value:
            head = ""
        return f"{head}_…{tail}" if head else f"…{tail}"


def _secret(value: SecretStr | None) -> str | None:
    if value is None:
        return None
    raw = value.get_secret_value().strip()
    return raw or None


def select_credential(settings: AppSettings, environment: Environment | None = None) -> Credential:
    env = environment or settings.environment

    test_key = _secret(settings.test_api_key)
    if not env.is_production and test_key:
        return Credential(kind=CredentialKind.TEST, value=test_key)

    live_key = _secret(settings.api_key)
    if not live_key:
        raise ConfigurationError(
            "No API key configured (set STRIPE_BRIDGE_API_KEY).",
            {"environment": env.value},
        )
    return Credential(kind=CredentialKind.LIVE, value=live_key)
