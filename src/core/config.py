"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Las credenciales y el entorno se inyectan en el cliente como un valor
  explícito; ningún módulo lee `os.environ` por su cuenta.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.environment import Environment

DEFAULT_API_BASE = "https://api.stripe.com/v1"
DEFAULT_API_VERSION = "2019-09-09"


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "stripe-bridge"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "stripe-bridge"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "stripe-bridge"
    return Path.home() / ".config" / "stripe-bridge"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario.

    Las claves con valor `None` se ignoran (no borran lo existente).
    """

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# stripe-bridge user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - `SecretStr` evita que las API keys aparezcan en `repr()` o en logs.
    """

    model_config = SettingsConfigDict(
        env_prefix="STRIPE_BRIDGE_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    api_key: SecretStr | None = Field(
        default=None,
        description="Secret key principal (live). Obligatoria para enviar peticiones.",
    )
    test_api_key: SecretStr | None = Field(
        default=None,
        description="Secret key de test; solo se usa fuera de producción.",
    )
    environment: Environment = Field(
        default=Environment.PRODUCTION,
        description="Entorno de ejecución; decide qué credencial se usa.",
    )

    api_base: str = Field(
        default=DEFAULT_API_BASE,
        min_length=8,
        description="URL base de la API (sin barra final).",
    )
    api_version: str = Field(
        default=DEFAULT_API_VERSION,
        min_length=1,
        description="Valor fijo de la cabecera `Stripe-Version`.",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="stripe-bridge/0.1",
        min_length=1,
        description="User-Agent enviado en cada petición.",
    )
