"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.config import AppSettings
from core.params import WireParam


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("stripe-bridge", style="bold cyan")
    subtitle = Text("Cliente tipado de la API de Stripe • Diagnóstico", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_checks_table(title: str = "stripe-bridge doctor") -> Table:
    table = Table(title=title)
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table


def build_settings_table(settings: AppSettings) -> Table:
    """Resumen de la configuración efectiva. Las keys solo aparecen como "set"."""

    table = Table(title="Settings")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    table.add_row("environment", settings.environment.label())
    table.add_row("api_base", settings.api_base)
    table.add_row("api_version", settings.api_version)
    table.add_row("timeout", f"{settings.http_timeout_seconds:g}s")
    table.add_row("api_key", "set" if settings.api_key else "missing")
    table.add_row("test_api_key", "set" if settings.test_api_key else "missing")
    return table


def build_wire_params_table(pairs: list[WireParam]) -> Table:
    """Tabla con los pares `clave=valor` tal como viajan en el body."""

    table = Table(title="Form parameters")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Key", style="cyan")
    table.add_column("Value", style="magenta")
    for index, (key, value) in enumerate(pairs):
        table.add_row(str(index), Text(key), Text(value))
    return table
