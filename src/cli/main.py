"""CLI principal (Typer).

Comandos:
- `doctor run` / `doctor setup-keys`: diagnóstico y configuración de keys.
- `flatten`: muestra cómo se codifica un árbol JSON en el body de la API.
"""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.console import Console

from cli import doctor
from cli.ui_components import build_wire_params_table, print_banner
from core.logging_setup import configure_logging
from core.params import encode_form, flatten

app = typer.Typer(
    no_args_is_help=True,
    help="stripe-bridge: typed async client for the Stripe API.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="DEBUG, INFO, WARNING... (default: STRIPE_BRIDGE_LOG_LEVEL or WARNING).",
    ),
    banner: bool = typer.Option(False, "--banner", help="Print the welcome banner."),
) -> None:
    configure_logging(log_level)
    if banner:
        print_banner(_console)


@app.command(name="flatten")
def flatten_command(
    payload: str = typer.Argument(..., help='JSON object, e.g. \'{"metadata": {"order": 42}}\'.'),
    raw: bool = typer.Option(False, "--raw", help="Print the url-encoded body instead of a table."),
) -> None:
    """Show the form parameters a JSON tree is sent as."""

    try:
        tree = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"invalid JSON: {exc.msg}", param_hint="PAYLOAD") from exc

    if raw:
        typer.echo(encode_form(tree))
        return
    _console.print(build_wire_params_table(flatten(tree)))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
