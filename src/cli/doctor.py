"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
from typing import Optional

import httpx
import typer
from rich.console import Console

from adapters.http_client import build_async_client
from cli.ui_components import build_checks_table, build_settings_table
from core.config import AppSettings, write_user_env_vars
from core.credentials import select_credential
from core.domain.environment import Environment
from core.errors import ConfigurationError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings, transport: httpx.AsyncBaseTransport | None = None) -> tuple[bool, str]:
    """Reachability only: any HTTP answer (even 401) counts as OK."""

    try:
        async with build_async_client(settings, transport=transport) as client:
            response = await client.get(settings.api_base)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


@app.command()
def run(
    environment: Optional[Environment] = typer.Option(
        None,
        "--environment",
        "-e",
        case_sensitive=False,
        help="Override STRIPE_BRIDGE_ENVIRONMENT for this check.",
    ),
    skip_network: bool = typer.Option(False, "--skip-network", help="Do not contact the API host."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    env = environment or settings.environment

    _console.print(build_settings_table(settings))

    table = build_checks_table()
    table.add_row("Environment", "OK", env.label())

    ok_key = True
    try:
        credential = select_credential(settings, env)
        table.add_row("Credential", "OK", f"{credential.kind.value} key {credential.hint()}")
    except ConfigurationError as exc:
        ok_key = False
        table.add_row("Credential", "FAIL", exc.message)

    if not env.is_production and not settings.test_api_key:
        table.add_row("Test key", "OPTIONAL", "No test key set -> live key is used outside production")

    if skip_network:
        table.add_row("HTTP connectivity", "SKIPPED", settings.api_base)
    else:
        ok_http, detail_http = asyncio.run(_check_http(settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_key:
        _console.print("\n[yellow]Note:[/yellow] run `stripe-bridge doctor setup-keys` to store your keys.")
        raise typer.Exit(code=1)


@app.command(name="setup-keys")
def setup_keys() -> None:
    """Interactive key setup (stores config in the user config .env).

    Avoids manual .env editing; empty answers keep the stored value.
    """

    live_key = typer.prompt("Live secret key", default="", show_default=False, hide_input=True).strip()
    test_key = typer.prompt("Test secret key", default="", show_default=False, hide_input=True).strip()
    environment = typer.prompt(
        "Environment",
        default=Environment.default().value,
        show_default=True,
    ).strip().lower()

    try:
        env = Environment(environment)
    except ValueError as exc:
        choices = ", ".join(e.value for e in Environment)
        raise typer.BadParameter(f"environment must be one of: {choices}") from exc

    if live_key and not live_key.startswith(("sk_", "rk_")):
        _console.print("[yellow]Warning:[/yellow] live key does not look like a secret key (sk_/rk_).")

    env_path = write_user_env_vars(
        {
            "STRIPE_BRIDGE_API_KEY": live_key or None,
            "STRIPE_BRIDGE_TEST_API_KEY": test_key or None,
            "STRIPE_BRIDGE_ENVIRONMENT": env.value,
        }
    )

    _console.print(f"[green]Saved keys to:[/green] {env_path}")
