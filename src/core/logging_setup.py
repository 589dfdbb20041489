"""Centralized logging setup.

Library modules only call `logging.getLogger(__name__)`; handlers are
installed here by entry points (the CLI) so embedding applications keep
control of their own logging.
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_LEVEL = "WARNING"


def _clean_env_value(value: str | None, default: str) -> str:
    if value is None:
        return default
    return value.strip().strip('"').strip("'") or default


def resolve_level(level: str | None = None) -> int:
    """Nivel explícito, o `STRIPE_BRIDGE_LOG_LEVEL`, o WARNING."""

    name = level or _clean_env_value(os.getenv("STRIPE_BRIDGE_LOG_LEVEL"), DEFAULT_LOG_LEVEL)
    resolved = logging.getLevelName(name.strip().upper())
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(level: str | None = None, *, console: Console | None = None) -> None:
    """Configure the root logger with a Rich console handler."""

    numeric_level = resolve_level(level)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        log_time_format=LOG_DATE_FORMAT,
    )
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)
    handler.setLevel(numeric_level)
    root_logger.addHandler(handler)

    # httpx loguea cada request en INFO; lo dejamos en WARNING salvo en DEBUG.
    logging.getLogger("httpx").setLevel(logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING)
