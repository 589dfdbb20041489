"""Runtime environments for stripe-bridge.

The environment decides which API credential a request is signed with.
Keeping it in the domain layer lets the config, the dispatcher and the CLI
share a single source of truth without importing each other.
"""

from __future__ import annotations

from enum import Enum


class Environment(str, Enum):
    """Deployment context the process is running in."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

    @classmethod
    def default(cls) -> "Environment":
        """Return the environment assumed when none is configured."""

        return cls.PRODUCTION

    @property
    def is_production(self) -> bool:
        return self is Environment.PRODUCTION

    def label(self) -> str:
        """Human readable label for the CLI and logging."""

        return "live" if self.is_production else f"test ({self.value})"
