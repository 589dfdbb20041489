"""Tests for the Typer CLI (doctor, setup-keys, flatten)."""

from __future__ import annotations

import logging

import pytest
from typer.testing import CliRunner

import core.config
from cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """The CLI callback reconfigures the root logger; undo it after each test."""
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    yield
    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run commands with a clean working dir and explicit env vars."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("STRIPE_BRIDGE_API_KEY", "sk_live_abcdefgh9999")
    monkeypatch.setenv("STRIPE_BRIDGE_TEST_API_KEY", "sk_test_abcdefgh1234")
    monkeypatch.setenv("STRIPE_BRIDGE_ENVIRONMENT", "production")
    return tmp_path


class TestDoctor:
    def test_reports_selected_credential_without_secret(self, isolated_env):
        result = runner.invoke(app, ["doctor", "run", "--skip-network", "--environment", "testing"])

        assert result.exit_code == 0, result.output
        assert "sk_test_…1234" in result.output
        assert "abcdefgh" not in result.output
        assert "SKIPPED" in result.output

    def test_missing_key_exits_with_error(self, isolated_env, monkeypatch):
        monkeypatch.setenv("STRIPE_BRIDGE_API_KEY", "")

        result = runner.invoke(app, ["doctor", "run", "--skip-network"])

        assert result.exit_code == 1
        assert "FAIL" in result.output

    def test_setup_keys_writes_user_env(self, isolated_env, monkeypatch):
        env_path = isolated_env / "config" / ".env"
        monkeypatch.setattr(core.config, "get_user_env_file", lambda: env_path)

        result = runner.invoke(app, ["doctor", "setup-keys"], input="sk_live_new\n\ntesting\n")

        assert result.exit_code == 0, result.output
        content = env_path.read_text(encoding="utf-8")
        assert "STRIPE_BRIDGE_API_KEY=sk_live_new" in content
        assert "STRIPE_BRIDGE_ENVIRONMENT=testing" in content
        assert "STRIPE_BRIDGE_TEST_API_KEY" not in content

    def test_setup_keys_rejects_unknown_environment(self, isolated_env, monkeypatch):
        env_path = isolated_env / "config" / ".env"
        monkeypatch.setattr(core.config, "get_user_env_file", lambda: env_path)

        result = runner.invoke(app, ["doctor", "setup-keys"], input="\n\nstaging\n")

        assert result.exit_code != 0
        assert not env_path.exists()


class TestFlatten:
    def test_raw_output(self):
        result = runner.invoke(app, ["flatten", '{"a": {"b": "c"}, "tags": ["x", "y"]}', "--raw"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "a%5Bb%5D=c&tags%5B0%5D=x&tags%5B1%5D=y"

    def test_table_output_keeps_brackets(self):
        result = runner.invoke(app, ["flatten", '{"metadata": {"order": 42}}'])

        assert result.exit_code == 0, result.output
        assert "metadata[order]" in result.output
        assert "42" in result.output

    def test_invalid_json(self):
        result = runner.invoke(app, ["flatten", "{not json"])
        assert result.exit_code == 2
