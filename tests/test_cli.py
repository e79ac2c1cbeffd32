"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from contextlib import contextmanager

import httpx
import pytest
from click.testing import CliRunner
from structlog.testing import capture_logs

from dokploy_client import get_settings
from dokploy_provider import cli as cli_module
from dokploy_provider.cli import cli
from dokploy_provider.tools import ProviderTools
from tests.conftest import stateful_env


@pytest.fixture(autouse=True)
def quiet_logs(monkeypatch):
    monkeypatch.setattr(cli_module, "configure_logging", lambda settings: None)
    with capture_logs() as logs:
        yield logs


@pytest.fixture
def runner(api, monkeypatch):
    @contextmanager
    def provider():
        yield ProviderTools(api)

    monkeypatch.setattr(cli_module, "_provider", provider)
    return CliRunner()


class TestManifest:
    def test_prints_json(self, runner):
        result = runner.invoke(cli, ["manifest"])

        assert result.exit_code == 0
        manifest = json.loads(result.output)
        assert manifest["provider_name"] == "dokploy"


class TestEnvCommands:
    def test_set_keeps_other_keys(self, runner, platform):
        stored = stateful_env(platform, "A=1")

        result = runner.invoke(cli, ["env", "set", "app-1", "B", "2"])

        assert result.exit_code == 0
        assert result.output == "Set B\n"
        assert stored() == "A=1\nB=2"

    def test_unset(self, runner, platform):
        stored = stateful_env(platform, "A=1\nB=2")

        result = runner.invoke(cli, ["env", "unset", "app-1", "A"])

        assert result.exit_code == 0
        assert stored() == "B=2"

    def test_list_hides_values_by_default(self, runner, platform):
        stateful_env(platform, "A=1\nB=2")

        assert runner.invoke(cli, ["env", "list", "app-1"]).output == "A\nB\n"
        assert runner.invoke(cli, ["env", "list", "app-1", "--show-values"]).output == "A=1\nB=2\n"

    def test_list_empty(self, runner, platform):
        stateful_env(platform, "")

        assert runner.invoke(cli, ["env", "list", "app-1"]).output == "No variables.\n"

    def test_platform_error_is_reported(self, runner, platform):
        platform.get("application.one", httpx.Response(404, text="Application not found"))

        result = runner.invoke(cli, ["env", "set", "app-1", "A", "1"])

        assert result.exit_code == 1
        assert "resource not found" in result.output


class TestResourceCommands:
    def test_read(self, runner, platform):
        platform.get("project.one", {"projectId": "p-1", "name": "demo", "description": "d"})

        result = runner.invoke(cli, ["read", "dokploy_project", "p-1"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"id": "p-1", "name": "demo", "description": "d"}

    def test_read_not_found(self, runner, platform):
        platform.get("project.one", httpx.Response(404, text="Project not found"))

        result = runner.invoke(cli, ["read", "dokploy_project", "gone"])

        assert result.exit_code == 1
        assert "dokploy_project gone not found" in result.output

    def test_read_unknown_type(self, runner):
        result = runner.invoke(cli, ["read", "dokploy_lambda", "x"])

        assert result.exit_code == 1
        assert "Unknown resource type" in result.output

    def test_destroy(self, runner, platform):
        platform.post("port.delete", True)

        result = runner.invoke(cli, ["destroy", "dokploy_port", "port-1"])

        assert result.exit_code == 0
        assert result.output == "Deleted dokploy_port port-1\n"
        assert platform.calls_to("port.delete")[0].body == {"portId": "port-1"}

    def test_destroy_env_var_by_id(self, runner, platform):
        stored = stateful_env(platform, "A=1\nB=2")

        result = runner.invoke(cli, ["destroy", "dokploy_environment_variable", "app-1_B"])

        assert result.exit_code == 0
        assert stored() == "A=1"

    def test_bad_attr(self, runner):
        result = runner.invoke(cli, ["read", "dokploy_port", "port-1", "--attr", "novalue"])

        assert result.exit_code == 2
        assert "key=value" in result.output

    def test_apply_creates_without_id(self, runner, platform, tmp_path):
        platform.post("project.create", {"projectId": "p-9", "name": "new"})
        plan = tmp_path / "project.json"
        plan.write_text(json.dumps({"name": "new"}))

        result = runner.invoke(cli, ["apply", "dokploy_project", str(plan)])

        assert result.exit_code == 0
        assert json.loads(result.output)["id"] == "p-9"


def test_missing_configuration_is_a_usage_error(monkeypatch):
    monkeypatch.setenv("DOKPLOY_HOST", "")
    monkeypatch.setenv("DOKPLOY_API_KEY", "")
    get_settings.cache_clear()
    try:
        result = CliRunner().invoke(cli, ["env", "list", "app-1"])
    finally:
        get_settings.cache_clear()

    assert result.exit_code == 2
    assert "DOKPLOY_HOST" in result.output
