"""Tests for the dashboards CLI commands."""

import json

import pytest

from mkrdash.cli.dashboards import (
    build_client,
    generate_dashboards_command,
    list_dashboards_command,
    migrate_dashboard_command,
    pull_dashboards_command,
    push_dashboard_command,
)
from mkrdash.cli.main import build_parser, main
from mkrdash.clients.mackerel import MackerelAPIError, MackerelClient
from mkrdash.config.settings import Settings
from mkrdash.core.errors import ConfigurationError, ExitCode
from mkrdash.dashboards.models import Dashboard

DASHBOARD_YAML = """
config_version: "0.9"
title: Overview
url_path: /b
graphs:
  - headline: Blog
    column_count: 2
    graph_def:
      - service_name: blog
        graph_name: access_num
      - query: max(x)
        title: load
"""


@pytest.fixture
def settings():
    return Settings(apikey="test-key")


@pytest.fixture
def dashboard_file(tmp_path):
    path = tmp_path / "dashboard.yaml"
    path.write_text(DASHBOARD_YAML)
    return path


class TestBuildClient:
    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError, match="API key is not set"):
            build_client(Settings(apikey=None))

    def test_builds_mackerel_client(self, settings):
        assert isinstance(build_client(settings), MackerelClient)


class TestGenerateCommand:
    def test_print_with_org_needs_no_client(self, dashboard_file, capsys):
        result = generate_dashboards_command(
            str(dashboard_file), print_only=True, org="my-org", settings=Settings(apikey=None)
        )

        assert result == 0
        out = capsys.readouterr().out
        assert out.startswith("## Blog\n|:-:|:-:|\n|<iframe ")
        assert "/embed/orgs/my-org/services/blog?graph=access_num&period=1h" in out

    def test_print_looks_up_org(self, dashboard_file, fake_client, settings, capsys):
        result = generate_dashboards_command(
            str(dashboard_file), print_only=True, client=fake_client, settings=settings
        )

        assert result == 0
        assert fake_client.call_names() == ["get_org"]
        assert "/embed/orgs/my-org/" in capsys.readouterr().out

    def test_publish_updates_matching_dashboard(self, dashboard_file, fake_client, settings):
        result = generate_dashboards_command(
            str(dashboard_file), client=fake_client, settings=settings
        )

        assert result == 0
        assert fake_client.call_names() == ["get_org", "find_dashboards", "update_dashboard"]
        assert fake_client.calls[-1][1] == "2"

    def test_invalid_config_exit_code(self, tmp_path, fake_client, settings, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text('config_version: "1.0"\ntitle: T\nurl_path: t\n')

        result = generate_dashboards_command(str(path), client=fake_client, settings=settings)

        assert result == ExitCode.CONFIG_ERROR
        assert fake_client.calls == []
        assert "config_version 1.0 is not supported" in capsys.readouterr().err

    def test_api_error_exit_code(self, dashboard_file, fake_client, settings):
        def broken():
            raise MackerelAPIError("HTTP 500: boom", 500)

        fake_client.find_dashboards = broken

        result = generate_dashboards_command(
            str(dashboard_file), client=fake_client, settings=settings
        )

        assert result == ExitCode.PROVIDER_ERROR


class TestListCommand:
    def test_prints_json(self, fake_client, settings, capsys):
        result = list_dashboards_command(client=fake_client, settings=settings)

        assert result == 0
        data = json.loads(capsys.readouterr().out)
        assert [d["id"] for d in data] == ["1", "2"]


class TestPullPushCommands:
    def test_pull(self, fake_client, settings, tmp_path):
        result = pull_dashboards_command(str(tmp_path), client=fake_client, settings=settings)

        assert result == 0
        assert (tmp_path / "dashboard-1.json").exists()

    def test_push_requires_file_path(self, fake_client, settings):
        assert push_dashboard_command(None, client=fake_client, settings=settings) == (
            ExitCode.CONFIG_ERROR
        )

    def test_push(self, fake_client, settings, tmp_path):
        path = tmp_path / "dashboard-new.json"
        path.write_text(json.dumps({"title": "New", "urlPath": "/new", "widgets": []}))

        result = push_dashboard_command(str(path), client=fake_client, settings=settings)

        assert result == 0
        assert fake_client.call_names() == ["create_dashboard"]


class TestMigrateCommand:
    def test_requires_id(self, fake_client, settings, capsys):
        result = migrate_dashboard_command(None, client=fake_client, settings=settings)

        assert result == ExitCode.CONFIG_ERROR
        assert "--id is required" in capsys.readouterr().err

    def test_failure_is_non_zero(self, make_client, settings, tmp_path):
        client = make_client(
            dashboards=[Dashboard(id="x", title="L", url_path="l", body_markdown="# Title", is_legacy=True)]
        )
        client.fail_create = MackerelAPIError("HTTP 400: invalid", 400)

        result = migrate_dashboard_command("x", str(tmp_path), client=client, settings=settings)

        assert result == ExitCode.PROVIDER_ERROR
        assert (tmp_path / "dashboard-x.json").exists()


class TestMain:
    def test_parser_defaults(self):
        args = build_parser().parse_args(["dashboards"])

        assert args.command == "dashboards"
        assert args.dashboards_command is None

    def test_generate_print(self, dashboard_file, capsys, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MACKEREL_APIKEY", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            main(["dashboards", "generate", "-p", "--org", "my-org", str(dashboard_file)])

        assert exc_info.value.code == 0
        assert "## Blog" in capsys.readouterr().out

    def test_missing_api_key(self, monkeypatch, tmp_path, capsys):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("MACKEREL_APIKEY", raising=False)

        with pytest.raises(SystemExit) as exc_info:
            main(["dashboards"])

        assert exc_info.value.code == ExitCode.CONFIG_ERROR
        assert "API key is not set" in capsys.readouterr().err
