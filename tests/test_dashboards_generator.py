"""Tests for dashboards/generator.py."""

import pytest

from mkrdash.core.errors import ConfigurationError
from mkrdash.dashboards.config import parse_dashboard_config
from mkrdash.dashboards.generator import (
    DashboardGenerator,
    find_dashboard_id,
    render_dashboard,
    render_tables,
)
from mkrdash.dashboards.models import Dashboard


def config_for(url_path="/b", **extra):
    data = {
        "config_version": "0.9",
        "title": "Overview",
        "url_path": url_path,
        "format": "image",
        "host_graphs": [
            {"headline": "First", "host_ids": ["h1"], "graph_names": ["cpu"]},
            {"headline": "Second", "host_ids": ["h2"], "graph_names": ["memory"]},
        ],
    }
    data.update(extra)
    return parse_dashboard_config(data).normalized()


class TestRenderDashboard:
    def test_sections_in_declaration_order(self):
        markdown = render_dashboard(config_for(), "my-org")

        assert markdown.index("## First") < markdown.index("## Second")
        assert markdown.startswith("## First\n|cpu|\n|:-:|\n|[![graph](")
        assert markdown.endswith("(https://mackerel.io/orgs/my-org/hosts/h2/-/graphs/memory)|\n")

    def test_custom_web_url(self):
        markdown = render_dashboard(config_for(), "my-org", "https://mackerel.example.com")

        assert "https://mackerel.io" not in markdown

    def test_bad_section_yields_nothing(self):
        config = parse_dashboard_config(
            {
                "config_version": "0.9",
                "title": "T",
                "url_path": "t",
                "graphs": [
                    {"graph_def": [{"host_id": "h1", "graph_name": "cpu"}]},
                    {"graph_def": [{"title": "no kind"}]},
                ],
            }
        ).normalized()

        with pytest.raises(ConfigurationError):
            render_dashboard(config, "my-org")


class TestFindDashboardId:
    def test_first_match_wins(self):
        dashboards = [
            Dashboard(id="1", title="A", url_path="/a"),
            Dashboard(id="2", title="B", url_path="/b"),
            Dashboard(id="3", title="B again", url_path="/b"),
        ]

        assert find_dashboard_id(dashboards, "/b") == "2"

    def test_exact_match_only(self):
        dashboards = [Dashboard(id="1", title="A", url_path="/a/")]

        assert find_dashboard_id(dashboards, "/a") is None


class TestDashboardGenerator:
    def test_render_uses_org_name(self, fake_client):
        markdown = DashboardGenerator(fake_client).render(config_for())

        assert "/embed/orgs/my-org/hosts/h1.png" in markdown
        assert fake_client.call_names() == ["get_org"]

    def test_render_matches_offline_render(self, fake_client):
        config = config_for()

        assert DashboardGenerator(fake_client).render(config) == render_dashboard(config, "my-org")
        assert render_tables(config.tables(), "my-org") == render_dashboard(config, "my-org")

    def test_config_errors_before_network(self, fake_client):
        config = parse_dashboard_config(
            {
                "config_version": "0.9",
                "title": "T",
                "url_path": "t",
                "graphs": [{"graph_def": [{"service_name": "blog"}]}],
            }
        ).normalized()

        with pytest.raises(ConfigurationError):
            DashboardGenerator(fake_client).render(config)

        assert fake_client.calls == []

    def test_update_when_url_path_exists(self, fake_client):
        result = DashboardGenerator(fake_client).publish(config_for("/b"), "# body")

        assert result.action == "update"
        name, dashboard_id, document = fake_client.calls[-1]
        assert name == "update_dashboard"
        assert dashboard_id == "2"
        assert document.title == "Overview"
        assert document.body_markdown == "# body"
        assert document.url_path == "/b"

    def test_create_when_url_path_is_new(self, fake_client):
        result = DashboardGenerator(fake_client).publish(config_for("/c"), "# body")

        assert result.action == "create"
        assert fake_client.call_names() == ["find_dashboards", "create_dashboard"]
        assert result.dashboard.url_path == "/c"
