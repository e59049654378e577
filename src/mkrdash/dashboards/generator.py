"""
Dashboard document assembly and publication.

Renders every section of a DashboardConfig into one markdown body and
either returns it (print mode) or creates/updates the remote dashboard
whose url_path matches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Protocol

import structlog

from mkrdash.dashboards.config import DashboardConfig
from mkrdash.dashboards.markdown import MarkdownTable
from mkrdash.dashboards.models import Dashboard
from mkrdash.dashboards.urls import MACKEREL_URL

logger = structlog.get_logger()


class DashboardAPI(Protocol):
    """The subset of the Mackerel API the dashboards commands use."""

    def get_org(self) -> dict[str, Any]:
        ...

    def find_dashboards(self) -> list[Dashboard]:
        ...

    def find_dashboard(self, dashboard_id: str) -> Dashboard:
        ...

    def create_dashboard(self, dashboard: Dashboard) -> Dashboard:
        ...

    def update_dashboard(self, dashboard_id: str, dashboard: Dashboard) -> Dashboard:
        ...

    def delete_dashboard(self, dashboard_id: str) -> Dashboard:
        ...


@dataclass(frozen=True)
class PublishResult:
    action: Literal["create", "update"]
    dashboard: Dashboard


def render_dashboard(config: DashboardConfig, org_name: str, base_url: str = MACKEREL_URL) -> str:
    """Render all sections in declaration order.

    Every section is resolved before anything is rendered, so a bad
    graph_def anywhere yields no output at all.
    """
    return render_tables(config.tables(), org_name, base_url)


def render_tables(tables: list[MarkdownTable], org_name: str, base_url: str = MACKEREL_URL) -> str:
    return "".join(table.render(org_name, base_url) for table in tables)


def find_dashboard_id(dashboards: list[Dashboard], url_path: str) -> str | None:
    """ID of the first dashboard served at ``url_path``."""
    for dashboard in dashboards:
        if dashboard.url_path == url_path:
            return dashboard.id
    return None


class DashboardGenerator:
    """Builds a dashboard from config and pushes it to Mackerel."""

    def __init__(self, client: DashboardAPI, *, base_url: str = MACKEREL_URL) -> None:
        self._client = client
        self._base_url = base_url

    def render(self, config: DashboardConfig) -> str:
        # Resolve before the org lookup so config errors surface offline.
        tables = config.tables()
        org_name = self._client.get_org()["name"]
        return render_tables(tables, org_name, self._base_url)

    def publish(self, config: DashboardConfig, markdown: str) -> PublishResult:
        """Create the dashboard, or update the one already at config.url_path."""
        document = Dashboard(
            title=config.title,
            url_path=config.url_path,
            body_markdown=markdown,
        )

        dashboard_id = find_dashboard_id(self._client.find_dashboards(), config.url_path)

        if dashboard_id is None:
            created = self._client.create_dashboard(document)
            logger.info("dashboard_created", id=created.id, url_path=config.url_path)
            return PublishResult("create", created)

        updated = self._client.update_dashboard(dashboard_id, document)
        logger.info("dashboard_updated", id=dashboard_id, url_path=config.url_path)
        return PublishResult("update", updated)
