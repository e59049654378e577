"""Pull remote dashboards to local files and push them back."""

from __future__ import annotations

from pathlib import Path

import structlog

from mkrdash.dashboards.artifacts import artifact_name, read_dashboard, write_dashboard
from mkrdash.dashboards.generator import DashboardAPI, PublishResult

logger = structlog.get_logger()


def pull_dashboards(client: DashboardAPI, output_dir: str | Path = ".") -> list[Path]:
    """Save every remote dashboard to ``<output_dir>/dashboard-<id>.json``."""
    output_dir = Path(output_dir)
    saved = []
    for summary in client.find_dashboards():
        dashboard = client.find_dashboard(summary.id)
        path = write_dashboard(dashboard, output_dir / artifact_name(summary.id))
        logger.info("dashboard_saved", path=str(path), title=summary.title)
        saved.append(path)
    return saved


def push_dashboard(client: DashboardAPI, file_path: str | Path) -> PublishResult:
    """Update the dashboard named by the file's id, or create it when there is none."""
    dashboard = read_dashboard(file_path)

    if dashboard.id:
        # fails with a provider error when the id does not exist
        client.find_dashboard(dashboard.id)
        updated = client.update_dashboard(dashboard.id, dashboard)
        logger.info("dashboard_updated", id=dashboard.id, path=str(file_path))
        return PublishResult("update", updated)

    created = client.create_dashboard(dashboard)
    logger.info("dashboard_created", id=created.id, path=str(file_path))
    return PublishResult("create", created)
