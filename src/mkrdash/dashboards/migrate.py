"""
Legacy dashboard migration.

A legacy dashboard holds a single markdown body. Migration deletes it and
recreates it as a current dashboard with one full-size markdown widget.
The delete happens first; if the create then fails the migrated document
is saved locally so it can be replayed with ``dashboards push``.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TextIO

import structlog

from mkrdash.core.errors import ConfigurationError, LocalIOError, MigrationError
from mkrdash.dashboards.artifacts import artifact_name, dumps, write_dashboard
from mkrdash.dashboards.generator import DashboardAPI
from mkrdash.dashboards.models import Dashboard, Layout, Widget

logger = structlog.get_logger()


def migrate_legacy_dashboard(legacy: Dashboard) -> Dashboard:
    """Non-legacy equivalent of ``legacy`` carrying its body in a markdown widget."""
    return Dashboard(
        title=legacy.title,
        memo=legacy.memo,
        url_path=legacy.url_path,
        is_legacy=False,
        widgets=[
            Widget(
                type="markdown",
                title="",
                layout=Layout(x=0, y=0, width=24, height=24),
                markdown=legacy.body_markdown,
            )
        ],
    )


class DashboardMigrator:
    def __init__(
        self,
        client: DashboardAPI,
        *,
        output_dir: str | Path = ".",
        stdout: TextIO | None = None,
    ) -> None:
        self._client = client
        self._output_dir = Path(output_dir)
        self._stdout = stdout

    def migrate(self, dashboard_id: str) -> Dashboard:
        if not dashboard_id:
            raise ConfigurationError("--id is required")

        legacy = self._client.find_dashboard(dashboard_id)
        if not legacy.is_legacy:
            raise ConfigurationError("not a legacy dashboard", {"id": dashboard_id})

        logger.info("legacy_dashboard_deleting", id=dashboard_id)
        self._client.delete_dashboard(dashboard_id)

        current = migrate_legacy_dashboard(legacy)
        logger.info("dashboard_creating", id=dashboard_id, title=current.title)
        try:
            return self._client.create_dashboard(current)
        except Exception as exc:
            saved_to = self._preserve(dashboard_id, current, exc)
            raise MigrationError(
                "Failed to create a new dashboard.",
                {"id": dashboard_id, "saved_to": saved_to},
            ) from exc

    def _preserve(self, dashboard_id: str, current: Dashboard, exc: Exception) -> str:
        filename = self._output_dir / artifact_name(dashboard_id)
        logger.error("dashboard_create_failed", id=dashboard_id, error=str(exc))
        logger.warning("migrated_dashboard_saving", path=str(filename))
        logger.warning(
            "manual_push_required",
            command=f"mkrdash dashboards push --file-path {filename}",
        )

        try:
            write_dashboard(current, filename)
            return str(filename)
        except LocalIOError as io_exc:
            logger.warning("migrated_dashboard_save_failed", error=io_exc.message)
            logger.warning("migrated_dashboard_dump_stdout")
            out = self._stdout or sys.stdout
            out.write(dumps(current.to_dict()) + "\n")
            return "stdout"
