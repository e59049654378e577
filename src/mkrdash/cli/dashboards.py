"""CLI commands for Mackerel custom dashboards."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from mkrdash.cli import ux
from mkrdash.clients.mackerel import MackerelClient
from mkrdash.config.settings import Settings, get_settings
from mkrdash.core.errors import ConfigurationError, main_with_error_handling
from mkrdash.dashboards.artifacts import dumps
from mkrdash.dashboards.config import load_dashboard_config
from mkrdash.dashboards.generator import DashboardAPI, DashboardGenerator, render_dashboard
from mkrdash.dashboards.migrate import DashboardMigrator
from mkrdash.dashboards.sync import pull_dashboards, push_dashboard


def build_client(settings: Settings) -> MackerelClient:
    """Mackerel client from settings; the API key is mandatory."""
    if not settings.apikey:
        raise ConfigurationError(
            "Mackerel API key is not set (use --apikey or the MACKEREL_APIKEY environment variable)"
        )
    return MackerelClient(
        settings.apikey,
        base_url=settings.apibase,
        timeout=settings.http_timeout,
        max_retries=settings.http_max_retries,
    )


def _resolve(client: Optional[DashboardAPI], settings: Optional[Settings]) -> tuple[DashboardAPI, Settings]:
    settings = settings or get_settings()
    return client or build_client(settings), settings


@main_with_error_handling()
def list_dashboards_command(
    *,
    client: Optional[DashboardAPI] = None,
    settings: Optional[Settings] = None,
) -> int:
    """Print all dashboards as indented JSON."""
    client, _ = _resolve(client, settings)
    dashboards = client.find_dashboards()
    print(dumps([d.to_dict() for d in dashboards]))
    return 0


@main_with_error_handling()
def generate_dashboards_command(
    file_path: str,
    print_only: bool = False,
    org: Optional[str] = None,
    *,
    client: Optional[DashboardAPI] = None,
    settings: Optional[Settings] = None,
) -> int:
    """Generate a dashboard from YAML and print it or push it to Mackerel.

    Args:
        file_path: Path to the dashboard YAML file
        print_only: Print the markdown instead of creating/updating the dashboard
        org: Organization name for graph URLs; looked up from the API when omitted

    Returns:
        Exit code (0 for success)
    """
    settings = settings or get_settings()
    config = load_dashboard_config(file_path)

    if print_only and org:
        # nothing to ask the API for
        print(render_dashboard(config, org, settings.web_url))
        return 0

    client, _ = _resolve(client, settings)
    generator = DashboardGenerator(client, base_url=settings.web_url)

    if org:
        markdown = render_dashboard(config, org, settings.web_url)
    else:
        markdown = generator.render(config)

    if print_only:
        print(markdown)
        return 0

    result = generator.publish(config, markdown)
    ux.success(f"Dashboard {result.action}d: {config.title} ({config.url_path})")
    return 0


@main_with_error_handling()
def pull_dashboards_command(
    output_dir: str = ".",
    *,
    client: Optional[DashboardAPI] = None,
    settings: Optional[Settings] = None,
) -> int:
    """Save every dashboard to dashboard-<id>.json."""
    client, _ = _resolve(client, settings)
    saved = pull_dashboards(client, output_dir)
    for path in saved:
        ux.info(f"Dashboard file is saved to '{path}'")
    return 0


@main_with_error_handling()
def push_dashboard_command(
    file_path: Optional[str],
    *,
    client: Optional[DashboardAPI] = None,
    settings: Optional[Settings] = None,
) -> int:
    """Create or update a dashboard from a dashboard-<id>.json file."""
    if not file_path:
        raise ConfigurationError("--file-path is required")
    if not Path(file_path).exists():
        raise ConfigurationError(f"Dashboard file not found: {file_path}")

    client, _ = _resolve(client, settings)
    result = push_dashboard(client, file_path)
    ux.success(f"Dashboard {result.action}d from {file_path}")
    return 0


@main_with_error_handling()
def migrate_dashboard_command(
    dashboard_id: Optional[str],
    output_dir: str = ".",
    *,
    client: Optional[DashboardAPI] = None,
    settings: Optional[Settings] = None,
) -> int:
    """Replace a legacy dashboard with a widget-based one."""
    if not dashboard_id:
        raise ConfigurationError("--id is required")

    client, _ = _resolve(client, settings)
    created = DashboardMigrator(client, output_dir=output_dir).migrate(dashboard_id)
    ux.success(f"Dashboard {dashboard_id} migrated (new id: {created.id})")
    return 0
