"""
CLI commands for mkrdash.
"""

from mkrdash.cli.dashboards import (
    generate_dashboards_command,
    list_dashboards_command,
    migrate_dashboard_command,
    pull_dashboards_command,
    push_dashboard_command,
)

__all__ = [
    "list_dashboards_command",
    "generate_dashboards_command",
    "pull_dashboards_command",
    "push_dashboard_command",
    "migrate_dashboard_command",
]
