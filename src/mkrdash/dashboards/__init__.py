"""
Mackerel custom dashboard generation.

Turns a YAML description of graphs into a markdown dashboard body,
and moves dashboards between Mackerel and local JSON files.
"""

from mkrdash.dashboards.config import (
    DashboardConfig,
    GraphSection,
    HostGraphSection,
    load_dashboard_config,
    parse_dashboard_config,
)
from mkrdash.dashboards.generator import DashboardGenerator, render_dashboard
from mkrdash.dashboards.graphs import (
    ExpressionGraph,
    GraphReference,
    GraphSpec,
    HostGraph,
    RenderMode,
    RoleGraph,
    ServiceGraph,
    resolve_graph,
)
from mkrdash.dashboards.markdown import MarkdownTable
from mkrdash.dashboards.migrate import DashboardMigrator, migrate_legacy_dashboard
from mkrdash.dashboards.models import Dashboard, Layout, Widget
from mkrdash.dashboards.urls import embed_url, permalink

__all__ = [
    # Config
    "DashboardConfig",
    "HostGraphSection",
    "GraphSection",
    "load_dashboard_config",
    "parse_dashboard_config",
    # Graphs
    "GraphSpec",
    "GraphReference",
    "HostGraph",
    "ServiceGraph",
    "RoleGraph",
    "ExpressionGraph",
    "RenderMode",
    "resolve_graph",
    "embed_url",
    "permalink",
    # Rendering
    "MarkdownTable",
    "render_dashboard",
    "DashboardGenerator",
    # Remote models
    "Dashboard",
    "Widget",
    "Layout",
    # Migration
    "DashboardMigrator",
    "migrate_legacy_dashboard",
]
