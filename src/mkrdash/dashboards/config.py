"""
Dashboard configuration parsing and normalization.

Expected structure:
    config_version: "0.9"
    title: Service overview
    url_path: service-overview
    format: image            # iframe (default) or image
    height: 200              # default 200
    width: 400               # default 400
    host_graphs:             # either host_graphs ...
      - headline: Web hosts
        host_ids: [2eQGEaLxibb, 2eQGDXqtoXs]
        graph_names: [loadavg5, cpu]
        period: 6h
    graphs:                  # ... or graphs, never both
      - headline: Services
        column_count: 2
        graph_def:
          - service_name: blog
            graph_name: access_num.*
          - service_name: blog
            role_name: app
            graph_name: cpu
            stacked: true
          - query: avg(roleSlots('blog:app', 'loadavg5'))
            title: app load
            unit: float

Parsing validates; defaults are filled in by ``DashboardConfig.normalized``
which returns a new value.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Union

import structlog
import yaml

from mkrdash.core.errors import ConfigurationError
from mkrdash.dashboards.graphs import DEFAULT_PERIOD, GraphSpec, RenderMode, resolve_graph
from mkrdash.dashboards.markdown import MarkdownTable, alignment_line, host_graphs_table_header

logger = structlog.get_logger()

SUPPORTED_CONFIG_VERSION = "0.9"
DEFAULT_HEIGHT = 200
DEFAULT_WIDTH = 400
DEFAULT_COLUMN_COUNT = 1


@dataclass(frozen=True)
class HostGraphSection:
    """Hosts x graph names: one row per host, one column per graph name."""

    headline: str = ""
    host_ids: tuple[str, ...] = ()
    graph_names: tuple[str, ...] = ()
    period: str = ""

    def normalized(self) -> "HostGraphSection":
        return replace(self, period=self.period or DEFAULT_PERIOD)

    def to_table(self, render_mode: RenderMode, height: int, width: int) -> MarkdownTable:
        graphs = tuple(
            resolve_graph(
                GraphSpec(host_id=host_id, graph_name=graph_name, period=self.period),
                render_mode,
                height,
                width,
            )
            for host_id in self.host_ids
            for graph_name in self.graph_names
        )
        return MarkdownTable(
            headline=self.headline,
            table_header=host_graphs_table_header(self.graph_names),
            graphs=graphs,
            column_count=len(self.graph_names),
        )


@dataclass(frozen=True)
class GraphSection:
    """Free-form list of graphs wrapped at ``column_count`` per row."""

    headline: str = ""
    column_count: int = 0
    graph_defs: tuple[GraphSpec, ...] = ()

    def normalized(self) -> "GraphSection":
        return replace(
            self,
            column_count=self.column_count or DEFAULT_COLUMN_COUNT,
            graph_defs=tuple(
                replace(gd, period=gd.period or DEFAULT_PERIOD) for gd in self.graph_defs
            ),
        )

    def to_table(self, render_mode: RenderMode, height: int, width: int) -> MarkdownTable:
        graphs = tuple(resolve_graph(gd, render_mode, height, width) for gd in self.graph_defs)
        return MarkdownTable(
            headline=self.headline,
            table_header=alignment_line(self.column_count),
            graphs=graphs,
            column_count=self.column_count,
        )


Section = Union[HostGraphSection, GraphSection]


@dataclass(frozen=True)
class DashboardConfig:
    """Top-level dashboard definition."""

    config_version: str
    title: str
    url_path: str
    format: RenderMode = RenderMode.IFRAME
    height: int = 0
    width: int = 0
    host_graphs: tuple[HostGraphSection, ...] | None = None
    graphs: tuple[GraphSection, ...] | None = None

    @property
    def sections(self) -> tuple[Section, ...]:
        if self.host_graphs is not None:
            return self.host_graphs
        return self.graphs or ()

    def normalized(self) -> "DashboardConfig":
        """Copy with every default applied."""
        return replace(
            self,
            height=self.height or DEFAULT_HEIGHT,
            width=self.width or DEFAULT_WIDTH,
            host_graphs=(
                tuple(s.normalized() for s in self.host_graphs)
                if self.host_graphs is not None
                else None
            ),
            graphs=(
                tuple(s.normalized() for s in self.graphs) if self.graphs is not None else None
            ),
        )

    def tables(self) -> list[MarkdownTable]:
        """Markdown tables for every section, in declaration order.

        Defaults are applied first, so a config straight from
        ``parse_dashboard_config`` renders the same as a loaded one.
        """
        config = self.normalized()
        return [s.to_table(config.format, config.height, config.width) for s in config.sections]


def _string(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ConfigurationError(f"{where}{key} must be a string", {"value": value})
    return str(value)


def _string_list(data: dict[str, Any], key: str, where: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise ConfigurationError(f"{where}{key} must be a list")
    items = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            raise ConfigurationError(f"{where}{key} must contain only strings", {"value": item})
        items.append(str(item))
    return tuple(items)


def _non_negative_int(data: dict[str, Any], key: str, where: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"{where}{key} must be a non-negative integer", {"value": value})
    return value


def _section_list(data: dict[str, Any], key: str) -> list[dict[str, Any]] | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(s, dict) for s in value):
        raise ConfigurationError(f"{key} must be a list of mappings")
    return value


def _parse_host_graph_section(data: dict[str, Any]) -> HostGraphSection:
    where = "host_graphs."
    return HostGraphSection(
        headline=_string(data, "headline", where),
        host_ids=_string_list(data, "host_ids", where),
        graph_names=_string_list(data, "graph_names", where),
        period=_string(data, "period", where),
    )


def _parse_graph_section(data: dict[str, Any]) -> GraphSection:
    where = "graphs."
    graph_defs = data.get("graph_def")
    if graph_defs is None:
        graph_defs = []
    if not isinstance(graph_defs, list):
        raise ConfigurationError("graphs.graph_def must be a list")
    return GraphSection(
        headline=_string(data, "headline", where),
        column_count=_non_negative_int(data, "column_count", where),
        graph_defs=tuple(GraphSpec.from_dict(gd) for gd in graph_defs),
    )


def parse_dashboard_config(data: Any) -> DashboardConfig:
    """
    Validate decoded YAML and build a DashboardConfig.

    Raises:
        ConfigurationError: if a required field is missing, the version or
            format is unsupported, both section kinds are given, or a field
            has the wrong type
    """
    if not isinstance(data, dict):
        raise ConfigurationError("dashboard config must be a YAML mapping")

    version = _string(data, "config_version", "")
    if version == "":
        raise ConfigurationError("config_version is required in yaml")
    if version != SUPPORTED_CONFIG_VERSION:
        raise ConfigurationError(
            f"config_version {version} is not supported",
            {"supported": SUPPORTED_CONFIG_VERSION},
        )

    title = _string(data, "title", "")
    if title == "":
        raise ConfigurationError("title is required in yaml")

    url_path = _string(data, "url_path", "")
    if url_path == "":
        raise ConfigurationError("url_path is required in yaml")

    raw_format = _string(data, "format", "") or RenderMode.IFRAME.value
    try:
        render_mode = RenderMode(raw_format)
    except ValueError:
        raise ConfigurationError("format should be 'iframe' or 'image'", {"format": raw_format}) from None

    host_graphs = _section_list(data, "host_graphs")
    graphs = _section_list(data, "graphs")
    if host_graphs is not None and graphs is not None:
        raise ConfigurationError("you cannot specify both 'graphs' and 'host_graphs'")

    return DashboardConfig(
        config_version=version,
        title=title,
        url_path=url_path,
        format=render_mode,
        height=_non_negative_int(data, "height", ""),
        width=_non_negative_int(data, "width", ""),
        host_graphs=(
            tuple(_parse_host_graph_section(s) for s in host_graphs)
            if host_graphs is not None
            else None
        ),
        graphs=tuple(_parse_graph_section(s) for s in graphs) if graphs is not None else None,
    )


def load_dashboard_config(file_path: str | Path) -> DashboardConfig:
    """Read, validate and normalize a dashboard YAML file."""
    file_path = Path(file_path)

    if not file_path.exists():
        raise ConfigurationError(f"Dashboard config not found: {file_path}")

    try:
        with open(file_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {file_path}: {e}") from e

    config = parse_dashboard_config(data).normalized()
    logger.debug(
        "dashboard_config_loaded",
        path=str(file_path),
        title=config.title,
        url_path=config.url_path,
        sections=len(config.sections),
    )
    return config
