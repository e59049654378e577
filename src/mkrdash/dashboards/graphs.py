"""
Graph descriptor resolution.

A ``graph_def`` entry in a dashboard config does not say which kind of
graph it describes; the kind is inferred from which fields are set:

    host_id                          -> HostGraph
    service_name (no role_name)      -> ServiceGraph
    service_name + role_name         -> RoleGraph
    query                            -> ExpressionGraph

The checks run in that order, so a record with both ``host_id`` and
``query`` is a host graph. This order is part of the config file format.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Union

from mkrdash.core.errors import ConfigurationError

DEFAULT_PERIOD = "1h"


class RenderMode(StrEnum):
    """How a graph is embedded in the dashboard markdown."""

    IFRAME = "iframe"
    IMAGE = "image"


@dataclass(frozen=True)
class GraphSpec:
    """One ``graph_def`` record as written in the config file."""

    host_id: str = ""
    service_name: str = ""
    role_name: str = ""
    query: str = ""
    graph_name: str = ""
    title: str = ""
    unit: str = ""
    period: str = ""
    stacked: bool = False
    simplified: bool = False

    @property
    def is_host_graph(self) -> bool:
        return self.host_id != ""

    @property
    def is_service_graph(self) -> bool:
        return self.service_name != "" and self.role_name == ""

    @property
    def is_role_graph(self) -> bool:
        return self.service_name != "" and self.role_name != ""

    @property
    def is_expression_graph(self) -> bool:
        return self.query != ""

    @classmethod
    def from_dict(cls, data: Any) -> "GraphSpec":
        if not isinstance(data, dict):
            raise ConfigurationError("graph_def entries must be mappings")

        strings = {}
        for key in ("host_id", "service_name", "role_name", "query", "graph_name", "title", "unit", "period"):
            value = data.get(key)
            if value is None:
                strings[key] = ""
            elif isinstance(value, (str, int, float)) and not isinstance(value, bool):
                # YAML turns bare numbers like `period: 30` into ints
                strings[key] = str(value)
            else:
                raise ConfigurationError(f"graph_def.{key} must be a string", {"value": value})

        flags = {}
        for key in ("stacked", "simplified"):
            value = data.get(key, False)
            if value is None:
                value = False
            if not isinstance(value, bool):
                raise ConfigurationError(f"graph_def.{key} must be a boolean", {"value": value})
            flags[key] = value

        return cls(**strings, **flags)


@dataclass(frozen=True)
class HostGraph:
    host_id: str
    graph_name: str
    period: str
    render_mode: RenderMode
    height: int
    width: int


@dataclass(frozen=True)
class ServiceGraph:
    service_name: str
    graph_name: str
    period: str
    render_mode: RenderMode
    height: int
    width: int


@dataclass(frozen=True)
class RoleGraph:
    service_name: str
    role_name: str
    graph_name: str
    period: str
    stacked: bool
    simplified: bool
    render_mode: RenderMode
    height: int
    width: int


@dataclass(frozen=True)
class ExpressionGraph:
    query: str
    title: str
    unit: str
    period: str
    render_mode: RenderMode
    height: int
    width: int


GraphReference = Union[HostGraph, ServiceGraph, RoleGraph, ExpressionGraph]


def resolve_graph(
    spec: GraphSpec,
    render_mode: RenderMode,
    height: int,
    width: int,
) -> GraphReference:
    """Turn a graph_def record into a concrete graph reference.

    Raises:
        ConfigurationError: if a host/service/role graph has no graph_name,
            or the record matches none of the graph kinds
    """
    if spec.is_host_graph:
        if spec.graph_name == "":
            raise ConfigurationError("graph_name is required for host graph")
        return HostGraph(
            host_id=spec.host_id,
            graph_name=spec.graph_name,
            period=spec.period,
            render_mode=render_mode,
            height=height,
            width=width,
        )

    if spec.is_service_graph:
        if spec.graph_name == "":
            raise ConfigurationError("graph_name is required for service graph")
        return ServiceGraph(
            service_name=spec.service_name,
            graph_name=spec.graph_name,
            period=spec.period,
            render_mode=render_mode,
            height=height,
            width=width,
        )

    if spec.is_role_graph:
        if spec.graph_name == "":
            raise ConfigurationError("graph_name is required for role graph")
        return RoleGraph(
            service_name=spec.service_name,
            role_name=spec.role_name,
            graph_name=spec.graph_name,
            period=spec.period,
            stacked=spec.stacked,
            simplified=spec.simplified,
            render_mode=render_mode,
            height=height,
            width=width,
        )

    if spec.is_expression_graph:
        return ExpressionGraph(
            query=spec.query,
            title=spec.title,
            unit=spec.unit,
            period=spec.period,
            render_mode=render_mode,
            height=height,
            width=width,
        )

    raise ConfigurationError("either host_id, service_name or query should be specified")
