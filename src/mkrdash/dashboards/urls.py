"""
Embed URL and permalink construction for graph references.

Embed URLs live under ``<web>/embed/orgs/<org>/...`` and are what the
iframe or image points at; permalinks live under ``<web>/orgs/<org>/...``
and open the interactive graph page. Query strings are form-encoded with
keys in sorted order, booleans as ``true``/``false``.
"""

from __future__ import annotations

from typing import assert_never
from urllib.parse import quote, quote_plus, urlencode

from mkrdash.dashboards.graphs import (
    ExpressionGraph,
    GraphReference,
    HostGraph,
    RoleGraph,
    ServiceGraph,
)

MACKEREL_URL = "https://mackerel.io"


def _segment(value: str) -> str:
    return quote(value, safe="")


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _with_query(url: str, params: dict[str, str]) -> str:
    return f"{url}?{urlencode(sorted(params.items()))}"


def embed_url(
    graph: GraphReference,
    org_name: str,
    as_image: bool = False,
    base_url: str = MACKEREL_URL,
) -> str:
    """URL of the embeddable graph; ``as_image`` selects the ``.png`` rendering."""
    root = f"{base_url.rstrip('/')}/embed/orgs/{_segment(org_name)}"
    extension = ".png" if as_image else ""

    match graph:
        case HostGraph():
            path = f"{root}/hosts/{_segment(graph.host_id)}"
            params = {"graph": graph.graph_name, "period": graph.period}
        case ServiceGraph():
            path = f"{root}/services/{_segment(graph.service_name)}"
            params = {"graph": graph.graph_name, "period": graph.period}
        case RoleGraph():
            path = f"{root}/services/{_segment(graph.service_name)}/{_segment(graph.role_name)}"
            params = {
                "graph": graph.graph_name,
                "stacked": _bool(graph.stacked),
                "simplified": _bool(graph.simplified),
                "period": graph.period,
            }
        case ExpressionGraph():
            path = f"{root}/advanced-graph"
            params = {
                "query": graph.query,
                "period": graph.period,
                "title": graph.title,
                "unit": graph.unit,
            }
        case _:
            assert_never(graph)

    return _with_query(path + extension, params)


def permalink(graph: GraphReference, org_name: str, base_url: str = MACKEREL_URL) -> str:
    """URL of the graph's interactive page."""
    root = f"{base_url.rstrip('/')}/orgs/{_segment(org_name)}"

    match graph:
        case HostGraph():
            # graph name is form-escaped into the path, not the query
            return f"{root}/hosts/{_segment(graph.host_id)}/-/graphs/{quote_plus(graph.graph_name)}"
        case ServiceGraph():
            return _with_query(
                f"{root}/services/{_segment(graph.service_name)}/-/graphs",
                {"name": graph.graph_name},
            )
        case RoleGraph():
            return _with_query(
                f"{root}/services/{_segment(graph.service_name)}/{_segment(graph.role_name)}/-/graph",
                {"name": graph.graph_name},
            )
        case ExpressionGraph():
            return _with_query(
                f"{root}/advanced-graph",
                {"query": graph.query, "title": graph.title, "unit": graph.unit},
            )
        case _:
            assert_never(graph)
