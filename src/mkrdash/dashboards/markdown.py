"""Markdown rendering of graph sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from mkrdash.dashboards.graphs import GraphReference, RenderMode
from mkrdash.dashboards.urls import MACKEREL_URL, embed_url, permalink


def alignment_line(column_count: int) -> str:
    """Markdown alignment row centring ``column_count`` columns."""
    return "|:-:" * column_count + "|\n"


def host_graphs_table_header(graph_names: Sequence[str]) -> str:
    """Header row labelled with graph names, followed by the alignment row."""
    header = "".join(f"|{name}" for name in graph_names)
    return header + "|\n" + alignment_line(len(graph_names))


def iframe_tag(graph: GraphReference, org_name: str, base_url: str = MACKEREL_URL) -> str:
    src = embed_url(graph, org_name, as_image=False, base_url=base_url)
    return f'<iframe src="{src}" height="{graph.height}" width="{graph.width}" frameborder="0"></iframe>'


def image_markdown(graph: GraphReference, org_name: str, base_url: str = MACKEREL_URL) -> str:
    image = embed_url(graph, org_name, as_image=True, base_url=base_url)
    return f"[![graph]({image})]({permalink(graph, org_name, base_url=base_url)})"


def render_cell(graph: GraphReference, org_name: str, base_url: str = MACKEREL_URL) -> str:
    if graph.render_mode == RenderMode.IFRAME:
        return iframe_tag(graph, org_name, base_url)
    return image_markdown(graph, org_name, base_url)


@dataclass(frozen=True)
class MarkdownTable:
    """One dashboard section: optional headline, header block, graph cells.

    Cells are laid out ``column_count`` per row. The last cell always closes
    its row, so a final row may hold fewer cells than the others.
    """

    headline: str
    table_header: str
    graphs: tuple[GraphReference, ...] = field(default_factory=tuple)
    column_count: int = 1

    def __post_init__(self) -> None:
        if self.graphs and self.column_count < 1:
            raise ValueError("column_count must be at least 1")

    def render(self, org_name: str, base_url: str = MACKEREL_URL) -> str:
        parts: list[str] = []
        if self.headline:
            parts.append(f"## {self.headline}\n")

        parts.append(self.table_header)

        last = len(self.graphs) - 1
        for i, graph in enumerate(self.graphs):
            parts.append("|" + render_cell(graph, org_name, base_url))
            if i % self.column_count == self.column_count - 1 or i == last:
                parts.append("|\n")

        return "".join(parts)
