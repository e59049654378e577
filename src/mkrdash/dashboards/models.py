"""Mackerel dashboard data models.

Typed Python models for the dashboard resources returned and accepted by
the Mackerel API (``/api/v0/dashboards``).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class Layout:
    """Position and size of a widget on the 24-column dashboard grid."""

    x: int = 0
    y: int = 0
    width: int = 24
    height: int = 24

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Layout":
        return cls(
            x=int(data.get("x", cls.x)),
            y=int(data.get("y", cls.y)),
            width=int(data.get("width", cls.width)),
            height=int(data.get("height", cls.height)),
        )


@dataclass
class Widget:
    """Dashboard widget.

    Only the fields mkrdash writes itself are modelled. Everything else the
    API sends (metric, graph, range, ...) is kept in ``extra`` so that a
    pulled dashboard can be pushed back unchanged.
    """

    type: str
    title: str = ""
    markdown: Optional[str] = None
    layout: Layout = field(default_factory=Layout)
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": self.type, "title": self.title}
        result.update(self.extra)
        if self.markdown is not None:
            result["markdown"] = self.markdown
        result["layout"] = self.layout.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Widget":
        known = {"type", "title", "markdown", "layout"}
        return cls(
            type=data.get("type", ""),
            title=data.get("title", ""),
            markdown=data.get("markdown"),
            layout=Layout.from_dict(data.get("layout") or {}),
            extra={k: v for k, v in data.items() if k not in known},
        )


@dataclass
class Dashboard:
    """Remote dashboard resource.

    Legacy dashboards carry their content in ``body_markdown``; current ones
    carry an ordered list of widgets.
    """

    title: str
    url_path: str
    id: str = ""
    body_markdown: str = ""
    memo: str = ""
    is_legacy: bool = False
    widgets: List[Widget] = field(default_factory=list)
    created_at: Optional[int] = None
    updated_at: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Mackerel API JSON format."""
        result: Dict[str, Any] = {}
        if self.id:
            result["id"] = self.id
        result["title"] = self.title
        result["urlPath"] = self.url_path
        result["memo"] = self.memo
        if self.body_markdown or self.is_legacy:
            result["bodyMarkdown"] = self.body_markdown
        if self.is_legacy:
            result["isLegacy"] = True
        result["widgets"] = [w.to_dict() for w in self.widgets]
        if self.created_at is not None:
            result["createdAt"] = self.created_at
        if self.updated_at is not None:
            result["updatedAt"] = self.updated_at
        return result

    def to_payload(self) -> Dict[str, Any]:
        """Request body for create/update: server-owned fields stripped."""
        payload = self.to_dict()
        for key in ("id", "createdAt", "updatedAt", "isLegacy"):
            payload.pop(key, None)
        return payload

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Dashboard":
        return cls(
            id=data.get("id", "") or "",
            title=data.get("title", "") or "",
            url_path=data.get("urlPath", "") or "",
            body_markdown=data.get("bodyMarkdown", "") or "",
            memo=data.get("memo", "") or "",
            is_legacy=bool(data.get("isLegacy", False)),
            widgets=[Widget.from_dict(w) for w in data.get("widgets") or []],
            created_at=data.get("createdAt"),
            updated_at=data.get("updatedAt"),
        )
