"""Local ``dashboard-<id>.json`` files used by pull, push and migrate."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from mkrdash.core.errors import ConfigurationError, LocalIOError
from mkrdash.dashboards.models import Dashboard

INDENT = 4


def artifact_name(dashboard_id: str) -> str:
    return f"dashboard-{dashboard_id}.json"


def dumps(data: Any) -> str:
    """Indented JSON as written to artifacts and printed by ``dashboards``."""
    return json.dumps(data, indent=INDENT, ensure_ascii=False)


def write_dashboard(dashboard: Dashboard, path: str | Path) -> Path:
    path = Path(path)
    try:
        path.write_text(dumps(dashboard.to_dict()))
    except OSError as e:
        raise LocalIOError(f"Failed to write {path}: {e}") from e
    return path


def read_dashboard(path: str | Path) -> Dashboard:
    path = Path(path)
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError:
        raise ConfigurationError(f"Dashboard file not found: {path}") from None
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in {path}: {e}") from e
    except OSError as e:
        raise LocalIOError(f"Failed to read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} does not contain a dashboard object")
    return Dashboard.from_dict(data)
