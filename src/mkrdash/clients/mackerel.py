from __future__ import annotations

from typing import Any

import structlog
from circuitbreaker import CircuitBreakerError

from mkrdash.clients.base import BaseHTTPClient, PermanentHTTPError, RetryableHTTPError
from mkrdash.core.errors import ProviderError
from mkrdash.dashboards.models import Dashboard

logger = structlog.get_logger()

DEFAULT_API_BASE = "https://api.mackerelio.com"
DEFAULT_USER_AGENT = "mkrdash/0.1.0"


class MackerelAPIError(ProviderError):
    """A Mackerel API call failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details = {"status": status_code} if status_code is not None else None
        super().__init__(message, details)
        self.status_code = status_code


class MackerelClient(BaseHTTPClient):
    """Mackerel API client covering the organization and dashboards endpoints."""

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = 30.0,
        max_retries: int = 3,
        backoff_factor: float = 1.0,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        super().__init__(
            base_url,
            timeout=timeout,
            max_retries=max_retries,
            backoff_factor=backoff_factor,
        )
        self._api_key = api_key
        self._user_agent = user_agent

    def _headers(self) -> dict[str, str]:
        headers = super()._headers()
        headers["X-Api-Key"] = self._api_key
        headers["User-Agent"] = self._user_agent
        return headers

    def _call(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            return self._request(method, path, **kwargs)
        except (RetryableHTTPError, PermanentHTTPError) as exc:
            raise MackerelAPIError(f"{method} {path} failed: {exc}", exc.status_code) from exc
        except CircuitBreakerError as exc:
            raise MackerelAPIError(f"{method} {path} failed: {exc}") from exc

    def get_org(self) -> dict[str, Any]:
        return self._call("GET", "/api/v0/org")

    def find_dashboards(self) -> list[Dashboard]:
        data = self._call("GET", "/api/v0/dashboards")
        return [Dashboard.from_dict(d) for d in data.get("dashboards", [])]

    def find_dashboard(self, dashboard_id: str) -> Dashboard:
        return Dashboard.from_dict(self._call("GET", f"/api/v0/dashboards/{dashboard_id}"))

    def create_dashboard(self, dashboard: Dashboard) -> Dashboard:
        data = self._call("POST", "/api/v0/dashboards", json=dashboard.to_payload())
        return Dashboard.from_dict(data)

    def update_dashboard(self, dashboard_id: str, dashboard: Dashboard) -> Dashboard:
        data = self._call(
            "PUT", f"/api/v0/dashboards/{dashboard_id}", json=dashboard.to_payload()
        )
        return Dashboard.from_dict(data)

    def delete_dashboard(self, dashboard_id: str) -> Dashboard:
        return Dashboard.from_dict(self._call("DELETE", f"/api/v0/dashboards/{dashboard_id}"))
