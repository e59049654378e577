"""Root test configuration."""

import logging

import pytest
import structlog

from mkrdash.dashboards.models import Dashboard


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


class FakeMackerel:
    """In-memory stand-in for MackerelClient that records every call."""

    def __init__(self, dashboards=None, org_name="my-org"):
        self.dashboards = {d.id: d for d in dashboards or []}
        self.org_name = org_name
        self.calls = []
        self.fail_create = None
        self._next_id = 100

    def get_org(self):
        self.calls.append(("get_org",))
        return {"name": self.org_name}

    def find_dashboards(self):
        self.calls.append(("find_dashboards",))
        return list(self.dashboards.values())

    def find_dashboard(self, dashboard_id):
        self.calls.append(("find_dashboard", dashboard_id))
        if dashboard_id not in self.dashboards:
            from mkrdash.clients.mackerel import MackerelAPIError

            raise MackerelAPIError("HTTP 404: Dashboard Not Found", 404)
        return self.dashboards[dashboard_id]

    def create_dashboard(self, dashboard):
        self.calls.append(("create_dashboard", dashboard))
        if self.fail_create is not None:
            raise self.fail_create
        self._next_id += 1
        created = Dashboard.from_dict({**dashboard.to_payload(), "id": str(self._next_id)})
        self.dashboards[created.id] = created
        return created

    def update_dashboard(self, dashboard_id, dashboard):
        self.calls.append(("update_dashboard", dashboard_id, dashboard))
        updated = Dashboard.from_dict({**dashboard.to_payload(), "id": dashboard_id})
        self.dashboards[dashboard_id] = updated
        return updated

    def delete_dashboard(self, dashboard_id):
        self.calls.append(("delete_dashboard", dashboard_id))
        return self.dashboards.pop(dashboard_id)

    def call_names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def fake_client():
    return FakeMackerel(
        dashboards=[
            Dashboard(id="1", title="A", url_path="/a"),
            Dashboard(id="2", title="B", url_path="/b"),
        ]
    )


@pytest.fixture
def make_client():
    return FakeMackerel
