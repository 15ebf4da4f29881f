"""
Pytest configuration and fixtures.

- Shared fixtures: a migration config mirroring a typical multi-queue setup,
  and a Sprint.ly item payload in the shape the items API returns.
- Integration tests: fail on any WARNING logs from the code under test.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Any

import pytest
from typing_extensions import override

from sprintly_to_jira.config import MigrationConfig

if TYPE_CHECKING:
    from collections.abc import Generator

JIRA_BASE_URL = "https://yourcorp.atlassian.net"

USER_MAP: dict[str, str | None] = {
    "employee@rideamigos.com": "employee",
    "ex.employee@rideamigos.com": None,
}

PROJECT_MAP: dict[int, str] = {
    12345: "DEMO",
    11122: "UFS",
    22233: "ASTRO",
}

# From: https://support.sprint.ly/hc/en-us/articles/213642287-Items
SPRINTLY_ITEM: dict[str, Any] = {
    "status": "backlog",
    "created_at": "2013-06-14T22:52:07+00:00",
    "last_modified": "2013-06-14T21:53:43+00:00",
    "product": {"archived": False, "id": 1, "name": "sprint.ly"},
    "progress": {
        "accepted_at": "2013-06-14T22:52:07+00:00",
        "closed_at": "2013-06-14T21:53:43+00:00",
        "started_at": "2013-06-14T21:50:36+00:00",
    },
    "description": "Require people to estimate the score of an item before they can start working on it.",
    "tags": ["scoring", "backlog"],
    "number": 188,
    "archived": False,
    "title": "Don't let un-scored items out of the backlog.",
    "created_by": {
        "first_name": "Mark Stosberg",
        "last_name": "Stosberg",
        "id": 1,
        "email": "employee@rideamigos.com",
    },
    "score": "M",
    "sort": 1,
    "assigned_to": {
        "first_name": "Mark Stosberg",
        "last_name": "Stosberg",
        "id": 1,
        "email": "employee@rideamigos.com",
    },
    "type": "task",
}


def make_config(**overrides: Any) -> MigrationConfig:  # noqa: ANN401
    values: dict[str, Any] = {
        "sprintly_project_num": 11122,
        "jira_project_key": "UFS",
        "jira_base_url": JIRA_BASE_URL,
        "file_proxy_base_url": "http://sprintlyfiles.yourcorp.com/somesecret",
        "user_map": dict(USER_MAP),
        "project_map": dict(PROJECT_MAP),
        "ticket_parent_map": {2: 1},
        "first_ticket_num": 1,
        "last_ticket_num": 1,
        "max_labels": 10,
        "max_comments": 50,
        "max_attachments": 20,
    }
    values.update(overrides)
    return MigrationConfig(**values)


@pytest.fixture
def config() -> MigrationConfig:
    return make_config()


@pytest.fixture
def item_payload() -> dict[str, Any]:
    """A fresh copy of the sample Sprint.ly item, safe to modify."""
    return copy.deepcopy(SPRINTLY_ITEM)


# Store warning records during integration test execution
_integration_test_warnings: dict[str, list[logging.LogRecord]] = {}


class IntegrationTestWarningHandler(logging.Handler):
    """Logging handler capturing warnings during integration tests."""

    test_nodeid: str

    def __init__(self, test_nodeid: str) -> None:
        super().__init__()
        self.test_nodeid = test_nodeid
        self.setLevel(logging.WARNING)

    @override
    def emit(self, record: logging.LogRecord) -> None:
        _integration_test_warnings.setdefault(self.test_nodeid, []).append(record)


@pytest.fixture(autouse=True)
def fail_on_log_warnings_for_integration_tests(
    request: pytest.FixtureRequest,
) -> Generator[None]:
    """Capture logger warnings during integration tests so the report hook can fail them."""
    if request.node.get_closest_marker("integration") is None:
        yield
        return

    test_nodeid = request.node.nodeid
    _integration_test_warnings[test_nodeid] = []
    handler = IntegrationTestWarningHandler(test_nodeid)
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)

    try:
        yield
    finally:
        root_logger.removeHandler(handler)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[None]
) -> Generator[None]:  # type: ignore[misc]
    """Mark a passed integration test as failed if it logged warnings."""
    outcome = yield
    report = outcome.get_result()

    if call.when == "call" and report.outcome == "passed":
        warning_records = _integration_test_warnings.pop(item.nodeid, [])
        if warning_records:
            report.outcome = "failed"
            report.longrepr = f"Integration test failed: {len(warning_records)} warning(s) detected:\n" + "\n".join(
                f"  - {record.levelname}: {record.getMessage()} (in {record.name}:{record.lineno})"
                for record in warning_records
            )
