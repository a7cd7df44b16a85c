"""Pytest configuration and shared fixtures."""

import io
from typing import Any

import pytest
from rich.console import Console


def make_change(
    number: int = 12345,
    subject: str = "Fix authentication bug",
    status: str = "NEW",
    owner: str | None = "Test Owner",
    updated: str | None = "2024-01-15 10:30:00.000000000",
    labels: dict[str, Any] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a ChangeInfo mapping as returned by the Gerrit REST API."""
    raw: dict[str, Any] = {
        "id": f"test-project~master~I{number:040d}",
        "project": "test-project",
        "branch": "master",
        "change_id": f"I{number:040d}",
        "_number": number,
        "subject": subject,
        "status": status,
        "owner": {"_account_id": 1000, "name": owner} if owner else {"_account_id": 1000},
        "labels": labels if labels is not None else {},
    }
    if updated is not None:
        raw["updated"] = updated
    raw.update(extra)
    return raw


@pytest.fixture
def detailed_labels() -> dict[str, Any]:
    """Labels using the DETAILED_LABELS ``all`` lists, with pending reviewers."""
    return {
        "Code-Review": {
            "all": [
                {"_account_id": 1001, "name": "Alice Voted", "value": 2},
                {"_account_id": 1002, "name": "Bob Pending", "value": 0},
                {"_account_id": 1003, "name": "Carol Also Pending"},
            ]
        },
        "Verified": {
            "all": [
                {"_account_id": 2000, "name": "Jenkins", "value": 1},
                {"_account_id": 1001, "name": "Alice Voted", "value": 0},
            ]
        },
    }


@pytest.fixture
def summary_labels() -> dict[str, Any]:
    """Labels carrying only the approved/recommended/... fields."""
    return {
        "Code-Review": {
            "approved": {"_account_id": 1001, "name": "Alice Approver"},
            "recommended": {"_account_id": 1002, "name": "Bob Reviewer"},
        },
        "Verified": {
            "approved": {"_account_id": 2000, "name": "Jenkins"},
        },
    }


@pytest.fixture
def console_output() -> tuple[Console, io.StringIO]:
    """A colorless console writing to a buffer."""
    buffer = io.StringIO()
    return Console(file=buffer, no_color=True, width=200, highlight=False), buffer
