"""Shared pytest fixtures for ghfilter tests.

This module provides common fixtures for:
- Temporary config files
- Event construction from payload dictionaries
- Sample GitHub Events API responses
"""

from __future__ import annotations

import json
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import yaml

from ghfilter.github.events import Event, Organization, Repository

if TYPE_CHECKING:
    from collections.abc import Callable, Generator


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory (cleaned up after test)
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid configuration dictionary."""
    return {
        "version": 1,
        "filters": [],
    }


@pytest.fixture
def sample_config() -> dict[str, Any]:
    """Return a sample configuration with two filters."""
    return {
        "version": 1,
        "filters": [
            {
                "id": "new-bugs",
                "name": "New bug reports",
                "description": "Issues opened with the bug label",
                "conditions": [
                    {"type": "IssuesEvent", "payload_action": "opened"},
                    {"payload_issue_label": "bug"},
                ],
            },
            {
                "id": "public-pushes",
                "name": "Public pushes",
                "conditions": [
                    {"type": "PushEvent", "compare_public": True, "public": True},
                ],
            },
        ],
    }


@pytest.fixture
def write_config(temp_dir: Path) -> Callable[..., Path]:
    """Factory fixture to write config files.

    Args:
        config: Configuration dictionary
        filename: Name of the config file (default: config.yaml)

    Returns:
        Path to the written config file
    """

    def _write(config: dict[str, Any], filename: str = "config.yaml") -> Path:
        path = temp_dir / filename
        with path.open("w") as f:
            yaml.safe_dump(config, f)
        return path

    return _write


# ============================================================================
# Event Fixtures
# ============================================================================


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory fixture building an Event with a JSON-encoded payload.

    Args:
        payload: Payload dictionary, or None for no payload
        org_id: Organization ID, or None for no organization
        repo_id: Repository ID, or None for no repository
        **fields: Other Event fields (type, public, id, ...)
    """

    def _make(
        payload: dict[str, Any] | None = None,
        *,
        org_id: int | None = None,
        repo_id: int | None = None,
        **fields: Any,
    ) -> Event:
        if payload is not None:
            fields["raw_payload"] = json.dumps(payload).encode("utf-8")
        if org_id is not None:
            fields["org"] = Organization(id=org_id)
        if repo_id is not None:
            fields["repo"] = Repository(id=repo_id)
        return Event(**fields)

    return _make


@pytest.fixture
def github_issues_event() -> dict[str, Any]:
    """Return a sample IssuesEvent from the GitHub Events API."""
    return {
        "id": "22249084947",
        "type": "IssuesEvent",
        "actor": {
            "id": 583231,
            "login": "octocat",
        },
        "repo": {
            "id": 1296269,
            "name": "octocat/Hello-World",
            "url": "https://api.github.com/repos/octocat/Hello-World",
        },
        "payload": {
            "action": "opened",
            "issue": {
                "number": 1347,
                "title": "Found a bug",
                "body": "I'm having a problem with this.",
                "labels": [
                    {"id": 208045946, "name": "bug", "color": "f29513"},
                ],
                "milestone": {"number": 1, "title": "v1.0"},
            },
        },
        "public": True,
        "created_at": "2026-01-10T15:30:00Z",
        "org": {
            "id": 9919,
            "login": "github",
        },
    }


@pytest.fixture
def github_push_event() -> dict[str, Any]:
    """Return a sample PushEvent from the GitHub Events API."""
    return {
        "id": "22249084964",
        "type": "PushEvent",
        "actor": {"id": 583231, "login": "octocat"},
        "repo": {"id": 1296269, "name": "octocat/Hello-World"},
        "payload": {
            "push_id": 10115855396,
            "size": 1,
            "ref": "refs/heads/main",
            "commits": [],
        },
        "public": False,
        "created_at": "2026-01-10T15:31:00Z",
    }
