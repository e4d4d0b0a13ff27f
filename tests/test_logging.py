"""Tests for structured logging helpers."""

from __future__ import annotations

import json

import pytest

from ghfilter.logging import (
    configure_logging,
    log_check_summary,
    log_decision,
    redact_secrets,
)


class TestRedactSecrets:
    """Tests for secret redaction."""

    def test_github_token(self) -> None:
        token = "ghp_" + "a" * 36
        assert redact_secrets(f"token is {token}") == "token is [REDACTED_GITHUB_TOKEN]"

    def test_fine_grained_token(self) -> None:
        token = "github_pat_" + "B" * 30
        assert "[REDACTED_GITHUB_TOKEN]" in redact_secrets(token)

    def test_bearer(self) -> None:
        redacted = redact_secrets("Authorization: Bearer abc.def")
        assert "abc.def" not in redacted
        assert redacted.startswith("Authorization: [REDACTED]")

    def test_nested(self) -> None:
        token = "gho_" + "x" * 40
        value = {"body": [f"leaked {token}"], "count": 3}
        assert redact_secrets(value) == {
            "body": ["leaked [REDACTED_GITHUB_TOKEN]"],
            "count": 3,
        }

    def test_plain_text_untouched(self) -> None:
        assert redact_secrets("Found a bug") == "Found a bug"


class TestStructuredEvents:
    """Tests for the structured log helpers."""

    def test_decision_is_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, json_output=True)

        log_decision(
            event_id="1",
            event_type="IssuesEvent",
            filters_evaluated=2,
            matched_filter_ids=["new-bugs"],
        )

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "decision"
        assert record["level"] == "info"
        assert record["filters_matched"] == 1
        assert record["disposition"] == "matched"
        assert "timestamp" in record

    def test_summary(self, capsys: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, json_output=True)

        log_check_summary(events_read=3, events_matched=1, duration_ms=1.23456)

        record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
        assert record["event"] == "check_complete"
        assert record["duration_ms"] == 1.23
