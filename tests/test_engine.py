"""Tests for the filter engine."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest

from ghfilter.config.schema import Config, NamedFilter
from ghfilter.filters import FilterEngine, evaluate_filters
from ghfilter.github.events import Event, normalize_event

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def filters(sample_config: dict[str, Any]) -> list[NamedFilter]:
    return Config.model_validate(sample_config).filters


def test_matches_issues_event(
    filters: list[NamedFilter], github_issues_event: dict[str, Any]
) -> None:
    event = normalize_event(github_issues_event)
    result = FilterEngine(filters).evaluate(event)

    assert result.has_matches
    assert result.matched_filter_ids == ["new-bugs"]
    assert result.filters_evaluated == 2
    match = result.matches[0]
    assert match.filter_name == "New bug reports"
    assert match.match_key == "22249084947:new-bugs"
    assert match.match_reason == "All 2 condition(s) matched"


def test_private_push_matches_nothing(
    filters: list[NamedFilter], github_push_event: dict[str, Any]
) -> None:
    result = evaluate_filters(normalize_event(github_push_event), filters)

    assert not result.has_matches
    assert result.matched_filter_ids == []


def test_disabled_filters_are_skipped(make_event: Callable[..., Event]) -> None:
    filters = [
        NamedFilter(id="all", name="Everything", enabled=False),
        NamedFilter(id="pushes", name="Pushes", conditions=[{"type": "PushEvent"}]),
    ]
    engine = FilterEngine(filters)

    assert [f.id for f in engine.filters] == ["pushes"]
    result = engine.evaluate(make_event(type="PushEvent"))
    assert result.filters_evaluated == 1
    assert result.matched_filter_ids == ["pushes"]


def test_filter_without_conditions_matches_all() -> None:
    result = evaluate_filters(Event(), [NamedFilter(id="all", name="Everything")])
    assert result.matched_filter_ids == ["all"]
    assert result.matches[0].match_reason == "No conditions specified (matches all)"


def test_failure_reason_names_condition(
    filters: list[NamedFilter], make_event: Callable[..., Event]
) -> None:
    engine = FilterEngine(filters)
    event = make_event({"action": "opened", "issue": {"labels": []}}, type="IssuesEvent")

    _, reason = engine._evaluate_filter(event, filters[0])
    assert reason == 'Condition 2 not matched: If payload issue labels contains "bug"'


def test_no_filters() -> None:
    result = evaluate_filters(Event(type="PushEvent"), [])
    assert result.filters_evaluated == 0
    assert not result.has_matches
