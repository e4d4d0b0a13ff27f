"""Tests for Filter aggregation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from ghfilter.filters.condition import Condition
from ghfilter.filters.filter import Filter
from ghfilter.github.events import Event

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def private_issues_filter() -> Filter:
    return Filter(
        conditions=(
            Condition(compare_public=True, public=False),
            Condition(type="IssuesEvent"),
        )
    )


@pytest.mark.parametrize(
    ("event", "expected"),
    [
        (Event(type="IssuesEvent", public=False), True),
        (Event(type="IssuesEvent", public=True), False),
        (Event(type="PushEvent", public=False), False),
    ],
)
def test_filter_matches_all_conditions(
    private_issues_filter: Filter, event: Event, expected: bool
) -> None:
    assert private_issues_filter.matches(event) is expected


@pytest.mark.parametrize(
    "event",
    [Event(), Event(type="PushEvent", public=True), Event(raw_payload=b"{}")],
)
def test_empty_filter_matches_every_event(event: Event) -> None:
    assert Filter().matches(event) is True
    assert Filter().first_failure(event) is None


def test_first_failure(private_issues_filter: Filter) -> None:
    assert private_issues_filter.first_failure(Event(type="IssuesEvent", public=False)) is None
    assert private_issues_filter.first_failure(Event(type="IssuesEvent", public=True)) == 0
    assert private_issues_filter.first_failure(Event(type="PushEvent", public=False)) == 1


def test_short_circuits_at_first_failing_condition(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[str] = []
    original: Callable[[Condition, Event], bool] = Condition.matches

    def spy(self: Condition, event: Event) -> bool:
        calls.append(self.type)
        return original(self, event)

    monkeypatch.setattr(Condition, "matches", spy)
    flt = Filter(
        conditions=(
            Condition(type="PushEvent"),
            Condition(type="IssuesEvent"),
            Condition(type="WatchEvent"),
        )
    )

    assert flt.matches(Event(type="IssuesEvent")) is False
    assert calls == ["PushEvent"]


def test_negated_conditions_combine(make_event: Callable[..., Event]) -> None:
    flt = Filter(
        conditions=(
            Condition(type="IssuesEvent"),
            Condition(payload_issue_label="wontfix", negate=True),
        )
    )
    assert flt.matches(make_event({"issue": {"labels": ["bug"]}}, type="IssuesEvent")) is True
    assert flt.matches(make_event({"issue": {"labels": ["WontFix"]}}, type="IssuesEvent")) is False
    # No labels at all is absence of data, not a failed comparison
    assert flt.matches(make_event({"issue": {}}, type="IssuesEvent")) is False


def test_accepts_list_of_conditions() -> None:
    flt = Filter.model_validate({"conditions": [{"type": "IssuesEvent"}, {"negate": True}]})
    assert flt.conditions == (Condition(type="IssuesEvent"), Condition(negate=True))


def test_frozen() -> None:
    flt = Filter()
    with pytest.raises(ValidationError):
        flt.conditions = (Condition(),)  # type: ignore[misc]


def test_describe(private_issues_filter: Filter) -> None:
    assert private_issues_filter.describe() == [
        "If event is not public",
        'If type is "IssuesEvent"',
    ]
    assert str(private_issues_filter) == 'If event is not public\nIf type is "IssuesEvent"'


def test_describe_empty_condition() -> None:
    assert Filter(conditions=(Condition(),)).describe() == ["Always"]
    assert Filter().describe() == []
