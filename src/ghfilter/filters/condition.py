"""Single-condition matching against GitHub events.

A Condition combines up to nine independent sub-checks. Every field left at
its zero value skips the corresponding check, so an empty Condition matches
every event.

Sub-checks run in a fixed order and stop at the first failure:

- A check whose data is missing (no payload, payload path absent or of the
  wrong type) or whose regular expression does not compile returns False,
  whatever ``negate`` says.
- A check whose data is present but does not compare equal returns ``negate``.
- When every configured check passes the result is ``not negate``.

Negation is therefore applied at the first failing check, not to the overall
result.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ghfilter.filters.payload import (
    FilterError,
    compile_pattern,
    payload_action,
    payload_issue_body,
    payload_issue_labels,
    payload_issue_milestone_title,
    payload_issue_title,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from ghfilter.github.events import Event

logger = logging.getLogger(__name__)


def _quote(value: str) -> str:
    """Double-quote a value for display, using JSON string escaping.

    For ordinary text this reads like Go's ``%q``. The escapes differ for
    some characters: DEL (``\\x7f``) and other non-printable characters
    outside the C0 range are left raw, where ``%q`` would write ``\\x7f``
    or ``\\u2028``; C0 controls come out as ``\\u001b`` rather than ``\\x1b``.
    """
    return json.dumps(value, ensure_ascii=False)


class Condition(BaseModel):
    """A test which compares several fields of a GitHub event.

    Attributes:
        negate: Turn a failed comparison into a match. Checks that need data
            the event does not carry keep failing.
        type: Exact, case-sensitive event type. Empty skips the check.
        payload_action: ``payload.action``, compared case-insensitively.
        payload_issue_label: Label that must be in ``payload.issue.labels``,
            compared case-insensitively.
        payload_issue_milestone_title: ``payload.issue.milestone.title``,
            compared case-insensitively.
        payload_issue_title_regexp: Pattern searched for in ``payload.issue.title``.
        payload_issue_body_regexp: Pattern searched for in ``payload.issue.body``.
        compare_public: Enable the visibility check.
        public: Expected visibility when ``compare_public`` is set.
        organization_id: Required organization ID. Zero skips the check.
        repository_id: Required repository ID. Zero skips the check.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    negate: bool = False
    type: str = ""
    payload_action: str = ""
    payload_issue_label: str = ""
    payload_issue_milestone_title: str = ""
    payload_issue_title_regexp: str = ""
    payload_issue_body_regexp: str = ""
    compare_public: bool = False
    public: bool = False
    organization_id: int = Field(default=0, ge=0)
    repository_id: int = Field(default=0, ge=0)

    @property
    def is_empty(self) -> bool:
        """Check if no sub-check is configured."""
        return next(self._configured_checks(), None) is None

    def matches(self, event: Event) -> bool:
        """Check if an event satisfies this condition.

        Args:
            event: Event to check.

        Returns:
            True if the event matches, taking ``negate`` into account.
        """
        for name, check in self._configured_checks():
            try:
                passed = check(event)
            except FilterError as e:
                logger.debug("Condition check '%s' cannot be evaluated: %s", name, e)
                return False
            if not passed:
                return self.negate
        return not self.negate

    def _configured_checks(self) -> Iterator[tuple[str, Callable[[Event], bool]]]:
        """Yield the configured sub-checks in evaluation order."""
        if self.type:
            yield "type", self._check_type
        if self.payload_action:
            yield "payload_action", self._check_payload_action
        if self.payload_issue_label:
            yield "payload_issue_label", self._check_payload_issue_label
        if self.payload_issue_milestone_title:
            yield "payload_issue_milestone_title", self._check_payload_issue_milestone_title
        if self.payload_issue_title_regexp:
            yield "payload_issue_title_regexp", self._check_payload_issue_title
        if self.payload_issue_body_regexp:
            yield "payload_issue_body_regexp", self._check_payload_issue_body
        if self.compare_public:
            yield "public", self._check_public
        if self.organization_id:
            yield "organization_id", self._check_organization
        if self.repository_id:
            yield "repository_id", self._check_repository

    def _check_type(self, event: Event) -> bool:
        return event.get_type() == self.type

    def _check_payload_action(self, event: Event) -> bool:
        action = payload_action(event.raw_payload)
        return action.lower() == self.payload_action.lower()

    def _check_payload_issue_label(self, event: Event) -> bool:
        wanted = self.payload_issue_label.lower()
        return any(label.lower() == wanted for label in payload_issue_labels(event.raw_payload))

    def _check_payload_issue_milestone_title(self, event: Event) -> bool:
        title = payload_issue_milestone_title(event.raw_payload)
        return title.lower() == self.payload_issue_milestone_title.lower()

    def _check_payload_issue_title(self, event: Event) -> bool:
        title = payload_issue_title(event.raw_payload)
        pattern = compile_pattern(self.payload_issue_title_regexp)
        return pattern.search(title) is not None

    def _check_payload_issue_body(self, event: Event) -> bool:
        body = payload_issue_body(event.raw_payload)
        pattern = compile_pattern(self.payload_issue_body_regexp)
        return pattern.search(body) is not None

    def _check_public(self, event: Event) -> bool:
        return event.get_public() == self.public

    def _check_organization(self, event: Event) -> bool:
        return event.org is not None and event.org.id == self.organization_id

    def _check_repository(self, event: Event) -> bool:
        return event.repo is not None and event.repo.id == self.repository_id

    def __str__(self) -> str:
        """Describe the configured checks in plain English.

        Clauses follow evaluation order and are joined with " AND ".
        An empty condition renders as an empty string.
        """
        is_ = "is not" if self.negate else "is"
        contains = "does not contain" if self.negate else "contains"
        matches = "does not match" if self.negate else "matches"

        clauses: list[str] = []
        if self.type:
            clauses.append(f"If type {is_} {_quote(self.type)}")
        if self.payload_action:
            clauses.append(f"If payload action {is_} {_quote(self.payload_action)}")
        if self.payload_issue_label:
            clauses.append(
                f"If payload issue labels {contains} {_quote(self.payload_issue_label)}"
            )
        if self.payload_issue_milestone_title:
            clauses.append(
                f"If payload issue milestone title {is_} "
                f"{_quote(self.payload_issue_milestone_title)}"
            )
        if self.payload_issue_title_regexp:
            clauses.append(
                f"If payload issue title {matches} regexp "
                f"{_quote(self.payload_issue_title_regexp)}"
            )
        if self.payload_issue_body_regexp:
            clauses.append(
                f"If payload issue body {matches} regexp "
                f"{_quote(self.payload_issue_body_regexp)}"
            )
        if self.compare_public:
            # negate with public=False reads "is not not public"
            visibility = "public" if self.public else "not public"
            clauses.append(f"If event {is_} {visibility}")
        if self.organization_id:
            clauses.append(f"If organization ID {is_} {self.organization_id}")
        if self.repository_id:
            clauses.append(f"If repository ID {is_} {self.repository_id}")
        return " AND ".join(clauses)
