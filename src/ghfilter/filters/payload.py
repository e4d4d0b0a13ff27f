"""Partial decoding of raw event payloads.

Each payload-dependent check needs a single field path. Rather than decoding
the whole payload, every path has a small schema covering exactly that path.
A document that does not fit the schema (invalid JSON, missing path, ``null``,
wrong type) raises PayloadShapeError, which the condition treats as absence of
data rather than as a failed comparison.
"""

from __future__ import annotations

import re
from typing import TypeVar

from pydantic import BaseModel, StrictStr, ValidationError


class FilterError(Exception):
    """Base class for errors raised while evaluating a condition."""


class PayloadShapeError(FilterError):
    """Raised when a payload lacks the field path a check needs."""


class PatternError(FilterError):
    """Raised when a regular expression pattern does not compile."""


class _ActionPayload(BaseModel):
    action: StrictStr


class _Label(BaseModel):
    name: StrictStr


class _IssueLabels(BaseModel):
    labels: list[StrictStr | _Label]


class _IssueLabelsPayload(BaseModel):
    issue: _IssueLabels


class _Milestone(BaseModel):
    title: StrictStr


class _IssueMilestone(BaseModel):
    milestone: _Milestone


class _IssueMilestonePayload(BaseModel):
    issue: _IssueMilestone


class _IssueTitle(BaseModel):
    title: StrictStr


class _IssueTitlePayload(BaseModel):
    issue: _IssueTitle


class _IssueBody(BaseModel):
    body: StrictStr


class _IssueBodyPayload(BaseModel):
    issue: _IssueBody


_SchemaT = TypeVar("_SchemaT", bound=BaseModel)


def decode_fragment(raw: bytes | str | None, schema: type[_SchemaT]) -> _SchemaT:
    """Decode the part of a raw JSON payload described by ``schema``.

    Fields outside the schema are ignored.

    Args:
        raw: Raw JSON payload, or None when the event has none.
        schema: Pydantic model describing the required field path.

    Returns:
        The validated fragment.

    Raises:
        PayloadShapeError: If there is no payload or it does not fit the schema.
    """
    if raw is None:
        msg = "event has no payload"
        raise PayloadShapeError(msg)
    try:
        return schema.model_validate_json(raw)
    except ValidationError as e:
        locations = sorted({".".join(str(loc) for loc in err["loc"]) for err in e.errors()})
        msg = f"payload does not fit {schema.__name__}: {', '.join(locations) or 'invalid JSON'}"
        raise PayloadShapeError(msg) from e


def payload_action(raw: bytes | str | None) -> str:
    """Return ``payload.action``."""
    return decode_fragment(raw, _ActionPayload).action


def payload_issue_labels(raw: bytes | str | None) -> list[str]:
    """Return the names in ``payload.issue.labels``.

    Labels may be plain strings or label objects with a ``name`` field.
    """
    labels = decode_fragment(raw, _IssueLabelsPayload).issue.labels
    return [label if isinstance(label, str) else label.name for label in labels]


def payload_issue_milestone_title(raw: bytes | str | None) -> str:
    """Return ``payload.issue.milestone.title``."""
    return decode_fragment(raw, _IssueMilestonePayload).issue.milestone.title


def payload_issue_title(raw: bytes | str | None) -> str:
    """Return ``payload.issue.title``."""
    return decode_fragment(raw, _IssueTitlePayload).issue.title


def payload_issue_body(raw: bytes | str | None) -> str:
    """Return ``payload.issue.body``."""
    return decode_fragment(raw, _IssueBodyPayload).issue.body


def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a regular expression for a search check.

    Args:
        pattern: Pattern in Python ``re`` syntax; inline flags like ``(?i)`` apply.

    Returns:
        Compiled pattern.

    Raises:
        PatternError: If the pattern is malformed.
    """
    try:
        return re.compile(pattern)
    except re.error as e:
        msg = f"invalid regexp {pattern!r}: {e}"
        raise PatternError(msg) from e
