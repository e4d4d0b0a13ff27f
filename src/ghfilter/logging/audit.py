"""Structured JSON logging and filter decision trail.

This module provides:
- structlog configuration for JSON logging to stderr
- Secret redaction for sensitive values found in events and configuration
- Structured log events for event intake, filter evaluation and check runs
"""

from __future__ import annotations

import logging
import re
import sys
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

    from structlog.typing import EventDict, WrappedLogger

# Patterns for secret redaction
SECRET_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    # GitHub tokens (ghp_, gho_, ghu_, ghs_, ghr_ prefixes)
    (re.compile(r"(gh[pousr]_[A-Za-z0-9_]{36,})"), "[REDACTED_GITHUB_TOKEN]"),
    # Fine-grained personal access tokens
    (re.compile(r"(github_pat_[A-Za-z0-9_]{22,})"), "[REDACTED_GITHUB_TOKEN]"),
    # Generic tokens that look like they might be sensitive
    (re.compile(r"(token[=:]\s*['\"]?)([A-Za-z0-9_-]{20,})"), r"\1[REDACTED]"),
    # Bearer tokens in headers
    (re.compile(r"(Bearer\s+)([A-Za-z0-9._-]+)", re.IGNORECASE), r"\1[REDACTED]"),
    # Authorization headers
    (re.compile(r"(authorization[=:]\s*['\"]?)([^\s'\"]+)", re.IGNORECASE), r"\1[REDACTED]"),
]


def redact_secrets(value: Any) -> Any:
    """Redact sensitive values from a string, dict, or list.

    Issue titles and bodies end up in logs through match reasons, so anything
    that looks like a credential is masked before rendering.

    Args:
        value: Value to redact. Can be str, dict, list, or other.

    Returns:
        Value with sensitive data redacted
    """
    if isinstance(value, str):
        result = value
        for pattern, replacement in SECRET_PATTERNS:
            result = pattern.sub(replacement, result)
        return result

    if isinstance(value, dict):
        return {k: redact_secrets(v) for k, v in value.items()}

    if isinstance(value, list):
        return [redact_secrets(item) for item in value]

    return value


def _redact_processor(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """structlog processor that redacts secrets from log events."""
    return redact_secrets(event_dict)


def configure_logging(
    verbose: bool = False,
    json_output: bool = True,
) -> None:
    """Configure structured logging for the application.

    Sets up structlog with JSON formatting to stderr, including:
    - Timestamp in ISO format
    - Log level
    - Secret redaction
    - Exception formatting

    Args:
        verbose: If True, enable DEBUG level. Otherwise INFO.
        json_output: If True, output JSON. Otherwise use console format.
    """
    level = logging.DEBUG if verbose else logging.INFO

    # Library modules log through the standard library
    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=level,
    )

    processors: list[Callable[..., Any]] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _redact_processor,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a configured structlog logger.

    Args:
        name: Optional logger name (typically __name__)

    Returns:
        Bound structlog logger
    """
    return structlog.get_logger(name)


def log_event_received(
    event_id: str | None,
    event_type: str,
    repository: str | None,
) -> None:
    """Log when an event is read from input.

    Args:
        event_id: Platform event identifier
        event_type: Type of event (e.g. 'IssuesEvent')
        repository: Repository name, if the event has one
    """
    log = get_logger("ghfilter.events")
    log.debug(
        "event_received",
        event_id=event_id,
        event_type=event_type,
        repository=repository,
    )


def log_filter_evaluated(
    event_id: str | None,
    filter_id: str,
    filter_name: str,
    matched: bool,
    match_reason: str,
) -> None:
    """Log when a filter is evaluated against an event.

    Args:
        event_id: Event being evaluated
        filter_id: Filter identifier
        filter_name: Human-readable filter name
        matched: Whether the filter matched
        match_reason: Explanation of match/no-match
    """
    log = get_logger("ghfilter.filters")
    log.debug(
        "filter_evaluated",
        event_id=event_id,
        filter_id=filter_id,
        filter_name=filter_name,
        matched=matched,
        match_reason=match_reason,
    )


def log_decision(
    event_id: str | None,
    event_type: str,
    filters_evaluated: int,
    matched_filter_ids: list[str],
) -> None:
    """Log the outcome of evaluating every filter against one event.

    Args:
        event_id: Event identifier
        event_type: Type of event
        filters_evaluated: Number of filters evaluated
        matched_filter_ids: IDs of the filters that matched
    """
    log = get_logger("ghfilter.audit")
    log.info(
        "decision",
        event_id=event_id,
        event_type=event_type,
        filters_evaluated=filters_evaluated,
        filters_matched=len(matched_filter_ids),
        matched_filter_ids=matched_filter_ids,
        disposition="matched" if matched_filter_ids else "filtered_out",
    )


def log_check_summary(
    events_read: int,
    events_matched: int,
    duration_ms: float,
) -> None:
    """Log completion of a check run.

    Args:
        events_read: Number of events read from input
        events_matched: Number of events matched by at least one filter
        duration_ms: Run duration in milliseconds
    """
    log = get_logger("ghfilter.check")
    log.info(
        "check_complete",
        events_read=events_read,
        events_matched=events_matched,
        duration_ms=round(duration_ms, 2),
    )
