"""Logging module for ghfilter.

This module provides structured JSON logging with:
- structlog configuration for consistent log formatting
- Secret redaction for tokens that may appear in event payloads
- Structured log events for event intake and filter decisions

Usage:
    from ghfilter.logging import configure_logging, log_decision

    configure_logging(verbose=True)
    log_decision(event_id, event_type, filters_evaluated, matched_filter_ids)
"""

from ghfilter.logging.audit import (
    configure_logging,
    get_logger,
    log_check_summary,
    log_decision,
    log_event_received,
    log_filter_evaluated,
    redact_secrets,
)

__all__ = [
    "configure_logging",
    "get_logger",
    "log_check_summary",
    "log_decision",
    "log_event_received",
    "log_filter_evaluated",
    "redact_secrets",
]
