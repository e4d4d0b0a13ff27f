"""GitHub event models and normalization."""

from ghfilter.github.events import (
    Event,
    EventFormatError,
    Organization,
    Repository,
    normalize_event,
    normalize_events,
)

__all__ = [
    "Event",
    "EventFormatError",
    "Organization",
    "Repository",
    "normalize_event",
    "normalize_events",
]
