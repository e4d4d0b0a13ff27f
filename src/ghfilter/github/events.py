"""GitHub event models and Events API normalization.

An Event is read-only input to the filters. It keeps the payload as raw JSON
bytes so that each payload-dependent check decodes only what it needs.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from datetime import datetime  # noqa: TC003 - pydantic needs it at runtime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class EventFormatError(ValueError):
    """Raised when raw event data cannot be turned into an Event."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        """Initialize EventFormatError.

        Args:
            message: Error description
            errors: Pydantic validation error dicts, if any
        """
        self.errors = errors or []
        super().__init__(message)


class Organization(BaseModel):
    """Organization reference attached to an event."""

    model_config = ConfigDict(frozen=True)

    id: int
    login: str | None = None


class Repository(BaseModel):
    """Repository reference attached to an event."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str | None = None


class Event(BaseModel):
    """A single activity event from the GitHub Events API.

    Only ``type``, ``raw_payload``, ``public``, ``org`` and ``repo`` take part
    in matching. The remaining fields are carried for diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    id: str | None = Field(default=None, description="Platform event ID")
    type: str | None = Field(default=None, description="Event type, e.g. IssuesEvent")
    raw_payload: bytes | None = Field(default=None, description="Raw JSON payload")
    public: bool | None = Field(default=None, description="Whether the event is public")
    org: Organization | None = Field(default=None, description="Owning organization")
    repo: Repository | None = Field(default=None, description="Repository")
    actor: str | None = Field(default=None, description="Login of the acting user")
    created_at: datetime | None = Field(default=None, description="When the event occurred")

    def get_type(self) -> str:
        """Return the event type, or an empty string when unset."""
        return self.type or ""

    def get_public(self) -> bool:
        """Return the visibility flag, treating unset as private."""
        return bool(self.public)

    @property
    def display_name(self) -> str:
        """Get a human-readable display name for the event."""
        parts = [self.get_type() or "UnknownEvent"]
        if self.repo is not None and self.repo.name:
            parts.append(f"on {self.repo.name}")
        if self.id:
            parts.append(f"({self.id})")
        return " ".join(parts)


def normalize_event(data: Mapping[str, Any]) -> Event:
    """Normalize one GitHub Events API object to an Event.

    Args:
        data: Raw event object as returned by ``GET /events`` and friends.

    Returns:
        Normalized Event object.

    Raises:
        EventFormatError: If the object is not a mapping or fails validation.
    """
    if not isinstance(data, Mapping):
        msg = f"Event must be a JSON object, got {type(data).__name__}"
        raise EventFormatError(msg)

    raw_payload: bytes | None = None
    payload = data.get("payload")
    if payload is not None:
        raw_payload = json.dumps(payload, separators=(",", ":")).encode("utf-8")

    actor = data.get("actor")
    actor_login = actor.get("login") if isinstance(actor, Mapping) else None

    event_id = data.get("id")

    try:
        return Event.model_validate(
            {
                "id": str(event_id) if event_id is not None else None,
                "type": data.get("type"),
                "raw_payload": raw_payload,
                "public": data.get("public"),
                "org": data.get("org"),
                "repo": data.get("repo"),
                "actor": actor_login,
                "created_at": data.get("created_at"),
            }
        )
    except ValidationError as e:
        errors = e.errors()
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in errors
        )
        msg = f"Invalid event {event_id!r}: {details}"
        raise EventFormatError(msg, [dict(err) for err in errors]) from e


def normalize_events(data: Any) -> list[Event]:
    """Normalize a single event object or a list of them.

    Args:
        data: Decoded JSON document (object or array of objects).

    Returns:
        List of normalized Events, in input order.

    Raises:
        EventFormatError: If the document has the wrong shape.
    """
    if isinstance(data, Mapping):
        return [normalize_event(data)]
    if isinstance(data, list):
        return [normalize_event(item) for item in data]
    msg = f"Expected an event object or a list of events, got {type(data).__name__}"
    raise EventFormatError(msg)
