"""Filter evaluation result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ghfilter.github.events import Event  # noqa: TC001 - pydantic needs it at runtime


class FilterMatch(BaseModel):
    """Result of a successful filter match against an event."""

    model_config = ConfigDict(frozen=True)

    event: Event = Field(..., description="The event that matched")
    filter_id: str = Field(..., description="ID of the filter that matched")
    filter_name: str = Field(..., description="Human-readable name of the filter")
    match_reason: str = Field(..., description="Human-readable explanation of why it matched")

    @property
    def match_key(self) -> str:
        """Get a unique key for this match (event_id:filter_id).

        Used for deduplication by downstream consumers.
        """
        return f"{self.event.id}:{self.filter_id}"


class EvaluationResult(BaseModel):
    """Collection of all filter matches for an event."""

    model_config = ConfigDict(frozen=True)

    event: Event = Field(..., description="The event being evaluated")
    matches: list[FilterMatch] = Field(default_factory=list, description="All filters that matched")
    filters_evaluated: int = Field(default=0, description="Total number of filters evaluated")

    @property
    def has_matches(self) -> bool:
        """Check if any filter matched."""
        return len(self.matches) > 0

    @property
    def matched_filter_ids(self) -> list[str]:
        """Get list of matched filter IDs."""
        return [m.filter_id for m in self.matches]
