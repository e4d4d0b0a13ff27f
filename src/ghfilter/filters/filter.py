"""Filters: ordered collections of conditions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from ghfilter.filters.condition import Condition

if TYPE_CHECKING:
    from ghfilter.github.events import Event


class Filter(BaseModel):
    """An ordered collection of conditions that must all match.

    An empty filter matches every event.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    conditions: tuple[Condition, ...] = Field(default=(), description="Conditions to AND together")

    def matches(self, event: Event) -> bool:
        """Return True if the event matches all conditions, else False."""
        return all(condition.matches(event) for condition in self.conditions)

    def first_failure(self, event: Event) -> int | None:
        """Find the first condition the event does not match.

        Args:
            event: Event to check.

        Returns:
            Index of the failing condition, or None if the filter matches.
        """
        for index, condition in enumerate(self.conditions):
            if not condition.matches(event):
                return index
        return None

    def describe(self) -> list[str]:
        """Render each condition on its own line."""
        return [str(condition) or "Always" for condition in self.conditions]

    def __str__(self) -> str:
        return "\n".join(self.describe())
