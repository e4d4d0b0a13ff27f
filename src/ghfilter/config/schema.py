"""Pydantic schema models for configuration.

This module defines the configuration models:
- Config: Top-level configuration container
- NamedFilter: A user-defined filter with an ID and its conditions
"""

from __future__ import annotations

import re
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ghfilter.filters.condition import Condition
from ghfilter.filters.filter import Filter


class NamedFilter(BaseModel):
    """User-defined filter.

    Attributes:
        id: Unique filter identifier (lowercase, alphanumeric, hyphens)
        name: Human-readable filter name
        enabled: Whether the filter is active (default: True)
        description: Optional filter description
        conditions: Conditions that must all match
    """

    model_config = ConfigDict(extra="forbid")

    id: Annotated[str, Field(min_length=1, max_length=64)]
    name: Annotated[str, Field(min_length=1, max_length=100)]
    enabled: bool = True
    description: Annotated[str | None, Field(max_length=500)] = None
    conditions: list[Condition] = Field(default_factory=list)

    @field_validator("id")
    @classmethod
    def validate_filter_id(cls, v: str) -> str:
        """Validate filter ID format: lowercase, alphanumeric, hyphens."""
        if not re.match(r"^[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$", v):
            msg = (
                "filter id must be lowercase alphanumeric with hyphens, "
                "starting and ending with alphanumeric"
            )
            raise ValueError(msg)
        return v

    def to_filter(self) -> Filter:
        """Build the immutable Filter for these conditions."""
        return Filter(conditions=tuple(self.conditions))


class Config(BaseModel):
    """Top-level configuration loaded from YAML.

    Attributes:
        version: Schema version (must be 1)
        filters: List of named filters
    """

    model_config = ConfigDict(extra="forbid")

    version: Literal[1]
    filters: list[NamedFilter] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_unique_filter_ids(self) -> Config:
        """Ensure all filter IDs are unique."""
        ids = [f.id for f in self.filters]
        duplicates = {id_ for id_ in ids if ids.count(id_) > 1}
        if duplicates:
            msg = f"Duplicate filter IDs found: {sorted(duplicates)}"
            raise ValueError(msg)
        return self

    def get_enabled_filters(self) -> list[NamedFilter]:
        """Return only enabled filters."""
        return [f for f in self.filters if f.enabled]
