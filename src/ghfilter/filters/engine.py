"""Filter evaluation engine.

This module provides the FilterEngine class for evaluating events against
the named filters declared in configuration. Each enabled filter is evaluated
independently; an event matters when at least one filter matches it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ghfilter.filters.schema import EvaluationResult, FilterMatch
from ghfilter.logging.audit import log_filter_evaluated

if TYPE_CHECKING:
    from ghfilter.config.schema import NamedFilter
    from ghfilter.github.events import Event


class FilterEngine:
    """Engine for evaluating events against named filters."""

    def __init__(self, filters: list[NamedFilter]) -> None:
        """Initialize the filter engine.

        Args:
            filters: Named filters to evaluate. Disabled filters are skipped.
        """
        self._filters = [named for named in filters if named.enabled]

    @property
    def filters(self) -> list[NamedFilter]:
        """Enabled filters, in evaluation order."""
        return list(self._filters)

    def evaluate(self, event: Event) -> EvaluationResult:
        """Evaluate an event against all enabled filters.

        Args:
            event: Event to evaluate.

        Returns:
            EvaluationResult with all matching filters.
        """
        matches: list[FilterMatch] = []

        for named in self._filters:
            matched, reason = self._evaluate_filter(event, named)
            log_filter_evaluated(
                event_id=event.id,
                filter_id=named.id,
                filter_name=named.name,
                matched=matched,
                match_reason=reason,
            )
            if matched:
                matches.append(
                    FilterMatch(
                        event=event,
                        filter_id=named.id,
                        filter_name=named.name,
                        match_reason=reason,
                    )
                )

        return EvaluationResult(
            event=event,
            matches=matches,
            filters_evaluated=len(self._filters),
        )

    def _evaluate_filter(self, event: Event, named: NamedFilter) -> tuple[bool, str]:
        """Evaluate a single named filter against an event.

        Returns:
            Tuple of (matched, reason).
        """
        flt = named.to_filter()
        if not flt.conditions:
            return True, "No conditions specified (matches all)"

        failed = flt.first_failure(event)
        if failed is None:
            return True, f"All {len(flt.conditions)} condition(s) matched"

        description = str(flt.conditions[failed]) or "Always"
        return False, f"Condition {failed + 1} not matched: {description}"


def evaluate_filters(event: Event, filters: list[NamedFilter]) -> EvaluationResult:
    """Evaluate an event against a list of named filters.

    This is a convenience function that creates a FilterEngine and evaluates.

    Args:
        event: Event to evaluate.
        filters: Filters to check.

    Returns:
        EvaluationResult with all matching filters.
    """
    return FilterEngine(filters).evaluate(event)
