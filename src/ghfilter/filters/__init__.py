"""Condition-matching engine for GitHub events."""

from ghfilter.filters.condition import Condition
from ghfilter.filters.engine import FilterEngine, evaluate_filters
from ghfilter.filters.filter import Filter
from ghfilter.filters.payload import FilterError, PatternError, PayloadShapeError
from ghfilter.filters.schema import EvaluationResult, FilterMatch

__all__ = [
    "Condition",
    "EvaluationResult",
    "Filter",
    "FilterEngine",
    "FilterError",
    "FilterMatch",
    "PatternError",
    "PayloadShapeError",
    "evaluate_filters",
]
