"""ghfilter - declarative condition filters for GitHub activity events."""

from ghfilter.filters import Condition, Filter
from ghfilter.github import Event, Organization, Repository

__version__ = "0.1.0"

__all__ = [
    "Condition",
    "Event",
    "Filter",
    "Organization",
    "Repository",
    "__version__",
]
