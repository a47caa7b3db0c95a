"""Data models for the version resolution engine."""

from __future__ import annotations

from .request import ResolutionRequest
from .search_bounds import DEFAULT_BOUNDS, SearchBounds
from .strategy import Strategy
from .version_term import (
    Comparator,
    Conjunction,
    Constraint,
    ExactTerm,
    Operator,
    RangeTerm,
    VersionTerm,
    compare_versions,
    conjunction_accepts,
    release_triple,
)

__all__ = [
    "Comparator",
    "Conjunction",
    "Constraint",
    "DEFAULT_BOUNDS",
    "ExactTerm",
    "Operator",
    "RangeTerm",
    "ResolutionRequest",
    "SearchBounds",
    "Strategy",
    "VersionTerm",
    "compare_versions",
    "conjunction_accepts",
    "release_triple",
]
