"""Bounded search over the major/minor/patch cube."""

from __future__ import annotations

from .boundaries import SearchCache, conjunction_highest, conjunction_lowest, highest, lowest
from .overlap import overlaps

__all__ = [
    "SearchCache",
    "conjunction_highest",
    "conjunction_lowest",
    "highest",
    "lowest",
    "overlaps",
]
