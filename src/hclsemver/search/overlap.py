"""Decide whether two range constraints share a version inside the bounds."""

from __future__ import annotations

import logging
from itertools import product

from semantic_version import Version

from ..models import (
    DEFAULT_BOUNDS,
    Constraint,
    SearchBounds,
    conjunction_accepts,
    release_triple,
)
from .boundaries import (
    SearchCache,
    Triple,
    conjunction_lowest,
    constraint_highest,
    constraint_lowest,
    release,
)

logger = logging.getLogger(__name__)

# Fractions of the shared interval probed before the exhaustive pass.
_PROBE_POINTS = (2, 1, 3)


def _to_index(triple: Triple, bounds: SearchBounds) -> int:
    major, minor, patch = triple
    return (major * (bounds.max_minor + 1) + minor) * (bounds.max_patch + 1) + patch


def _from_index(index: int, bounds: SearchBounds) -> Triple:
    rest, patch = divmod(index, bounds.max_patch + 1)
    major, minor = divmod(rest, bounds.max_minor + 1)
    return (major, minor, patch)


def _probe_shared_interval(
    a: Constraint, b: Constraint, start: Version, end: Version, bounds: SearchBounds
) -> bool:
    first = _to_index(release_triple(start), bounds)
    last = _to_index(release_triple(end), bounds)
    for quarter in _PROBE_POINTS:
        probe = release(_from_index(first + (last - first) * quarter // 4, bounds))
        if a.contains(probe) and b.contains(probe):
            logger.debug("Overlap found at probe %s", probe)
            return True
    return False


def _shared_pre_release(a: Constraint, b: Constraint, bounds: SearchBounds) -> bool:
    # A conjunction admitting only pre-releases has no true maximum, so check
    # the named pre-releases before trusting the interval fast path.
    for comparator in (*a.comparators(), *b.comparators()):
        version = comparator.version
        if version.prerelease and bounds.covers(version):
            if a.contains(version) and b.contains(version):
                return True
    return False


def _search_conjunction_pairs(
    a: Constraint, b: Constraint, bounds: SearchBounds, cache: SearchCache
) -> bool:
    for left, right in product(a.branches, b.branches):
        merged = left + right
        found = conjunction_lowest(
            merged,
            bounds,
            cache,
            accepts=lambda v, lhs=left, rhs=right: conjunction_accepts(lhs, v)
            and conjunction_accepts(rhs, v),
        )
        if found is not None:
            logger.debug("Overlap found at %s", found)
            return True
    return False


def overlaps(a: Constraint, b: Constraint, bounds: SearchBounds = DEFAULT_BOUNDS) -> bool:
    """Return True if some version inside ``bounds`` satisfies both constraints."""
    cache = SearchCache()

    a_low = constraint_lowest(a, bounds, cache)
    b_low = constraint_lowest(b, bounds, cache)
    a_high = constraint_highest(a, bounds, cache)
    b_high = constraint_highest(b, bounds, cache)
    if a_low is None or b_low is None or a_high is None or b_high is None:
        return False

    if _shared_pre_release(a, b, bounds):
        return True

    if a_high < b_low or b_high < a_low:
        return False

    if a.contains(b_low) or a.contains(b_high) or b.contains(a_low) or b.contains(a_high):
        return True

    shared_start = max(a_low, b_low)
    shared_end = min(a_high, b_high)
    if _probe_shared_interval(a, b, shared_start, shared_end, bounds):
        return True

    return _search_conjunction_pairs(a, b, bounds, cache)
