"""Lowest/highest satisfying version of a range constraint.

The search runs over the bounded cube ``0.0.0 ..= bounds.ceiling``. Each
conjunction accepts a contiguous run of that cube, so its upper-side
comparators (``<``, ``<=``, and ``=`` read as ``<=``) hold for a prefix of the
cube and its lower-side comparators (``>``, ``>=``, and ``=`` read as ``>=``)
hold for a suffix. A staged
binary search (major, then minor, then patch) over the matching side finds the
edge of that run; the edge is then checked against the whole conjunction.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from semantic_version import Version

from ..models import (
    DEFAULT_BOUNDS,
    Comparator,
    Conjunction,
    Constraint,
    Operator,
    SearchBounds,
    conjunction_accepts,
)

logger = logging.getLogger(__name__)

Triple = tuple[int, int, int]


class SearchCache:
    """Memoised comparator checks for release versions.

    Create one per public call; never share an instance across calls.
    """

    def __init__(self) -> None:
        self._results: dict[tuple[tuple[Comparator, ...], Triple], bool] = {}

    def accepts(self, comparators: tuple[Comparator, ...], triple: Triple) -> bool:
        key = (comparators, triple)
        result = self._results.get(key)
        if result is None:
            version = release(triple)
            result = all(comparator.accepts(version) for comparator in comparators)
            self._results[key] = result
        return result

    def __len__(self) -> int:
        return len(self._results)


def release(triple: Triple) -> Version:
    major, minor, patch = triple
    return Version(major=major, minor=minor, patch=patch)


def _last_true(lo: int, hi: int, predicate: Callable[[int], bool]) -> int | None:
    """Largest value in [lo, hi] for a predicate that is true then false."""
    found = None
    while lo <= hi:
        mid = (lo + hi) // 2
        if predicate(mid):
            found = mid
            lo = mid + 1
        else:
            hi = mid - 1
    return found


def _first_true(lo: int, hi: int, predicate: Callable[[int], bool]) -> int | None:
    """Smallest value in [lo, hi] for a predicate that is false then true."""
    found = None
    while lo <= hi:
        mid = (lo + hi) // 2
        if predicate(mid):
            found = mid
            hi = mid - 1
        else:
            lo = mid + 1
    return found


def _search_top(check: Callable[[Triple], bool], bounds: SearchBounds) -> Triple | None:
    """Largest triple for which ``check`` (true on a prefix of the cube) holds."""
    major = _last_true(0, bounds.max_major, lambda m: check((m, 0, 0)))
    if major is None:
        return None
    minor = _last_true(0, bounds.max_minor, lambda n: check((major, n, 0)))
    if minor is None:
        return None
    patch = _last_true(0, bounds.max_patch, lambda p: check((major, minor, p)))
    if patch is None:
        return None
    return (major, minor, patch)


def _search_bottom(check: Callable[[Triple], bool], bounds: SearchBounds) -> Triple | None:
    """Smallest triple for which ``check`` (true on a suffix of the cube) holds."""
    top_minor, top_patch = bounds.max_minor, bounds.max_patch
    major = _first_true(0, bounds.max_major, lambda m: check((m, top_minor, top_patch)))
    if major is None:
        return None
    minor = _first_true(0, top_minor, lambda n: check((major, n, top_patch)))
    if minor is None:
        return None
    patch = _first_true(0, top_patch, lambda p: check((major, minor, p)))
    if patch is None:
        return None
    return (major, minor, patch)


def _pre_release_candidates(
    conjunction: Conjunction, bounds: SearchBounds, accepts: Callable[[Version], bool]
) -> list[Version]:
    # Pre-release versions fall between cube points; only the ones named by a
    # comparator can be extremes of the accepted set.
    return [
        comparator.version
        for comparator in conjunction
        if comparator.version.prerelease
        and bounds.covers(comparator.version)
        and accepts(comparator.version)
    ]


def _side(conjunction: Conjunction, above: bool) -> tuple[Comparator, ...]:
    """Comparators bounding one side, with ``=`` relaxed to ``<=``/``>=``.

    ``=`` holds at a single point, so on its own it is neither a prefix nor a
    suffix of the cube.
    """
    relaxed = Operator.LE if above else Operator.GE
    side = []
    for comparator in conjunction:
        limits = comparator.operator.limits_above if above else comparator.operator.limits_below
        if not limits:
            continue
        if comparator.operator is Operator.EQ:
            comparator = Comparator(relaxed, comparator.version)
        side.append(comparator)
    return tuple(side)


def conjunction_highest(
    conjunction: Conjunction,
    bounds: SearchBounds,
    cache: SearchCache,
    accepts: Callable[[Version], bool] | None = None,
) -> Version | None:
    accepts = accepts or (lambda v: conjunction_accepts(conjunction, v))
    upper = _side(conjunction, above=True)
    candidates = _pre_release_candidates(conjunction, bounds, accepts)

    top = _search_top(lambda t: cache.accepts(upper, t), bounds)
    if top is not None and cache.accepts(conjunction, top):
        candidates.append(release(top))
    return max(candidates) if candidates else None


def conjunction_lowest(
    conjunction: Conjunction,
    bounds: SearchBounds,
    cache: SearchCache,
    accepts: Callable[[Version], bool] | None = None,
) -> Version | None:
    accepts = accepts or (lambda v: conjunction_accepts(conjunction, v))
    lower = _side(conjunction, above=False)
    candidates = _pre_release_candidates(conjunction, bounds, accepts)

    bottom = _search_bottom(lambda t: cache.accepts(lower, t), bounds)
    if bottom is not None and cache.accepts(conjunction, bottom):
        candidates.append(release(bottom))
    return min(candidates) if candidates else None


def _log_out_of_bounds(constraint: Constraint, bounds: SearchBounds) -> None:
    outside = [c for c in constraint.comparators() if not bounds.covers(c.version)]
    if outside:
        logger.debug(
            "Constraint '%s' references %s beyond search bounds %s; "
            "versions past the ceiling are treated as no match",
            constraint,
            ", ".join(str(c) for c in outside),
            bounds.ceiling,
        )


def _extreme(
    versions: Iterable[Version | None], pick: Callable[[list[Version]], Version]
) -> Version | None:
    found = [v for v in versions if v is not None]
    return pick(found) if found else None


def constraint_highest(
    constraint: Constraint, bounds: SearchBounds, cache: SearchCache
) -> Version | None:
    return _extreme(
        (conjunction_highest(branch, bounds, cache) for branch in constraint.branches), max
    )


def constraint_lowest(
    constraint: Constraint, bounds: SearchBounds, cache: SearchCache
) -> Version | None:
    return _extreme(
        (conjunction_lowest(branch, bounds, cache) for branch in constraint.branches), min
    )


def highest(constraint: Constraint, bounds: SearchBounds = DEFAULT_BOUNDS) -> Version | None:
    """Return the highest version inside ``bounds`` satisfying ``constraint``.

    None means the constraint is unsatisfiable within the bounds.
    """
    _log_out_of_bounds(constraint, bounds)
    return constraint_highest(constraint, bounds, SearchCache())


def lowest(constraint: Constraint, bounds: SearchBounds = DEFAULT_BOUNDS) -> Version | None:
    """Return the lowest version inside ``bounds`` satisfying ``constraint``.

    None means the constraint is unsatisfiable within the bounds.
    """
    _log_out_of_bounds(constraint, bounds)
    return constraint_lowest(constraint, bounds, SearchCache())
