"""Strategy engine: choose the value to write back for one declaration.

Every handler keeps the existing value when it already satisfies or dominates
the target, and otherwise adopts the target, without ever proposing a version
set whose floor is below the existing one. Versions below 1.0.0 are never
widened into ranges; a range that only admits 0.x versions collapses to its
lowest member.
"""

from __future__ import annotations

import logging
from typing import TypeAlias
from collections.abc import Callable

from semantic_version import Version

from .errors import InvalidTargetForStrategyError
from .models import (
    DEFAULT_BOUNDS,
    Comparator,
    Constraint,
    ExactTerm,
    Operator,
    RangeTerm,
    ResolutionRequest,
    SearchBounds,
    Strategy,
    VersionTerm,
    conjunction_accepts,
)
from .normalize import normalize
from .search import (
    SearchCache,
    conjunction_highest,
    conjunction_lowest,
    highest,
    lowest,
    overlaps,
)

logger = logging.getLogger(__name__)


def nominal_floor(constraint: Constraint) -> Version:
    """Floor read straight off the comparators, ignoring the search bounds.

    Each conjunction starts at its greatest lower-side comparator version
    (0.0.0 without one); the constraint starts at the least of those.
    """
    floors = []
    for branch in constraint.branches:
        lower = [c.version for c in branch if c.operator.limits_below]
        floors.append(max(lower) if lower else Version(major=0, minor=0, patch=0))
    return min(floors)


def floor_of(term: VersionTerm, bounds: SearchBounds = DEFAULT_BOUNDS) -> Version:
    """Lowest version a term admits.

    A range with no version inside ``bounds`` falls back to its nominal floor.
    """
    if isinstance(term, ExactTerm):
        return term.version
    bottom = lowest(term.constraint, bounds)
    if bottom is None:
        return nominal_floor(term.constraint)
    return bottom


def collapse_pre_1_0(term: VersionTerm, bounds: SearchBounds = DEFAULT_BOUNDS) -> VersionTerm:
    """Replace a range confined to 0.x with its lowest satisfying version."""
    if isinstance(term, ExactTerm):
        return term
    top = highest(term.constraint, bounds)
    if top is None or top.major != 0:
        return term
    bottom = lowest(term.constraint, bounds)
    logger.debug("Collapsing pre-1.0 range '%s' to %s", term.literal, bottom)
    return ExactTerm(version=bottom, literal=str(bottom))


def to_range(term: ExactTerm) -> VersionTerm:
    """Widen an exact version to ``>=X.Y.Z, <(X+1).0.0``; 0.x stays exact."""
    if term.is_pre_1_0:
        return term
    version = term.version
    ceiling = Version(major=version.major + 1, minor=0, patch=0)
    constraint = Constraint(
        branches=((Comparator(Operator.GE, version), Comparator(Operator.LT, ceiling)),)
    )
    return RangeTerm(constraint=constraint, literal=f">={version}, <{ceiling}")


def _keep(existing: VersionTerm, reason: str) -> str:
    logger.debug("Keeping existing '%s': %s", existing.literal, reason)
    return existing.literal


def _adopt(target: VersionTerm, reason: str) -> str:
    logger.debug("Adopting target '%s': %s", target.literal, reason)
    return target.literal


def _decide_unbounded_target(
    existing: VersionTerm, target: RangeTerm, bounds: SearchBounds
) -> str:
    existing_floor = floor_of(existing, bounds)
    target_floor = nominal_floor(target.constraint)
    if existing_floor > target_floor:
        return _keep(existing, f"above the target's nominal floor {target_floor}")
    logger.warning(
        "Target range '%s' has no version within search bounds %s; adopting it as-is",
        target.literal,
        bounds.ceiling,
    )
    return target.literal


def _decide_exact_exact(existing: ExactTerm, target: ExactTerm) -> str:
    if existing.version > target.version:
        return _keep(existing, "higher than target")
    return _adopt(target, "not lower than existing")


def _decide_exact_range(existing: ExactTerm, target: RangeTerm, bounds: SearchBounds) -> str:
    top = highest(target.constraint, bounds)
    bottom = lowest(target.constraint, bounds)
    if top is None or bottom is None:
        return _decide_unbounded_target(existing, target, bounds)

    if existing.version > top:
        return _keep(existing, f"above the target's highest version {top}")
    if target.constraint.contains(existing.version):
        return _keep(existing, "already inside the target range")
    if existing.version > bottom:
        return _keep(existing, f"above the target's lowest version {bottom}")
    return _adopt(target, "existing version is below the range")


def _decide_range_exact(existing: RangeTerm, target: ExactTerm, bounds: SearchBounds) -> str:
    bottom = floor_of(existing, bounds)
    if bottom > target.version:
        return _keep(existing, f"its lowest version {bottom} is above the target")
    top = highest(existing.constraint, bounds)
    if top is not None and top > target.version:
        return _keep(existing, f"its highest version {top} is above the target")
    if existing.constraint.contains(target.version):
        return _keep(existing, "target already satisfies it")
    return _adopt(target, "existing range is below the target")


def _decide_range_range(existing: RangeTerm, target: RangeTerm, bounds: SearchBounds) -> str:
    target_bottom = lowest(target.constraint, bounds)
    target_top = highest(target.constraint, bounds)
    if target_bottom is None or target_top is None:
        return _decide_unbounded_target(existing, target, bounds)

    existing_bottom = floor_of(existing, bounds)
    if existing_bottom > target_bottom:
        return _keep(existing, "its lowest version is above the target's")
    existing_top = highest(existing.constraint, bounds)
    if existing_top is not None and existing_top > target_top:
        return _keep(existing, "its highest version is above the target's")
    if overlaps(existing.constraint, target.constraint, bounds):
        return _keep(existing, "ranges overlap")
    return _adopt(target, "ranges are disjoint and existing is lower")


def decide(
    existing: VersionTerm, target: VersionTerm, bounds: SearchBounds = DEFAULT_BOUNDS
) -> str:
    """Return the literal to keep: ``existing`` if it satisfies or dominates ``target``.

    A pre-1.0 range target is collapsed to its lowest version first. The
    result is not normalized.
    """
    target = collapse_pre_1_0(target, bounds)
    if isinstance(existing, ExactTerm):
        if isinstance(target, ExactTerm):
            return _decide_exact_exact(existing, target)
        return _decide_exact_range(existing, target, bounds)
    if isinstance(target, ExactTerm):
        return _decide_range_exact(existing, target, bounds)
    return _decide_range_range(existing, target, bounds)


def resolve_exact(request: ResolutionRequest, bounds: SearchBounds) -> str:
    """Pin to an exact version; never below an existing exact version or range floor."""
    target = request.target
    if not isinstance(target, ExactTerm):
        raise InvalidTargetForStrategyError(Strategy.EXACT.value, request.target_literal)

    existing = request.existing
    if isinstance(existing, ExactTerm) and existing.version > target.version:
        return _keep(existing, "higher than target")
    if isinstance(existing, RangeTerm):
        bottom = lowest(existing.constraint, bounds)
        if bottom is not None and bottom > target.version:
            logger.debug(
                "Pinning to %s, the lowest version of existing range '%s'",
                bottom,
                existing.literal,
            )
            return str(bottom)
    return target.literal


def _covers(existing: RangeTerm, term: VersionTerm, bounds: SearchBounds) -> bool:
    """True if every version ``term`` admits is admitted by ``existing``.

    A conjunction accepts a contiguous run, so each target conjunction is
    covered when a single existing conjunction accepts both of its ends.
    """
    if isinstance(term, ExactTerm):
        return existing.constraint.contains(term.version)
    cache = SearchCache()
    covered = False
    for branch in term.constraint.branches:
        bottom = conjunction_lowest(branch, bounds, cache)
        top = conjunction_highest(branch, bounds, cache)
        if bottom is None or top is None:
            continue
        if not any(
            conjunction_accepts(candidate, bottom) and conjunction_accepts(candidate, top)
            for candidate in existing.constraint.branches
        ):
            return False
        covered = True
    return covered


def resolve_range(request: ResolutionRequest, bounds: SearchBounds) -> str:
    """Write a ``>=X.Y.Z, <(X+1).0.0`` style range (0.x versions stay exact)."""
    target = collapse_pre_1_0(request.target, bounds)
    candidate = to_range(target) if isinstance(target, ExactTerm) else target

    existing = request.existing
    if existing is None:
        return candidate.literal

    candidate_bottom = floor_of(candidate, bounds)
    if isinstance(existing, RangeTerm):
        if _covers(existing, target, bounds):
            return _keep(existing, "already contains the target")
        existing_bottom = floor_of(existing, bounds)
        if existing_bottom > candidate_bottom:
            return _keep(existing, f"its lowest version {existing_bottom} is above the target")
        return _adopt(candidate, "existing range does not cover the target")

    if existing.version > candidate_bottom:
        widened = to_range(existing)
        logger.debug(
            "Existing %s is above the target; widening it to '%s'",
            existing.literal,
            widened.literal,
        )
        return widened.literal
    return _adopt(candidate, "not lower than existing")


def resolve_dynamic(request: ResolutionRequest, bounds: SearchBounds) -> str:
    """Keep the shape (exact or range) the existing declaration already uses."""
    target = collapse_pre_1_0(request.target, bounds)
    existing = request.existing
    if existing is None:
        return target.literal

    if (
        isinstance(existing, RangeTerm)
        and isinstance(target, ExactTerm)
        and not existing.constraint.contains(target.version)
    ):
        target = to_range(target)
    return decide(existing, target, bounds)


StrategyHandler: TypeAlias = Callable[[ResolutionRequest, SearchBounds], str]

# Registry of strategy handlers, keyed by Strategy.
STRATEGY_HANDLERS: dict[Strategy, StrategyHandler] = {
    Strategy.DYNAMIC: resolve_dynamic,
    Strategy.EXACT: resolve_exact,
    Strategy.RANGE: resolve_range,
}


def resolve_request(request: ResolutionRequest, bounds: SearchBounds = DEFAULT_BOUNDS) -> str:
    """Run the handler for ``request.strategy`` and normalize its result."""
    handler = STRATEGY_HANDLERS[request.strategy]
    result = normalize(handler(request, bounds))
    logger.debug(
        "Resolved %s strategy: target=%r existing=%r -> %r",
        request.strategy.value,
        request.target_literal,
        request.existing_literal,
        result,
    )
    return result
