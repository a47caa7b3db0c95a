"""Parsed representation of a version declaration.

A declaration is either an exact semantic version or a range constraint. Both
variants keep the literal they were parsed from so the engine can hand back
the caller's own formatting when it decides to keep a value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias
from collections.abc import Iterator

from semantic_version import Version


class Operator(Enum):
    """Comparison operators allowed inside a conjunction."""

    GE = ">="
    GT = ">"
    LE = "<="
    LT = "<"
    EQ = "="

    @property
    def limits_below(self) -> bool:
        """True for operators that put a floor under the accepted versions."""
        return self in (Operator.GE, Operator.GT, Operator.EQ)

    @property
    def limits_above(self) -> bool:
        """True for operators that put a ceiling over the accepted versions."""
        return self in (Operator.LE, Operator.LT, Operator.EQ)


def compare_versions(left: Version, right: Version) -> int:
    """Three-way comparison by semver precedence (build metadata ignored)."""
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def release_triple(version: Version) -> tuple[int, int, int]:
    return (version.major, version.minor, version.patch)


@dataclass(frozen=True)
class Comparator:
    """A single ``operator version`` pair, e.g. ``>= 1.2.0``."""

    operator: Operator
    version: Version

    def accepts(self, version: Version) -> bool:
        """Check ordering only; pre-release gating is done per conjunction."""
        order = compare_versions(version, self.version)
        if self.operator is Operator.GE:
            return order >= 0
        if self.operator is Operator.GT:
            return order > 0
        if self.operator is Operator.LE:
            return order <= 0
        if self.operator is Operator.LT:
            return order < 0
        return order == 0

    def __str__(self) -> str:
        return f"{self.operator.value}{self.version}"


Conjunction: TypeAlias = tuple[Comparator, ...]


def conjunction_accepts(conjunction: Conjunction, version: Version) -> bool:
    """Return True if every comparator accepts ``version``.

    A pre-release version is only admitted when one of the comparators names a
    pre-release of the same major.minor.patch.
    """
    if version.prerelease:
        triple = release_triple(version)
        if not any(
            comparator.version.prerelease and release_triple(comparator.version) == triple
            for comparator in conjunction
        ):
            return False
    return all(comparator.accepts(version) for comparator in conjunction)


@dataclass(frozen=True)
class Constraint:
    """OR-list of AND-conjunctions of comparators."""

    branches: tuple[Conjunction, ...]

    def __post_init__(self) -> None:
        if not self.branches:
            raise ValueError("Constraint must contain at least one conjunction")
        if any(not branch for branch in self.branches):
            raise ValueError("Every conjunction must contain at least one comparator")

    def contains(self, version: Version) -> bool:
        """Return True if any conjunction accepts ``version``."""
        return any(conjunction_accepts(branch, version) for branch in self.branches)

    def comparators(self) -> Iterator[Comparator]:
        for branch in self.branches:
            yield from branch

    def __str__(self) -> str:
        return " || ".join(", ".join(str(c) for c in branch) for branch in self.branches)


@dataclass(frozen=True)
class ExactTerm:
    """A single semantic version, e.g. ``1.2.3-beta.1+build5``."""

    version: Version
    literal: str

    @property
    def is_pre_1_0(self) -> bool:
        return self.version.major == 0


@dataclass(frozen=True)
class RangeTerm:
    """A range constraint, e.g. ``>= 1.0.0, < 2.0.0 || >= 3.0.0``."""

    constraint: Constraint
    literal: str


VersionTerm: TypeAlias = ExactTerm | RangeTerm
