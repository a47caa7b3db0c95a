"""Exact-version and range-constraint grammars built atop semantic_version.

Supported expressions:
- exact versions (e.g., "1.2.3", "v1.2.3", "1.2.3-alpha.1+build123")
- comparators ">=", ">", "<=", "<", "=" and "==" against full or partial
  versions, e.g. ">= 1.0.0, < 2" (commas or whitespace separate AND-terms)
- OR-branches separated by "||"
- caret ranges ^x.y.z -> >=x.y.z,<x+1.0.0 (0.y.z -> <0.y+1.0, 0.0.z -> <0.0.z+1)
- tilde ranges ~x.y.z -> >=x.y.z,<x.y+1.0
- wildcards "*", "1.x", "1.2.*" and bare partial versions "1", "1.2"
- hyphen ranges "1.2.3 - 2.3"

The "~>" shorthand is not handled here; expand it first (see ``shorthand``).
"""

from __future__ import annotations

import re

from semantic_version import Version

from ..models import Comparator, Constraint, Operator

_OR = "||"

_PARTIAL_RE = re.compile(
    r"^v?(?P<major>\d+|[xX*])"
    r"(?:\.(?P<minor>\d+|[xX*]))?"
    r"(?:\.(?P<patch>\d+|[xX*]))?"
    r"(?P<suffix>(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?)$"
)
_TERM_RE = re.compile(r"\s*(?P<op>>=|<=|==|=|>|<|\^|~)?\s*(?P<ver>[^\s<>=^~|]+)\s*")
_HYPHEN_RE = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")

_PLAIN_OPERATORS = {
    ">=": Operator.GE,
    ">": Operator.GT,
    "<=": Operator.LE,
    "<": Operator.LT,
    "=": Operator.EQ,
    "==": Operator.EQ,
    "": Operator.EQ,
}


def _release(major: int, minor: int = 0, patch: int = 0) -> Version:
    return Version(major=major, minor=minor, patch=patch)


def _next_major(v: Version) -> Version:
    return _release(v.major + 1)


def _next_minor(v: Version) -> Version:
    return _release(v.major, v.minor + 1)


def _caret_ceiling(v: Version) -> Version:
    if v.major > 0:
        return _next_major(v)
    if v.minor > 0:
        return _next_minor(v)
    return _release(0, 0, v.patch + 1)


def parse_exact(text: str) -> Version:
    """Parse a strict ``MAJOR.MINOR.PATCH[-pre][+build]`` string.

    A single leading ``v`` is accepted. Raises ValueError otherwise.
    """
    candidate = text.strip()
    if candidate.startswith("v"):
        candidate = candidate[1:]
    return Version(candidate)


def _split_partial(token: str) -> tuple[list[int], str]:
    """Return the concrete leading components of ``token`` and its suffix."""
    match = _PARTIAL_RE.match(token)
    if not match:
        raise ValueError(f"invalid version {token!r}")

    components: list[int] = []
    wildcard_seen = False
    for name in ("major", "minor", "patch"):
        raw = match.group(name)
        if raw is None or raw in {"x", "X", "*"}:
            wildcard_seen = True
            continue
        if wildcard_seen:
            raise ValueError(f"version {token!r} has a number after a wildcard")
        components.append(int(raw))

    suffix = match.group("suffix")
    if suffix and len(components) < 3:
        raise ValueError(f"partial version {token!r} cannot carry pre-release or build")
    return components, suffix


def _full_version(components: list[int], suffix: str) -> Version:
    return Version("{}.{}.{}{}".format(*components, suffix))


def _desugar(op: str, token: str) -> list[Comparator]:
    """Translate one ``op version`` term into plain comparators."""
    components, suffix = _split_partial(token)

    if len(components) == 3:
        version = _full_version(components, suffix)
        if op == "^":
            return [
                Comparator(Operator.GE, version),
                Comparator(Operator.LT, _caret_ceiling(version)),
            ]
        if op == "~":
            return [
                Comparator(Operator.GE, version),
                Comparator(Operator.LT, _next_minor(version)),
            ]
        return [Comparator(_PLAIN_OPERATORS[op], version)]

    if not components:
        # "*" accepts every release; strictly above/below "everything" accepts nothing.
        if op in {">", "<"}:
            return [Comparator(Operator.LT, _release(0))]
        return [Comparator(Operator.GE, _release(0))]

    floor = _release(*components)
    if len(components) == 1:
        family_end = _next_major(floor)
    elif op == "^" and floor.major > 0:
        family_end = _next_major(floor)
    else:
        family_end = _next_minor(floor)

    if op == ">=":
        return [Comparator(Operator.GE, floor)]
    if op == ">":
        return [Comparator(Operator.GE, family_end)]
    if op == "<":
        return [Comparator(Operator.LT, floor)]
    if op == "<=":
        return [Comparator(Operator.LT, family_end)]
    return [Comparator(Operator.GE, floor), Comparator(Operator.LT, family_end)]


def _desugar_hyphen(low: str, high: str) -> list[Comparator]:
    comparators: list[Comparator] = []

    low_components, low_suffix = _split_partial(low)
    if len(low_components) == 3:
        comparators.append(Comparator(Operator.GE, _full_version(low_components, low_suffix)))
    elif low_components:
        comparators.append(Comparator(Operator.GE, _release(*low_components)))

    high_components, high_suffix = _split_partial(high)
    if len(high_components) == 3:
        comparators.append(Comparator(Operator.LE, _full_version(high_components, high_suffix)))
    elif len(high_components) == 2:
        comparators.append(Comparator(Operator.LT, _next_minor(_release(*high_components))))
    elif len(high_components) == 1:
        comparators.append(Comparator(Operator.LT, _next_major(_release(*high_components))))

    return comparators or [Comparator(Operator.GE, _release(0))]


def _parse_branch(branch: str) -> tuple[Comparator, ...]:
    comparators: list[Comparator] = []
    for part in branch.split(","):
        part = part.strip()
        if not part:
            raise ValueError("empty comparator")

        hyphen = _HYPHEN_RE.match(part)
        if hyphen:
            comparators.extend(_desugar_hyphen(hyphen.group("low"), hyphen.group("high")))
            continue

        pos = 0
        while pos < len(part):
            match = _TERM_RE.match(part, pos)
            if not match or match.end() == pos:
                raise ValueError(f"unexpected text {part[pos:]!r}")
            comparators.extend(_desugar(match.group("op") or "", match.group("ver")))
            pos = match.end()

    return tuple(comparators)


def parse_constraint(text: str) -> Constraint:
    """Parse an OR-list of AND-conjunctions. Raises ValueError on bad input."""
    if not text.strip():
        raise ValueError("empty constraint")
    branches = []
    for branch in text.split(_OR):
        if not branch.strip():
            raise ValueError("empty '||' branch")
        branches.append(_parse_branch(branch))
    return Constraint(branches=tuple(branches))


def satisfies(installed: str, expr: str) -> bool:
    """Return True if exact version ``installed`` satisfies range ``expr``."""
    return parse_constraint(expr).contains(parse_exact(installed))
