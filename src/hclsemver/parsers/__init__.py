"""Parsers for exact versions, range constraints and the ``~>`` shorthand."""

from __future__ import annotations

from .semver import parse_constraint, parse_exact, satisfies
from .shorthand import build_range_from_token, expand_shorthand
from .terms import parse

__all__ = [
    "build_range_from_token",
    "expand_shorthand",
    "parse",
    "parse_constraint",
    "parse_exact",
    "satisfies",
]
