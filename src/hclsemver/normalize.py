"""Canonical spacing for version and range strings."""

from __future__ import annotations

import re

_TOKEN_RE = re.compile(r"\s*(?P<op>~>|>=|<=|==|=|>|<|\^|~)?\s*(?P<ver>[^\s,<>=^~|]+)\s*")
_HYPHEN_RE = re.compile(r"^(?P<low>\S+)\s+-\s+(?P<high>\S+)$")

# Comparators rendered with a single space before their version.
_SPACED_OPERATORS = {">=", "<=", ">", "<", "~>"}


def _render_tokens(part: str) -> list[str] | None:
    tokens: list[str] = []
    pos = 0
    while pos < len(part):
        match = _TOKEN_RE.match(part, pos)
        if not match or match.end() == pos:
            return None
        op = match.group("op") or ""
        separator = " " if op in _SPACED_OPERATORS else ""
        tokens.append(f"{op}{separator}{match.group('ver')}")
        pos = match.end()
    return tokens


def _normalize_branch(branch: str) -> str:
    items: list[str] = []
    for part in branch.split(","):
        part = part.strip()
        if not part:
            continue
        hyphen = _HYPHEN_RE.match(part)
        if hyphen:
            items.append(f"{hyphen.group('low')} - {hyphen.group('high')}")
            continue
        tokens = _render_tokens(part)
        if tokens is None:
            items.append("".join(part.split()))
        else:
            items.extend(tokens)
    return ", ".join(items)


def normalize(version: str) -> str:
    """Return ``version`` with canonical separators.

    ``">=1.0.0,<2.0.0"`` and ``">=  1.0.0 ,< 2.0.0"`` both become
    ``">= 1.0.0, < 2.0.0"``; OR-branches are joined with ``" || "``.
    Operators and version tokens are never rewritten.
    """
    branches = [_normalize_branch(branch) for branch in version.split("||")]
    return " || ".join(branches).strip()
