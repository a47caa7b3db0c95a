"""Expansion of the Terraform-style pessimistic operator ``~>``.

``~>X[.Y[.Z]]`` becomes ``>=X.Y.Z, <(X+1).0.0``; missing components default
to 0. Expansion happens before range parsing so the range grammar never sees
``~>``.
"""

from __future__ import annotations

import re

from ..errors import InvalidShorthandTokenError

TILDE_ARROW = "~>"

_TOKEN_RE = re.compile(r"~>\s*(?P<token>[^\s,|]*)")
_NUMBER_RE = re.compile(r"[0-9]+")


def build_range_from_token(token: str, text: str | None = None) -> str:
    """Return the explicit range for a single ``~>`` operand.

    ``text`` is the full expression, used for error messages only.
    """
    source = text if text is not None else f"{TILDE_ARROW}{token}"
    token = token.strip()
    if not token:
        raise InvalidShorthandTokenError(source, token, "missing version")

    parts = token[1:].split(".") if token.startswith("v") else token.split(".")
    if len(parts) > 3:
        raise InvalidShorthandTokenError(source, token, "more than three components")
    if not all(_NUMBER_RE.fullmatch(part) for part in parts):
        raise InvalidShorthandTokenError(
            source, token, "components must be non-negative integers"
        )

    major, minor, patch = (int(part) for part in parts + ["0"] * (3 - len(parts)))
    return f">={major}.{minor}.{patch}, <{major + 1}.0.0"


def expand_shorthand(text: str) -> str:
    """Replace every ``~>`` token in ``text`` with its explicit range."""
    if TILDE_ARROW not in text:
        return text

    expanded = [
        _TOKEN_RE.sub(lambda m: build_range_from_token(m.group("token"), text), part.strip())
        for part in text.split("||")
    ]
    return " || ".join(expanded)
