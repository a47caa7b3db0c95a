"""Turn a raw declaration string into a VersionTerm."""

from __future__ import annotations

from ..errors import EmptyInputError, InvalidSyntaxError
from ..models import ExactTerm, RangeTerm, VersionTerm
from .semver import parse_constraint, parse_exact
from .shorthand import expand_shorthand


def parse(text: str) -> VersionTerm:
    """Parse ``text`` as an exact version, falling back to a range constraint.

    Raises:
        EmptyInputError: If ``text`` is blank.
        InvalidShorthandTokenError: If a ``~>`` token is malformed.
        InvalidSyntaxError: If neither grammar accepts the text.
    """
    if text is None or not text.strip():
        raise EmptyInputError(text or "")

    literal = text.strip()
    try:
        return ExactTerm(version=parse_exact(literal), literal=literal)
    except ValueError:
        pass

    expanded = expand_shorthand(literal)
    try:
        constraint = parse_constraint(expanded)
    except ValueError as exc:
        raise InvalidSyntaxError(text, str(exc)) from exc
    return RangeTerm(constraint=constraint, literal=expanded)
