"""Core resolution entrypoints.

This module MUST NOT touch the filesystem or any document format so it can be
used by any file-rewriting frontend (HCL, YAML, JSON manifests).
"""

from __future__ import annotations

import logging

from .config import Settings
from .errors import ParseError
from .models import DEFAULT_BOUNDS, ResolutionRequest, SearchBounds, Strategy, VersionTerm
from .parsers import parse
from .strategy import resolve_request

logger = logging.getLogger(__name__)


def _parse_existing(existing_literal: str | None) -> VersionTerm | None:
    if existing_literal is None or not existing_literal.strip():
        return None
    try:
        return parse(existing_literal)
    except ParseError as exc:
        logger.debug("Ignoring unparseable existing version %r: %s", existing_literal, exc)
        return None


def build_request(
    strategy: Strategy | str, target_literal: str, existing_literal: str | None = ""
) -> ResolutionRequest:
    """Parse both literals into a ResolutionRequest.

    Raises:
        UnknownStrategyError: If ``strategy`` is not recognised.
        ParseError: If the target cannot be parsed. An unparseable existing
            value is treated as absent instead.
    """
    return ResolutionRequest(
        strategy=Strategy.from_value(strategy),
        target=parse(target_literal),
        target_literal=target_literal,
        existing=_parse_existing(existing_literal),
        existing_literal=existing_literal or "",
    )


def apply_strategy(
    strategy: Strategy | str,
    target_literal: str,
    existing_literal: str | None = "",
    *,
    bounds: SearchBounds = DEFAULT_BOUNDS,
) -> str:
    """Return the version literal to write for one declaration.

    Params:
        strategy: dynamic, exact or range (member or name)
        target_literal: the requested version or range; authoritative
        existing_literal: the value currently declared; "" when there is none
        bounds: search cube used for range boundaries and overlap

    Raises ResolutionError subclasses for an invalid strategy or target.
    """
    request = build_request(strategy, target_literal, existing_literal)
    return resolve_request(request, bounds)


def resolve(
    target_literal: str,
    existing_literal: str | None = "",
    *,
    strategy: Strategy | str | None = None,
    settings: Settings | None = None,
) -> str:
    """Like apply_strategy, with defaults taken from ``settings``."""
    settings = settings or Settings()
    return apply_strategy(
        strategy if strategy is not None else settings.default_strategy,
        target_literal,
        existing_literal,
        bounds=settings.bounds,
    )
