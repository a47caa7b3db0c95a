"""hclsemver version resolution engine.

Decides which version or range literal a dependency declaration should carry
after an update, without ever downgrading what the declaration already allows.
File discovery and rewriting live in the callers.
"""

from __future__ import annotations

from .config import ConfigError, Settings, load_settings
from .core import apply_strategy, build_request, resolve
from .errors import (
    EmptyInputError,
    InvalidShorthandTokenError,
    InvalidSyntaxError,
    InvalidTargetForStrategyError,
    ParseError,
    ResolutionError,
    UnknownStrategyError,
)
from .models import DEFAULT_BOUNDS, ExactTerm, RangeTerm, SearchBounds, Strategy
from .normalize import normalize
from .parsers import expand_shorthand, parse, satisfies
from .search import highest, lowest, overlaps
from .strategy import decide

__all__ = [
    "ConfigError",
    "DEFAULT_BOUNDS",
    "EmptyInputError",
    "ExactTerm",
    "InvalidShorthandTokenError",
    "InvalidSyntaxError",
    "InvalidTargetForStrategyError",
    "ParseError",
    "RangeTerm",
    "ResolutionError",
    "SearchBounds",
    "Settings",
    "Strategy",
    "UnknownStrategyError",
    "apply_strategy",
    "build_request",
    "decide",
    "expand_shorthand",
    "highest",
    "load_settings",
    "lowest",
    "normalize",
    "overlaps",
    "parse",
    "resolve",
    "satisfies",
]
