"""Error types raised by the resolution engine.

Malformed version strings are expected user input, so every failure is an
exception the caller can catch and report rather than a crash.
"""

from __future__ import annotations


class ResolutionError(ValueError):
    """Base error for failures while resolving a version declaration."""


class ParseError(ResolutionError):
    """Raised when a version string cannot be parsed into a term."""

    def __init__(self, message: str, text: str) -> None:
        super().__init__(message)
        self.text = text


class EmptyInputError(ParseError):
    """Raised for blank version strings."""

    def __init__(self, text: str = "") -> None:
        super().__init__("empty version input", text)


class InvalidSyntaxError(ParseError):
    """Raised when a string matches neither the version nor the range grammar."""

    def __init__(self, text: str, reason: str | None = None) -> None:
        message = f"invalid version or range: {text!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, text)


class InvalidShorthandTokenError(ParseError):
    """Raised for a malformed ``~>`` token (empty, or more than three components)."""

    def __init__(self, text: str, token: str, reason: str) -> None:
        super().__init__(f"invalid '~>' token {token!r} in {text!r}: {reason}", text)
        self.token = token


class InvalidTargetForStrategyError(ResolutionError):
    """Raised when a strategy is given a target shape it cannot accept."""

    def __init__(self, strategy: str, target: str) -> None:
        super().__init__(
            f"{strategy} strategy requires an exact version (e.g., '2.1.1'), got: {target}"
        )
        self.strategy = strategy
        self.target = target


class UnknownStrategyError(ResolutionError):
    """Raised when a strategy name is not recognised."""
