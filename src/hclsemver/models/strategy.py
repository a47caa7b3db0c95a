"""Update strategy model."""

from __future__ import annotations

from enum import Enum

from ..errors import UnknownStrategyError


class Strategy(Enum):
    """How the resolved value should be shaped."""

    DYNAMIC = "dynamic"
    EXACT = "exact"
    RANGE = "range"

    @classmethod
    def from_value(cls, value: str | Strategy) -> Strategy:
        """Return the strategy for a member or its case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            known = ", ".join(member.value for member in cls)
            raise UnknownStrategyError(
                f"Unknown strategy '{value}'. Known strategies: {known}"
            ) from exc
