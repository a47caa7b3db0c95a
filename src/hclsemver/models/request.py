"""Resolution request value object."""

from __future__ import annotations

from dataclasses import dataclass

from .strategy import Strategy
from .version_term import VersionTerm


@dataclass(frozen=True)
class ResolutionRequest:
    """Everything a strategy handler needs for one resolution call.

    ``existing`` is None when there was no prior declaration or when the prior
    literal could not be parsed.
    """

    strategy: Strategy
    target: VersionTerm
    target_literal: str
    existing: VersionTerm | None
    existing_literal: str

    @property
    def has_existing(self) -> bool:
        return self.existing is not None
