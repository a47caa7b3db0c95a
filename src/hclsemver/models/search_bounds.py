"""Bounded search space used by the boundary finder and overlap detector."""

from __future__ import annotations

from dataclasses import dataclass

from semantic_version import Version


@dataclass(frozen=True)
class SearchBounds:
    """Inclusive ceiling of the major/minor/patch cube that gets searched.

    Any version outside ``0.0.0 ..= max_major.max_minor.max_patch`` is invisible
    to the search routines.
    """

    max_major: int = 20
    max_minor: int = 50
    max_patch: int = 50

    def __post_init__(self) -> None:
        for name in ("max_major", "max_minor", "max_patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer")
            if value < 0:
                raise ValueError(f"{name} must be non-negative")

    @property
    def ceiling(self) -> Version:
        return Version(major=self.max_major, minor=self.max_minor, patch=self.max_patch)

    def covers(self, version: Version) -> bool:
        """Return True if every numeric component lies inside the cube."""
        return (
            version.major <= self.max_major
            and version.minor <= self.max_minor
            and version.patch <= self.max_patch
        )

    def to_dict(self) -> dict[str, int]:
        return {
            "max_major": self.max_major,
            "max_minor": self.max_minor,
            "max_patch": self.max_patch,
        }


DEFAULT_BOUNDS = SearchBounds()
