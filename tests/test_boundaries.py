"""Tests for the bounded lowest/highest search."""

import logging
from itertools import product

import pytest
from semantic_version import Version

from hclsemver.models import SearchBounds
from hclsemver.parsers import parse_constraint
from hclsemver.search import SearchCache, highest, lowest

SMALL_BOUNDS = SearchBounds(max_major=3, max_minor=3, max_patch=3)


def brute_force(expr, bounds):
    """Every release version in the cube accepted by ``expr``, ascending."""
    constraint = parse_constraint(expr)
    return [
        v
        for v in (
            Version(major=m, minor=n, patch=p)
            for m, n, p in product(
                range(bounds.max_major + 1),
                range(bounds.max_minor + 1),
                range(bounds.max_patch + 1),
            )
        )
        if constraint.contains(v)
    ]


class TestHighestLowest:
    """Test boundary search with the default bounds."""

    @pytest.mark.parametrize(
        ("expr", "low", "high"),
        [
            (">=1.0.0,<2.0.0", "1.0.0", "1.50.50"),
            (">=1.2.3", "1.2.3", "20.50.50"),
            ("<3.0.0", "0.0.0", "2.50.50"),
            (">1.2.3, <=1.4.0", "1.2.4", "1.4.0"),
            ("=1.2.3", "1.2.3", "1.2.3"),
            (">=1.0.0,<1.1.0 || >=3.0.0,<3.2.0", "1.0.0", "3.1.50"),
            ("^0.2.3", "0.2.3", "0.2.50"),
            ("1.5.0 || 3.0.0", "1.5.0", "3.0.0"),
            (">=1.0.0, =1.2.3", "1.2.3", "1.2.3"),
            ("=1.0.0-beta", "1.0.0-beta", "1.0.0-beta"),
        ],
    )
    def test_bounds(self, expr, low, high):
        """Test lowest and highest for common shapes."""
        constraint = parse_constraint(expr)
        assert lowest(constraint) == Version(low)
        assert highest(constraint) == Version(high)

    @pytest.mark.parametrize(
        "expr",
        [">=1.0.0,<2.0.0", ">=1.2.3", "<3.0.0", "~1.4.2 || ^7.1.0", ">0.3.9, <=0.4.1"],
    )
    def test_results_satisfy_constraint(self, expr):
        """Test both results are members of the constraint."""
        constraint = parse_constraint(expr)
        assert constraint.contains(lowest(constraint))
        assert constraint.contains(highest(constraint))
        assert lowest(constraint) <= highest(constraint)

    def test_unsatisfiable(self):
        """Test an empty range yields None."""
        constraint = parse_constraint(">=2.0.0, <1.0.0")
        assert lowest(constraint) is None
        assert highest(constraint) is None

    def test_beyond_bounds_is_no_match(self, caplog):
        """Test versions past the ceiling are treated as no match and logged."""
        constraint = parse_constraint(">=25.0.0")
        with caplog.at_level(logging.DEBUG, logger="hclsemver.search.boundaries"):
            assert lowest(constraint) is None
        assert "beyond search bounds" in caplog.text

    def test_custom_bounds(self):
        """Test the search honours a caller-supplied cube."""
        bounds = SearchBounds(max_major=5, max_minor=5, max_patch=5)
        assert highest(parse_constraint(">=1.0.0"), bounds) == Version("5.5.5")


class TestPreReleaseBoundaries:
    """Test boundaries named by pre-release comparators."""

    def test_lowest_is_prerelease_floor(self):
        """Test a pre-release floor is the lowest version."""
        constraint = parse_constraint(">=0.2.0-beta.1, <0.3.0")
        assert lowest(constraint) == Version("0.2.0-beta.1")
        assert highest(constraint) == Version("0.2.50")

    def test_highest_is_prerelease_ceiling(self):
        """Test an inclusive pre-release ceiling is the highest version."""
        constraint = parse_constraint("<=1.2.3-beta")
        assert highest(constraint) == Version("1.2.3-beta")


class TestAgainstBruteForce:
    """Test the staged search agrees with enumerating a small cube."""

    @pytest.mark.parametrize(
        "expr",
        [
            ">1.2.1, <3.1.0",
            "<=2.2 || >=3.3.3",
            ">=0.3.3, <1.0.1",
            "^1.2.3",
            "~0.1",
            "=2.0.0",
            ">3",
            "<0.0.0",
            ">=1.1.1, <=1.1.1 || >=2.3.0, <2.3.2",
            "1.1.1 || 2.3.0",
            ">=1.0.0, =2.2.2",
            "=1.2.3 || >2.2.2, <3.0.1",
        ],
    )
    def test_matches_enumeration(self, expr):
        """Test lowest/highest equal the enumerated extremes."""
        members = brute_force(expr, SMALL_BOUNDS)
        constraint = parse_constraint(expr)
        expected_low = members[0] if members else None
        expected_high = members[-1] if members else None
        assert lowest(constraint, SMALL_BOUNDS) == expected_low
        assert highest(constraint, SMALL_BOUNDS) == expected_high


class TestSearchCache:
    """Test memoisation of comparator checks."""

    def test_repeated_checks_are_cached(self):
        """Test the same comparator/triple pair is stored once."""
        comparators = parse_constraint(">=1.0.0, <2.0.0").branches[0]
        cache = SearchCache()
        assert cache.accepts(comparators, (1, 0, 0))
        assert cache.accepts(comparators, (1, 0, 0))
        assert not cache.accepts(comparators, (2, 0, 0))
        assert len(cache) == 2
