"""Tests for the decision table and pre-1.0 handling."""

import logging

import pytest
from semantic_version import Version

from hclsemver.models import ExactTerm, RangeTerm, Strategy
from hclsemver.parsers import parse
from hclsemver.strategy import (
    STRATEGY_HANDLERS,
    collapse_pre_1_0,
    decide,
    floor_of,
    nominal_floor,
    to_range,
)


class TestDecide:
    """Test the existing/target decision table."""

    @pytest.mark.parametrize(
        ("existing", "target", "expected"),
        [
            # exact vs exact
            ("1.2.3", "2.1.0", "2.1.0"),
            ("2.2.1", "2.0.0", "2.2.1"),
            ("3.0.0", "3.0.0", "3.0.0"),
            ("v1.0.0", "1.0.0", "1.0.0"),
            ("1.0.0+build1", "1.0.0+build2", "1.0.0+build2"),
            # exact vs range
            ("1.2.3", ">=1.0.0,<2.0.0", "1.2.3"),
            ("1.2.3", ">=2.0.0,<3.0.0", ">=2.0.0,<3.0.0"),
            ("3.0.0", ">=1.0.0,<2.0.0", "3.0.0"),
            ("1.5.0", ">=1.0.0,<1.2.0 || >=2.0.0,<3.0.0", "1.5.0"),
            # range vs exact
            (">=1.0.0,<2.0.0", "1.2.3", ">=1.0.0,<2.0.0"),
            (">=2.0.0,<3.0.0", "3.5.0", "3.5.0"),
            (">=2.0.0", "1.0.0", ">=2.0.0"),
            # range vs range
            (">=1.0.0,<2.0.0", ">=1.5.0,<1.8.0", ">=1.0.0,<2.0.0"),
            (">=2.0.0,<3.0.0", ">=3.0.0,<4.0.0", ">=3.0.0,<4.0.0"),
            ("~>1.2.0", "^1.5.0", ">=1.2.0, <2.0.0"),
            # single-version comparators
            ("3.0.0", "=2.0.0", "3.0.0"),
            ("1.0.0", "1.5.0 || 3.0.0", "1.5.0 || 3.0.0"),
            (">=1.0.0, =1.2.3", "~1.2", ">=1.0.0, =1.2.3"),
            # target beyond the search bounds
            ("5.70.0", ">=5.60.0, <6.0.0", "5.70.0"),
            (">=5.70.0, <6.0.0", ">=5.60.0, <6.0.0", ">=5.70.0, <6.0.0"),
        ],
    )
    def test_decision_table(self, existing, target, expected):
        """Test each row of the decision table."""
        assert decide(parse(existing), parse(target)) == expected

    def test_unsatisfiable_target_is_adopted_with_warning(self, caplog):
        """Test a target range with no version in bounds is adopted and logged."""
        with caplog.at_level(logging.WARNING, logger="hclsemver.strategy"):
            assert decide(parse("1.0.0"), parse(">=30.0.0")) == ">=30.0.0"
        assert "no version within search bounds" in caplog.text


class TestPreOneZero:
    """Test handling of versions below 1.0.0."""

    @pytest.mark.parametrize(
        ("existing", "target", "expected"),
        [
            ("0.5.0", ">=0.2.0, <0.3.0", "0.5.0"),
            ("0.1.0", ">=0.2.0, <0.3.0", "0.2.0"),
            (">=0.3.0, <0.4.0", "~>0.2", ">=0.3.0, <0.4.0"),
            ("0.50.0", "1.0.0", "1.0.0"),
            ("0.1.0", "0.2.0-beta.1+exp.sha.5114f85", "0.2.0-beta.1+exp.sha.5114f85"),
        ],
    )
    def test_decide(self, existing, target, expected):
        """Test pre-1.0 targets are compared as exact versions."""
        assert decide(parse(existing), parse(target)) == expected

    def test_collapse_range_to_lowest(self):
        """Test a 0.x range collapses to its lowest member."""
        term = collapse_pre_1_0(parse("^0.2.3"))
        assert isinstance(term, ExactTerm)
        assert term.version == Version("0.2.3")
        assert term.literal == "0.2.3"

    def test_collapse_keeps_prerelease_floor(self):
        """Test a pre-release floor survives collapsing."""
        term = collapse_pre_1_0(parse(">=0.2.0-beta.1, <0.3.0"))
        assert term.literal == "0.2.0-beta.1"

    def test_collapse_leaves_post_1_0_ranges(self):
        """Test ranges reaching 1.0.0 or above are not collapsed."""
        term = parse(">=0.9.0, <2.0.0")
        assert collapse_pre_1_0(term) is term


class TestToRange:
    """Test widening of exact versions."""

    def test_widens_to_next_major(self):
        """Test X.Y.Z becomes >=X.Y.Z, <X+1.0.0."""
        term = to_range(parse("2.3.4"))
        assert isinstance(term, RangeTerm)
        assert term.literal == ">=2.3.4, <3.0.0"
        assert term.constraint.contains(Version("2.99.0"))
        assert not term.constraint.contains(Version("3.0.0"))

    def test_pre_1_0_stays_exact(self):
        """Test 0.x versions are never widened."""
        term = parse("0.4.0")
        assert to_range(term) is term


class TestHandlerRegistry:
    """Test every strategy has a handler."""

    def test_all_strategies_registered(self):
        """Test STRATEGY_HANDLERS covers the Strategy enum."""
        assert set(STRATEGY_HANDLERS) == set(Strategy)


class TestFloors:
    """Test floors used for backward protection."""

    @pytest.mark.parametrize(
        ("expr", "expected"),
        [
            (">=5.70.0, <6.0.0", "5.70.0"),
            ("<2.0.0", "0.0.0"),
            (">1.2.0, =1.4.0 || >=1.3.0", "1.3.0"),
        ],
    )
    def test_nominal_floor(self, expr, expected):
        """Test the floor read from comparator versions."""
        assert nominal_floor(parse(expr).constraint) == Version(expected)

    def test_floor_of_falls_back_beyond_bounds(self):
        """Test a range outside the cube still reports its declared floor."""
        assert floor_of(parse(">=5.70.0, <6.0.0")) == Version("5.70.0")
        assert floor_of(parse(">=1.0.0, =1.2.3")) == Version("1.2.3")
