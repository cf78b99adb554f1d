"""
Tests for the generic extrema locator.
"""

import pytest
from datetime import date

from comparison.calculations.extrema import find_extrema, extrema_or_none
from comparison.errors import InsufficientDataError, DegenerateInputError
from comparison.models import AlignedPoint, CorrelationPoint, Extrema


class TestFindExtrema:
    """Tests for find_extrema function."""

    def test_ties_resolve_to_first_occurrence(self):
        """[5, 1, 9, 1, 9] gives min 1 and max 2, not 3/4."""
        result = find_extrema([5, 1, 9, 1, 9])

        assert result == Extrema(min_index=1, max_index=2)

    def test_single_element(self):
        """One value is both minimum and maximum."""
        assert find_extrema([42.0]) == Extrema(0, 0)

    def test_constant_series(self):
        """All-equal series points at the first element."""
        assert find_extrema([3.0, 3.0, 3.0]) == Extrema(0, 0)

    def test_attribute_key(self):
        """Key given as attribute name."""
        aligned = [
            AlignedPoint(date(2025, 1, 1), 100.0, 50.0, 2.0),
            AlignedPoint(date(2025, 1, 2), 90.0, 60.0, 1.5),
            AlignedPoint(date(2025, 1, 3), 120.0, 40.0, 3.0),
        ]

        assert find_extrema(aligned, 'price_a') == Extrema(1, 2)
        assert find_extrema(aligned, 'price_b') == Extrema(2, 1)
        assert find_extrema(aligned, 'ratio') == Extrema(1, 2)

    def test_callable_key(self):
        """Key given as callable."""
        points = [
            CorrelationPoint(date(2025, 1, 1), 0.2),
            CorrelationPoint(date(2025, 1, 2), -0.4),
            CorrelationPoint(date(2025, 1, 3), 0.9),
        ]

        assert find_extrema(points, lambda p: p.correlation) == Extrema(1, 2)

    def test_dict_key(self):
        """Key given as dict key name."""
        rows = [{'v': 2.0}, {'v': 1.0}, {'v': 3.0}]

        assert find_extrema(rows, 'v') == Extrema(1, 2)

    def test_empty_series(self):
        """Empty input has no extrema."""
        with pytest.raises(InsufficientDataError, match="empty"):
            find_extrema([])

    def test_non_finite_value(self):
        """NaN or None values cannot be ranked."""
        with pytest.raises(DegenerateInputError, match="index 1"):
            find_extrema([1.0, float('nan'), 2.0])

        with pytest.raises(DegenerateInputError):
            find_extrema([{'v': 1.0}, {'v': None}], 'v')

    def test_to_dict(self):
        """Extrema serializes to plain ints."""
        assert find_extrema([5, 1, 9]).to_dict() == {'min_index': 1, 'max_index': 2}

    def test_non_numeric_value(self):
        """Strings from the key are degenerate, not a TypeError."""
        with pytest.raises(DegenerateInputError, match="Non-numeric value at index 1"):
            find_extrema([{'v': 1.0}, {'v': 'n/a'}], 'v')


class TestExtremaOrNone:
    """Tests for extrema_or_none function."""

    def test_empty_returns_none(self):
        assert extrema_or_none([]) is None

    def test_non_empty_delegates(self):
        assert extrema_or_none([2, 1]) == Extrema(1, 0)

