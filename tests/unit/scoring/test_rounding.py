"""Tests for shared rounding helpers."""

from __future__ import annotations

import pytest

from jobprep_agents.scoring.rounding import round_half_up, safe_percent


@pytest.mark.unit
class TestRoundHalfUp:
    """Test round_half_up."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (3.5, 4), (2.49, 2), (66.7, 67), (0.0, 0), (-2.5, -2)],
    )
    def test_half_goes_up(self, value: float, expected: int) -> None:
        """.5 always rounds toward positive infinity."""
        assert round_half_up(value) == expected


@pytest.mark.unit
class TestSafePercent:
    """Test safe_percent."""

    def test_zero_denominator(self) -> None:
        """Dividing by zero yields 0."""
        assert safe_percent(3, 0) == 0.0

    def test_ratio(self) -> None:
        """Returns a percentage."""
        assert safe_percent(1, 4) == 25.0
