"""Tests for deal_advisor.utils.numeric."""

from __future__ import annotations

import math

import pytest

from deal_advisor.utils.numeric import clamp, round_half_up


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, ndigits, expected",
        [
            (2.5, 0, 3.0),
            (3.5, 0, 4.0),
            (-2.5, 0, -2.0),
            (65.87, 0, 66.0),
            (1.25, 1, 1.3),
            (1.2121, 1, 1.2),
            (114.996, 2, 115.0),
        ],
    )
    def test_values(self, value, ndigits, expected):
        assert round_half_up(value, ndigits) == pytest.approx(expected)

    def test_differs_from_bankers_rounding(self):
        assert round(2.5) == 2
        assert round_half_up(2.5) == 3.0

    def test_non_finite_passthrough(self):
        assert math.isinf(round_half_up(math.inf))
        assert math.isnan(round_half_up(math.nan))


class TestClamp:
    def test_inside(self):
        assert clamp(50.0, 0.0, 100.0) == 50.0

    def test_below(self):
        assert clamp(-5.0, 0.0, 100.0) == 0.0

    def test_above(self):
        assert clamp(120.0, 0.0, 100.0) == 100.0
