"""Tests for slot-indexed rainbow colours."""

import math

import pytest

from attractorscope.engine.colors import color_for


class TestColorFor:
    def test_slot_zero(self):
        r, g, b = color_for(0, 100)
        assert r == pytest.approx(0.5)
        assert g == pytest.approx(math.sin(2 * math.pi / 3) * 0.5 + 0.5)
        assert b == pytest.approx(math.sin(4 * math.pi / 3) * 0.5 + 0.5)

    def test_quarter_cycle_is_red_peak(self):
        r, _, _ = color_for(25, 100)
        assert r == pytest.approx(1.0)

    def test_channels_in_unit_range(self):
        for i in range(0, 1000, 7):
            for c in color_for(i, 1000):
                assert 0.0 <= c <= 1.0

    @pytest.mark.parametrize("i", [0, 1, 17, 99, 250])
    def test_periodic_in_capacity(self, i):
        assert color_for(i + 100, 100) == pytest.approx(color_for(i, 100), abs=1e-12)

    def test_deterministic(self):
        assert color_for(42, 10000) == color_for(42, 10000)

