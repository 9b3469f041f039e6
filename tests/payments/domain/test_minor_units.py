"""Tests for major-to-minor unit conversion."""

import pytest
from payments.amounts import to_minor_units


class TestToMinorUnits:
    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (1000.00, 100000),
            (19.999, 2000),
            (0.125, 13),
            (0.005, 1),
            (10.10, 1010),
            (0.29, 29),
        ],
    )
    def test_rounds_half_up(self, amount, expected):
        assert to_minor_units(amount) == expected

    def test_zero_stays_zero(self):
        assert to_minor_units(0) == 0

    def test_none_is_zero(self):
        assert to_minor_units(None) == 0

    def test_fraction_below_half_a_cent_rounds_to_zero(self):
        assert to_minor_units(0.004) == 0

    def test_negative_amount_stays_negative(self):
        assert to_minor_units(-5) == -500
