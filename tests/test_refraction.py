"""Tests for atmospheric refraction."""

import pytest

from astro_almanac.astronomy.refraction import refraction
from astro_almanac.astronomy.sidereal import DEG


class TestRefraction:
    """Tests for the refraction model."""

    def test_below_model_range(self):
        assert refraction(-3.0 * DEG) == 0.0

    def test_zenith_and_above(self):
        assert refraction(90.0 * DEG) == 0.0
        assert refraction(95.0 * DEG) == 0.0

    def test_closed_form_at_45_degrees(self):
        """About one arc minute at 45 degrees for 1015 hPa and 10 degC."""
        expected = 0.00452 * 1015.0 / 283.0
        assert refraction(45.0 * DEG) == pytest.approx(expected)
        assert refraction(45.0 * DEG) * 60.0 == pytest.approx(0.97, abs=0.01)

    def test_decreases_with_altitude(self):
        values = [refraction(alt * DEG) for alt in (20.0, 30.0, 45.0, 60.0, 89.0)]
        assert values == sorted(values, reverse=True)
        assert all(v > 0.0 for v in values)

    def test_near_horizon(self):
        """Near the horizon the correction is roughly half a degree."""
        value = refraction(0.0)
        assert 0.3 < value < 0.7

    def test_low_altitudes_positive(self):
        for alt in (-1.5, 0.0, 5.0, 10.0, 15.0):
            assert refraction(alt * DEG) > 0.0

    def test_deterministic(self):
        assert refraction(3.0 * DEG) == refraction(3.0 * DEG)
